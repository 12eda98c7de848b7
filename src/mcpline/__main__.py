"""mcpline CLI bootstrap."""

from mcpline.cli import app

if __name__ == "__main__":
    app()
