"""Command line entry points."""

from __future__ import annotations

from pathlib import Path

import typer
from loguru import logger

from mcpline.config import load_settings
from mcpline.errors import ConfigurationError
from mcpline.logging_utils import configure_logging
from mcpline.plugins import create_plugin_manager, engine_names, load_engine
from mcpline.protocol import MessageReader, MessageWriter
from mcpline.session import SessionLoop

app = typer.Typer(
    name="mcpline",
    help="Drive a tool-using agent over newline-delimited JSON on stdio.",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    engine: str | None = typer.Option(None, "--engine", "-e", help="Engine plugin name"),
    model: str | None = typer.Option(None, "--model", "-m", help="Model to use, e.g. ollama:qwen2.5:3b"),
    config_file: Path | None = typer.Option(None, "--config-file", help="Engine configuration file"),  # noqa: B008
    system_prompt: str | None = typer.Option(None, "--system-prompt", help="Override the engine's system prompt"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Write logs here (truncated) instead of stderr"),  # noqa: B008
    strict_approval: bool = typer.Option(False, "--strict-approval", help="Wait for an explicit allow or deny"),
    emit_errors: bool = typer.Option(False, "--emit-errors", help="Send an error message on fatal engine failures"),
) -> None:
    """Without a subcommand, serve one session on stdin/stdout."""

    if ctx.invoked_subcommand is not None:
        return
    _serve(
        engine=engine,
        model=model,
        config_file=config_file,
        system_prompt=system_prompt,
        debug=debug,
        log_file=log_file,
        strict_approval=strict_approval,
        emit_errors=emit_errors,
    )


@app.command()
def serve(
    engine: str | None = typer.Option(None, "--engine", "-e", help="Engine plugin name"),
    model: str | None = typer.Option(None, "--model", "-m", help="Model to use, e.g. ollama:qwen2.5:3b"),
    config_file: Path | None = typer.Option(None, "--config-file", help="Engine configuration file"),  # noqa: B008
    system_prompt: str | None = typer.Option(None, "--system-prompt", help="Override the engine's system prompt"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Write logs here (truncated) instead of stderr"),  # noqa: B008
    strict_approval: bool = typer.Option(False, "--strict-approval", help="Wait for an explicit allow or deny"),
    emit_errors: bool = typer.Option(False, "--emit-errors", help="Send an error message on fatal engine failures"),
) -> None:
    """Run one session on stdin/stdout until the client quits."""

    _serve(
        engine=engine,
        model=model,
        config_file=config_file,
        system_prompt=system_prompt,
        debug=debug,
        log_file=log_file,
        strict_approval=strict_approval,
        emit_errors=emit_errors,
    )


def _serve(
    *,
    engine: str | None,
    model: str | None,
    config_file: Path | None,
    system_prompt: str | None,
    debug: bool,
    log_file: Path | None,
    strict_approval: bool,
    emit_errors: bool,
) -> None:
    settings = load_settings(
        engine=engine,
        model=model,
        config_file=config_file,
        system_prompt=system_prompt,
        debug=debug or None,
        log_file=log_file,
        strict_approval=strict_approval or None,
        emit_errors=emit_errors or None,
    )
    configure_logging(level=settings.effective_log_level, log_file=settings.log_file, profile=settings.log_profile)
    logger.debug("serve.settings {}", settings.model_dump())

    try:
        agent_engine = load_engine(settings)
    except ConfigurationError as exc:
        logger.error("serve.engine_unavailable error={}", exc)
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    loop = SessionLoop(
        agent_engine,
        MessageReader(typer.get_binary_stream("stdin"), chunk_size=settings.read_chunk_size),
        MessageWriter(typer.get_binary_stream("stdout")),
        strict_approval=settings.strict_approval,
        emit_errors=settings.emit_errors,
    )
    try:
        loop.run()
    except Exception as exc:
        logger.opt(exception=exc).error("serve.fatal error={}", exc)
        raise typer.Exit(1) from exc


@app.command("engines")
def list_engines() -> None:
    """Show the engine names provided by installed plugins."""

    names = engine_names(create_plugin_manager())
    if not names:
        typer.echo("(no engines)")
        return
    for name in names:
        typer.echo(name)
