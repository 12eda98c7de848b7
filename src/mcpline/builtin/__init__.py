"""Engines shipped with mcpline."""
