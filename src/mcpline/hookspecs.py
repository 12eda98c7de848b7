"""Pluggy hook namespace and engine provider specifications."""

from __future__ import annotations

import pluggy

from mcpline.config import Settings
from mcpline.engine import AgentEngine

MCPLINE_HOOK_NAMESPACE = "mcpline"
hookspec = pluggy.HookspecMarker(MCPLINE_HOOK_NAMESPACE)
hookimpl = pluggy.HookimplMarker(MCPLINE_HOOK_NAMESPACE)


class McplineHookSpecs:
    """Hook contract for engine providers."""

    @hookspec(firstresult=True)
    def provide_engine(self, name: str, settings: Settings) -> AgentEngine | None:
        """Build the engine called ``name``, or return None if not provided here."""

    @hookspec
    def engine_names(self) -> list[str]:
        """Names of the engines this plugin can provide."""

    @hookspec(firstresult=True)
    def engine_requires_model(self, name: str) -> bool | None:
        """Whether engine ``name`` refuses to start without ``settings.model``."""
