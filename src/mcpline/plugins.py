"""Engine discovery through pluggy."""

from __future__ import annotations

import pluggy
from loguru import logger

from mcpline.builtin import echo
from mcpline.config import Settings
from mcpline.engine import AgentEngine
from mcpline.errors import EngineNotFoundError, ModelNotConfiguredError
from mcpline.hookspecs import MCPLINE_HOOK_NAMESPACE, McplineHookSpecs

ENTRY_POINT_GROUP = "mcpline"


def create_plugin_manager(*, load_entrypoints: bool = True) -> pluggy.PluginManager:
    """Plugin manager with the builtin engines and any installed entry points."""

    manager = pluggy.PluginManager(MCPLINE_HOOK_NAMESPACE)
    manager.add_hookspecs(McplineHookSpecs)
    manager.register(echo.plugin, name="builtin:echo")
    if load_entrypoints:
        loaded = manager.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        if loaded:
            logger.debug("plugins.entrypoints_loaded count={}", loaded)
    return manager


def engine_names(manager: pluggy.PluginManager) -> list[str]:
    names: set[str] = set()
    for provided in manager.hook.engine_names():
        names.update(provided or [])
    return sorted(names)


def load_engine(settings: Settings, manager: pluggy.PluginManager | None = None) -> AgentEngine:
    """Resolve ``settings.engine`` to an engine instance."""

    manager = manager or create_plugin_manager()
    if not settings.model and manager.hook.engine_requires_model(name=settings.engine):
        raise ModelNotConfiguredError(f"model must be set for engine {settings.engine!r}")
    engine = manager.hook.provide_engine(name=settings.engine, settings=settings)
    if engine is None:
        available = ", ".join(engine_names(manager)) or "<none>"
        raise EngineNotFoundError(f"no plugin provides engine {settings.engine!r} (available: {available})")
    logger.info("plugins.engine name={} type={}", settings.engine, type(engine).__name__)
    return engine
