"""Agent engine capability interface.

The engine performs inference and tool execution. It is driven through a
single ``invoke`` per prompt and reports progress through three callbacks.
Engines must not have more than one callback outstanding at a time for a
given invocation: each callback returns before the next one starts.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Mapping
from typing import Any, Protocol, TypeAlias

from mcpline.errors import EngineCanceledError

ToolArgs: TypeAlias = str | Mapping[str, Any]


class EngineCallbacks(Protocol):
    """Hooks an engine calls while running one prompt."""

    def on_tool_call(self, name: str, args: ToolArgs) -> None:
        """Called before a tool runs. Blocks until the call is approved or denied."""

    def on_tool_result(self, name: str, args: ToolArgs, result: str, is_error: bool) -> None:
        """Called once per tool call after it finished, failed or was canceled."""

    def on_chunk(self, text: str) -> None:
        """Called for every fragment of streamed output."""


class AgentEngine(Protocol):
    """Minimal contract for engine providers."""

    def invoke(self, prompt: str, callbacks: EngineCallbacks, cancel: CancelToken) -> None:
        """Run one prompt to completion. Raises on failure."""

    def close(self) -> None:
        """Release the engine resource."""


class CancelToken:
    """Cooperative cancellation signal for one engine invocation."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str = "canceled") -> None:
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise EngineCanceledError(self._reason or "canceled")


def format_tool_args(args: ToolArgs) -> str:
    if isinstance(args, str):
        return args
    return ", ".join(f"{key}={json.dumps(value, ensure_ascii=False)}" for key, value in args.items())


def format_tool_call(name: str, args: ToolArgs) -> str:
    """Human readable description shown to the approver."""

    return f"Run tool: {name} with args: {format_tool_args(args)}"
