"""Builtin echo engine.

Streams the prompt back word by word. A prompt starting with ``,`` is a tool
call: ``,echo text=hi`` asks for approval to run the ``echo`` tool with
``{"text": "hi"}`` and streams the tool's output when it is allowed.
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any, TypeAlias

from mcpline.config import Settings
from mcpline.engine import CancelToken, EngineCallbacks
from mcpline.errors import EngineCanceledError
from mcpline.hookspecs import hookimpl

ENGINE_NAME = "echo"
WORD_RE = re.compile(r"\S+\s*|\s+")

Tool: TypeAlias = Callable[[Mapping[str, Any]], str]


def _echo_tool(args: Mapping[str, Any]) -> str:
    return " ".join(str(value) for value in args.values())


def _now_tool(args: Mapping[str, Any]) -> str:
    _ = args
    return datetime.now(UTC).isoformat()


BUILTIN_TOOLS: dict[str, Tool] = {"echo": _echo_tool, "now": _now_tool}


def split_words(text: str) -> list[str]:
    return WORD_RE.findall(text)


def parse_tool_command(prompt: str) -> tuple[str, dict[str, str]] | None:
    """Parse ``,name key=value ...``. Returns None when the prompt is not a command."""

    stripped = prompt.strip()
    if not stripped.startswith(","):
        return None
    try:
        words = shlex.split(stripped[1:])
    except ValueError:
        return None
    if not words:
        return None
    name, tokens = words[0], words[1:]
    args: dict[str, str] = {}
    for index, token in enumerate(tokens):
        key, sep, value = token.partition("=")
        if sep:
            args[key] = value
        else:
            args[f"arg{index}"] = token
    return name, args


class EchoEngine:
    def __init__(self, tools: Mapping[str, Tool] | None = None) -> None:
        self._tools = dict(BUILTIN_TOOLS if tools is None else tools)
        self.closed = False

    def invoke(self, prompt: str, callbacks: EngineCallbacks, cancel: CancelToken) -> None:
        if self.closed:
            raise RuntimeError("engine is closed")
        command = parse_tool_command(prompt)
        if command is None:
            self._stream(prompt, callbacks, cancel)
            return

        name, args = command
        callbacks.on_tool_call(name, args)
        if cancel.cancelled:
            callbacks.on_tool_result(name, args, "", False)
            raise EngineCanceledError(cancel.reason or "canceled")

        tool = self._tools.get(name)
        if tool is None:
            callbacks.on_tool_result(name, args, f"unknown tool: {name}", True)
            return
        try:
            output = tool(args)
        except Exception as exc:
            callbacks.on_tool_result(name, args, str(exc), True)
            return
        callbacks.on_tool_result(name, args, output, False)
        self._stream(output, callbacks, cancel)

    def close(self) -> None:
        self.closed = True

    @staticmethod
    def _stream(text: str, callbacks: EngineCallbacks, cancel: CancelToken) -> None:
        for word in split_words(text):
            cancel.raise_if_cancelled()
            callbacks.on_chunk(word)


class EchoEnginePlugin:
    @hookimpl
    def provide_engine(self, name: str, settings: Settings) -> EchoEngine | None:
        if name != ENGINE_NAME:
            return None
        _ = settings
        return EchoEngine()

    @hookimpl
    def engine_names(self) -> list[str]:
        return [ENGINE_NAME]

    @hookimpl
    def engine_requires_model(self, name: str) -> bool | None:
        return False if name == ENGINE_NAME else None


plugin = EchoEnginePlugin()
