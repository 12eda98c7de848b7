from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable, Iterable
from typing import TypeAlias

import pytest

from mcpline.engine import CancelToken, EngineCallbacks
from mcpline.errors import TransportClosedError
from mcpline.protocol.message import Message, MessageKind


class Trace:
    """Shared log of inbound reads and outbound sends, in observed order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, MessageKind]] = []


class ScriptedSource:
    def __init__(self, messages: Iterable[Message], trace: Trace | None = None) -> None:
        self._messages = deque(messages)
        self._trace = trace
        self.reads = 0

    def receive(self) -> Message:
        self.reads += 1
        if not self._messages:
            raise TransportClosedError("script exhausted")
        message = self._messages.popleft()
        if self._trace is not None:
            self._trace.events.append(("in", message.kind))
        return message


class RecordingSink:
    def __init__(self, trace: Trace | None = None) -> None:
        self.messages: list[Message] = []
        self._trace = trace

    def send(self, message: Message) -> None:
        self.messages.append(message)
        if self._trace is not None:
            self._trace.events.append(("out", message.kind))

    @property
    def kinds(self) -> list[MessageKind]:
        return [message.kind for message in self.messages]


EngineScript: TypeAlias = Callable[[str, EngineCallbacks, CancelToken], None]


class FakeEngine:
    def __init__(self, script: EngineScript | None = None, *, threaded: bool = False) -> None:
        self._script = script
        self._threaded = threaded
        self.prompts: list[str] = []
        self.closed = False

    def invoke(self, prompt: str, callbacks: EngineCallbacks, cancel: CancelToken) -> None:
        self.prompts.append(prompt)
        if self._script is None:
            return
        if not self._threaded:
            self._script(prompt, callbacks, cancel)
            return

        errors: list[BaseException] = []

        def _worker() -> None:
            try:
                self._script(prompt, callbacks, cancel)
            except BaseException as exc:
                errors.append(exc)

        worker = threading.Thread(target=_worker, name="fake-engine")
        worker.start()
        worker.join()
        if errors:
            raise errors[0]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def trace() -> Trace:
    return Trace()


@pytest.fixture
def make_source() -> type[ScriptedSource]:
    return ScriptedSource


@pytest.fixture
def make_sink() -> type[RecordingSink]:
    return RecordingSink


@pytest.fixture
def make_engine() -> type[FakeEngine]:
    return FakeEngine
