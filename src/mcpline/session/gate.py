"""Synchronous tool approval rendezvous."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from loguru import logger

from mcpline.errors import ConcurrentApprovalError
from mcpline.protocol.message import Message, MessageKind


class MessageSource(Protocol):
    def receive(self) -> Message: ...


class MessageSink(Protocol):
    def send(self, message: Message) -> None: ...


class Decision(StrEnum):
    ALLOW = "allow"
    DENY = "deny"
    UNDECIDED = "undecided"


@dataclass(frozen=True)
class PendingToolRequest:
    """A confirm-tool-run that has been sent and not yet answered."""

    description: str


class ToolApprovalGate:
    """Sends ``confirm-tool-run`` and blocks on the client's reply.

    Only ``allow-tool-run`` and ``deny-tool-run`` are decisions. In lenient
    mode any other message ends the wait as ``UNDECIDED`` and the caller
    lets the tool run; in strict mode the gate keeps reading until a
    decision arrives. Transport errors propagate to the caller.
    """

    def __init__(self, source: MessageSource, sink: MessageSink, *, strict: bool = False) -> None:
        self._source = source
        self._sink = sink
        self._strict = strict
        self._lock = threading.Lock()
        self._pending: PendingToolRequest | None = None

    @property
    def pending(self) -> PendingToolRequest | None:
        return self._pending

    def request(self, description: str) -> Decision:
        if not self._lock.acquire(blocking=False):
            outstanding = self._pending.description if self._pending else "<unknown>"
            raise ConcurrentApprovalError(f"approval already pending for: {outstanding}")
        try:
            self._pending = PendingToolRequest(description)
            self._sink.send(Message.confirm_tool_run(description))
            return self._await_decision()
        finally:
            self._pending = None
            self._lock.release()

    def _await_decision(self) -> Decision:
        while True:
            reply = self._source.receive()
            if reply.kind is MessageKind.ALLOW_TOOL_RUN:
                logger.debug("gate.allow")
                return Decision.ALLOW
            if reply.kind is MessageKind.DENY_TOOL_RUN:
                logger.info("gate.deny")
                return Decision.DENY
            logger.warning("gate.unexpected kind={} expected=allow-tool-run|deny-tool-run", reply.kind.value)
            if not self._strict:
                return Decision.UNDECIDED
