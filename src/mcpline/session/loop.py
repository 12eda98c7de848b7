"""Top-level ready/prompt/quit turn-taking."""

from __future__ import annotations

from enum import StrEnum

from loguru import logger

from mcpline.engine import AgentEngine
from mcpline.errors import TransportError
from mcpline.protocol.message import Message, MessageKind
from mcpline.session.gate import MessageSink, MessageSource
from mcpline.session.turn import PromptTurnController


class SessionState(StrEnum):
    AWAITING_TURN = "awaiting_turn"
    READING_DECISION = "reading_decision"
    TERMINATED = "terminated"


class SessionLoop:
    """Owns the session cursor and drives one prompt turn per ``prompt``.

    ``ready`` is sent exactly once per turn. Unexpected kinds while waiting
    for a decision are logged and skipped without resending ``ready``.
    Read failures and non-canceled engine failures end the session; the
    engine is closed on every exit path.
    """

    def __init__(
        self,
        engine: AgentEngine,
        source: MessageSource,
        sink: MessageSink,
        *,
        strict_approval: bool = False,
        emit_errors: bool = False,
    ) -> None:
        self._engine = engine
        self._source = source
        self._sink = sink
        self._emit_errors = emit_errors
        self._controller = PromptTurnController(engine, source, sink, strict_approval=strict_approval)
        self.state = SessionState.AWAITING_TURN
        self.turns = 0

    def run(self) -> None:
        try:
            while self.state is not SessionState.TERMINATED:
                self._step()
        finally:
            self.state = SessionState.TERMINATED
            logger.info("session.close turns={}", self.turns)
            self._engine.close()

    def _step(self) -> None:
        if self.state is SessionState.AWAITING_TURN:
            self._sink.send(Message.ready())
            self.state = SessionState.READING_DECISION

        message = self._source.receive()
        match message.kind:
            case MessageKind.QUIT:
                logger.info("session.quit")
                self.state = SessionState.TERMINATED
            case MessageKind.PROMPT:
                self._run_turn(message.content)
                self.state = SessionState.AWAITING_TURN
            case _:
                logger.warning("session.unexpected kind={} expected=prompt|quit", message.kind.value)

    def _run_turn(self, prompt: str) -> None:
        self.turns += 1
        try:
            self._controller.run_prompt(prompt)
        except TransportError:
            raise
        except Exception as exc:
            if self._emit_errors:
                self._sink.send(Message.error(f"{type(exc).__name__}: {exc}"))
            raise
