"""One prompt driven through the agent engine."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from loguru import logger

from mcpline.engine import AgentEngine, CancelToken, ToolArgs, format_tool_call
from mcpline.errors import TransportError
from mcpline.protocol.message import Message, MessageKind
from mcpline.session.gate import Decision, MessageSink, MessageSource, ToolApprovalGate


@dataclass
class TurnState:
    """Per-prompt state shared by the three engine callbacks."""

    prompt: str
    cancel: CancelToken = field(default_factory=CancelToken)
    canceled: bool = False
    tool_calls: int = 0
    results: Counter[MessageKind] = field(default_factory=Counter)
    chunks: int = 0
    fatal: TransportError | None = None

    def request_cancel(self, reason: str) -> None:
        self.canceled = True
        self.cancel.cancel(reason)


@dataclass(frozen=True)
class TurnOutcome:
    """Summary of one completed prompt."""

    canceled: bool
    tool_calls: int
    results: dict[MessageKind, int]
    chunks: int


class _TurnCallbacks:
    """Engine callbacks bound to one TurnState."""

    def __init__(self, state: TurnState, gate: ToolApprovalGate, sink: MessageSink) -> None:
        self._state = state
        self._gate = gate
        self._sink = sink

    def on_tool_call(self, name: str, args: ToolArgs) -> None:
        self._state.tool_calls += 1
        description = format_tool_call(name, args)
        logger.info("turn.tool_call name={}", name)
        try:
            decision = self._gate.request(description)
        except TransportError as exc:
            self._fail(exc)
            raise
        if decision is Decision.DENY:
            self._state.request_cancel(f"tool denied: {name}")

    def on_tool_result(self, name: str, args: ToolArgs, result: str, is_error: bool) -> None:
        if is_error:
            kind = MessageKind.TOOL_RESULT_FAILED
        elif self._state.canceled:
            kind = MessageKind.TOOL_RESULT_CANCELED
        else:
            kind = MessageKind.TOOL_RESULT_OK
        logger.info("turn.tool_result name={} status={}", name, kind.value)
        self._state.results[kind] += 1
        self._emit(Message.tool_result(kind, name))

    def on_chunk(self, text: str) -> None:
        self._state.chunks += 1
        self._emit(Message.chunk(text))

    def _emit(self, message: Message) -> None:
        try:
            self._sink.send(message)
        except TransportError as exc:
            self._fail(exc)
            raise

    def _fail(self, exc: TransportError) -> None:
        if self._state.fatal is None:
            self._state.fatal = exc
        self._state.cancel.cancel(f"transport failure: {exc}")


class PromptTurnController:
    """Runs one prompt and turns engine callbacks into protocol messages."""

    def __init__(
        self,
        engine: AgentEngine,
        source: MessageSource,
        sink: MessageSink,
        *,
        strict_approval: bool = False,
    ) -> None:
        self._engine = engine
        self._sink = sink
        self._gate = ToolApprovalGate(source, sink, strict=strict_approval)

    def run_prompt(self, prompt: str) -> TurnOutcome:
        """Drive the engine for one prompt.

        An engine failure is re-raised unless the turn was canceled by a deny
        decision, in which case the failure is the expected way the engine
        stops. A transport failure inside a callback is always re-raised.
        """

        state = TurnState(prompt=prompt)
        callbacks = _TurnCallbacks(state, self._gate, self._sink)
        logger.info("turn.start prompt_chars={}", len(prompt))
        try:
            self._engine.invoke(prompt, callbacks, state.cancel)
        except Exception as exc:
            if state.fatal is not None and exc is not state.fatal:
                raise state.fatal from exc
            if state.fatal is not None or not state.canceled:
                raise
            logger.info("turn.canceled error={!r}", exc)
        if state.fatal is not None:
            raise state.fatal

        logger.info(
            "turn.finish canceled={} tool_calls={} chunks={}",
            state.canceled,
            state.tool_calls,
            state.chunks,
        )
        return TurnOutcome(
            canceled=state.canceled,
            tool_calls=state.tool_calls,
            results=dict(state.results),
            chunks=state.chunks,
        )
