"""Message envelope exchanged between client and agent."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Direction = Literal["inbound", "outbound"]


class MessageKind(StrEnum):
    """Closed set of message kinds; the value is the wire string."""

    READY = "ready"
    CHUNK = "chunk"
    CONFIRM_TOOL_RUN = "confirm-tool-run"
    TOOL_RESULT_OK = "tool-result-ok"
    TOOL_RESULT_FAILED = "tool-result-failed"
    TOOL_RESULT_CANCELED = "tool-result-canceled"
    ERROR = "error"

    PROMPT = "prompt"
    QUIT = "quit"
    ALLOW_TOOL_RUN = "allow-tool-run"
    DENY_TOOL_RUN = "deny-tool-run"

    @property
    def direction(self) -> Direction:
        return "inbound" if self in _INBOUND else "outbound"

    @property
    def is_inbound(self) -> bool:
        return self in _INBOUND

    @property
    def is_outbound(self) -> bool:
        return self not in _INBOUND


_INBOUND = frozenset({
    MessageKind.PROMPT,
    MessageKind.QUIT,
    MessageKind.ALLOW_TOOL_RUN,
    MessageKind.DENY_TOOL_RUN,
})

TOOL_RESULT_KINDS = frozenset({
    MessageKind.TOOL_RESULT_OK,
    MessageKind.TOOL_RESULT_FAILED,
    MessageKind.TOOL_RESULT_CANCELED,
})


class Message(BaseModel):
    """One protocol message: `{"msg_type": <kind>, "content": <string>}`.

    Wire input must use `msg_type`; the `kind` field name is for constructors.
    A missing or null `content` reads as an empty string.
    """

    model_config = ConfigDict(frozen=True, validate_by_alias=True, validate_by_name=True, extra="ignore")

    kind: MessageKind = Field(alias="msg_type")
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def _null_content_is_empty(cls, value: object) -> object:
        return "" if value is None else value

    def __str__(self) -> str:
        text = f"MsgType: {self.kind.value}"
        if self.content:
            text += f", Content: {self.content}"
        return text

    def to_wire(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def ready(cls) -> Message:
        return cls(kind=MessageKind.READY)

    @classmethod
    def chunk(cls, text: str) -> Message:
        return cls(kind=MessageKind.CHUNK, content=text)

    @classmethod
    def confirm_tool_run(cls, description: str) -> Message:
        return cls(kind=MessageKind.CONFIRM_TOOL_RUN, content=description)

    @classmethod
    def tool_result(cls, kind: MessageKind, tool_name: str) -> Message:
        if kind not in TOOL_RESULT_KINDS:
            raise ValueError(f"not a tool result kind: {kind}")
        return cls(kind=kind, content=tool_name)

    @classmethod
    def error(cls, description: str) -> Message:
        return cls(kind=MessageKind.ERROR, content=description)

    @classmethod
    def prompt(cls, text: str) -> Message:
        return cls(kind=MessageKind.PROMPT, content=text)

    @classmethod
    def quit(cls) -> Message:
        return cls(kind=MessageKind.QUIT)

    @classmethod
    def allow(cls) -> Message:
        return cls(kind=MessageKind.ALLOW_TOOL_RUN)

    @classmethod
    def deny(cls) -> Message:
        return cls(kind=MessageKind.DENY_TOOL_RUN)
