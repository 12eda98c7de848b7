"""Newline-delimited JSON framing.

Each message is one compact JSON object terminated by a single ``\\n``.
JSON string escaping keeps embedded newlines out of the frame, so a bare
newline byte is always a delimiter.
"""

from __future__ import annotations

from loguru import logger
from pydantic import ValidationError

from mcpline.protocol.message import Message

DELIMITER = b"\n"


def encode_message(message: Message) -> bytes:
    """Serialize one message to a single terminated frame."""

    return message.to_wire().encode("utf-8") + DELIMITER


def decode_line(line: bytes) -> Message:
    """Decode one frame without its delimiter. Raises ``ValueError`` on bad input."""

    text = line.decode("utf-8")
    try:
        return Message.model_validate_json(text, by_alias=True, by_name=False)
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc


class FrameDecoder:
    """Incremental decoder that turns arbitrary byte chunks into messages."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self.dropped = 0

    @property
    def pending(self) -> int:
        """Bytes held back waiting for a delimiter."""
        return len(self._buffer)

    def feed(self, data: bytes) -> list[Message]:
        self._buffer.extend(data)
        messages: list[Message] = []
        while (index := self._buffer.find(DELIMITER)) != -1:
            line = bytes(self._buffer[:index])
            del self._buffer[: index + 1]
            if message := self._decode(line):
                messages.append(message)
        return messages

    def close(self) -> None:
        """Discard a trailing partial frame; it is never decoded."""

        if self._buffer:
            logger.debug("codec.partial_discarded bytes={}", len(self._buffer))
            self._buffer.clear()

    def _decode(self, line: bytes) -> Message | None:
        line = line.rstrip(b"\r")
        if not line.strip():
            return None
        try:
            return decode_line(line)
        except ValueError as exc:
            self.dropped += 1
            logger.warning("codec.decode_failed line={!r} error={}", line[:200], exc)
            return None
