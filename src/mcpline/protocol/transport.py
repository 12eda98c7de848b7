"""Blocking message endpoints over binary streams."""

from __future__ import annotations

import threading
from collections import deque
from typing import BinaryIO

from loguru import logger

from mcpline.errors import TransportClosedError, TransportError
from mcpline.protocol.codec import FrameDecoder, encode_message
from mcpline.protocol.message import Message

DEFAULT_CHUNK_SIZE = 4096


class MessageReader:
    """Reads one message at a time from a byte stream."""

    def __init__(self, stream: BinaryIO, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._decoder = FrameDecoder()
        self._ready: deque[Message] = deque()
        self._closed = False
        # read1 returns whatever the pipe has instead of waiting for a full chunk
        self._read = getattr(stream, "read1", None) or stream.read

    @property
    def dropped(self) -> int:
        return self._decoder.dropped

    def receive(self) -> Message:
        """Block until a complete message arrives.

        Raises ``TransportClosedError`` on EOF and ``TransportError`` when the
        stream fails.
        """

        while not self._ready:
            if self._closed:
                raise TransportClosedError("inbound stream closed")
            try:
                data = self._read(self._chunk_size)
            except OSError as exc:
                raise TransportError(f"reading inbound stream: {exc}") from exc
            if not data:
                self._closed = True
                self._decoder.close()
                continue
            self._ready.extend(self._decoder.feed(data))

        message = self._ready.popleft()
        logger.debug("transport.recv {}", message)
        return message


class MessageWriter:
    """Writes messages to a byte stream, one flushed frame per message."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def send(self, message: Message) -> None:
        frame = encode_message(message)
        logger.debug("transport.send {}", message)
        with self._lock:
            try:
                self._stream.write(frame)
                self._stream.flush()
            except (OSError, ValueError) as exc:
                raise TransportError(f"writing outbound stream: {exc}") from exc
