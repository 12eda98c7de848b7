"""Wire protocol: message model, framing and stream endpoints."""

from mcpline.protocol.codec import FrameDecoder, decode_line, encode_message
from mcpline.protocol.message import Message, MessageKind
from mcpline.protocol.transport import MessageReader, MessageWriter

__all__ = [
    "FrameDecoder",
    "Message",
    "MessageKind",
    "MessageReader",
    "MessageWriter",
    "decode_line",
    "encode_message",
]
