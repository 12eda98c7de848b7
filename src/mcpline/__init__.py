"""mcpline - stdio bridge between a client and a tool-using agent."""

from .engine import AgentEngine, CancelToken, EngineCallbacks
from .protocol import Message, MessageKind
from .session import SessionLoop

__version__ = "0.1.0"

__all__ = ["AgentEngine", "CancelToken", "EngineCallbacks", "Message", "MessageKind", "SessionLoop"]
