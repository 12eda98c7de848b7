"""Application-level exception types for mcpline."""

from __future__ import annotations


class McplineError(Exception):
    """Base exception for mcpline."""


class ConfigurationError(McplineError):
    """Base exception for configuration and startup validation errors."""


class EngineNotFoundError(ConfigurationError):
    """Raised when no plugin provides the configured engine."""


class ModelNotConfiguredError(ConfigurationError):
    """Raised when an engine requires a model and none is set."""


class TransportError(McplineError):
    """Raised when the byte stream cannot be read or written."""


class TransportClosedError(TransportError):
    """Raised when the inbound stream reaches EOF while a message is required."""


class ProtocolError(McplineError):
    """Base exception for turn-taking violations that cannot be tolerated."""


class ConcurrentApprovalError(ProtocolError):
    """Raised when a second tool approval is requested while one is pending."""


class EngineCanceledError(McplineError):
    """Raised by an engine that stopped because its invocation was canceled."""
