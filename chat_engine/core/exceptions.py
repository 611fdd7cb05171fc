"""
Exception hierarchy for the chat engine.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: chat_engine.core.result
System role: Centralized exception handling across the application
"""

from typing import Any

from chat_engine.core.result import ErrorKind


class ChatEngineException(Exception):
    """Base exception for all chat engine errors."""

    kind: ErrorKind | None = None

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MalformedInputError(ChatEngineException):
    """Raised when an inbound frame cannot be parsed or validated."""

    kind = ErrorKind.MALFORMED_INPUT

    def __init__(
        self,
        message: str,
        payload_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize malformed input error.

        Args:
            message: Error message
            payload_type: Declared frame type, if one could be read
            details: Additional context
        """
        details = details or {}
        if payload_type:
            details["payload_type"] = payload_type
        super().__init__(message, details)


class EmbeddingUnavailableError(ChatEngineException):
    """Raised when the embedding endpoint is unreachable or errors."""

    kind = ErrorKind.EMBEDDING_UNAVAILABLE

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize embedding error.

        Args:
            message: Error message
            status_code: HTTP status returned by the endpoint, if any
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)


class CompletionEndpointError(ChatEngineException):
    """Raised when the completion endpoint answers non-OK or the stream breaks."""

    kind = ErrorKind.COMPLETION_ENDPOINT_FAILURE

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize completion endpoint error.

        Args:
            message: Error message
            status_code: HTTP status returned by the endpoint, if any
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
