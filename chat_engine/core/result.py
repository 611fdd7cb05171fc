"""
Explicit success/failure values for calls to external collaborators.

Callers branch on ``ErrorKind`` instead of catching exceptions, so the
lexical fallback paths stay visible at the call site.

Dependencies: None (pure domain layer)
System role: Result type shared by boundary clients and core logic
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories surfaced by the engine."""

    MALFORMED_INPUT = "malformed_input"
    EMBEDDING_UNAVAILABLE = "embedding_unavailable"
    COMPLETION_ENDPOINT_FAILURE = "completion_endpoint_failure"
    QUERY_EMBEDDING_FAILURE = "query_embedding_failure"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of an external call.

    Attributes:
        value: Payload when the call succeeded
        error_kind: Failure category when it did not
        error_message: Human-readable failure reason
    """

    value: T | None = None
    error_kind: ErrorKind | None = None
    error_message: str = ""

    @property
    def is_ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str = "") -> "Result[T]":
        return cls(error_kind=kind, error_message=message)
