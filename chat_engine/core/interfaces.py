"""
Collaborator interfaces for the external model endpoints.

Sessions receive these as injected dependencies so they can be exercised
with in-memory fakes.

Dependencies: backend-agnostic (typing only)
System role: Ports for embedding and completion providers
"""

from collections.abc import AsyncGenerator, Sequence
from dataclasses import dataclass
from typing import Protocol

from chat_engine.core.result import Result


@dataclass(frozen=True)
class CompletionFragment:
    """One decoded line of a streaming completion."""

    content: str
    done: bool = False


class EmbeddingClient(Protocol):
    """Produces embedding vectors for chunk texts and queries."""

    async def embed_batch(self, texts: Sequence[str]) -> Result[list[list[float]]]:
        ...

    async def embed_one(self, text: str) -> Result[list[float]]:
        ...


class CompletionClient(Protocol):
    """Streams a chat completion fragment by fragment."""

    def stream_chat(self, messages: list[dict[str, str]]) -> AsyncGenerator[CompletionFragment, None]:
        ...
