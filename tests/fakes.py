"""
In-memory collaborators for the embedding and completion endpoints.

System role: Test doubles shared across test modules
"""

import asyncio
from collections.abc import Sequence

from chat_engine.core.exceptions import CompletionEndpointError
from chat_engine.core.interfaces import CompletionFragment
from chat_engine.core.result import ErrorKind, Result


class FakeEmbeddingClient:
    """Embedding collaborator returning canned vectors."""

    def __init__(
        self,
        vectors: list[list[float]] | None = None,
        query_vector: list[float] | None = None,
        fail_batch: bool = False,
        fail_query: bool = False,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.vectors = vectors
        self.query_vector = query_vector if query_vector is not None else [1.0, 0.0]
        self.fail_batch = fail_batch
        self.fail_query = fail_query
        self.gate = gate
        self.batch_calls: list[list[str]] = []
        self.query_calls: list[str] = []

    async def embed_batch(self, texts: Sequence[str]) -> Result[list[list[float]]]:
        self.batch_calls.append(list(texts))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_batch:
            return Result.failure(ErrorKind.EMBEDDING_UNAVAILABLE, "embed failed (503): unavailable")
        if self.vectors is not None:
            return Result.ok(self.vectors)
        return Result.ok([[1.0, float(index)] for index, _ in enumerate(texts)])

    async def embed_one(self, text: str) -> Result[list[float]]:
        self.query_calls.append(text)
        if self.fail_query:
            return Result.failure(ErrorKind.EMBEDDING_UNAVAILABLE, "embed request failed")
        return Result.ok(self.query_vector)


class FakeCompletionClient:
    """Completion collaborator streaming canned tokens."""

    def __init__(
        self,
        tokens: Sequence[str] = ("Hello", " world"),
        fail_after: int | None = None,
        error: Exception | None = None,
        yield_control: bool = False,
    ) -> None:
        self.tokens = list(tokens)
        self.fail_after = fail_after
        self.error = error or CompletionEndpointError("Ollama stream failed: connection reset")
        self.yield_control = yield_control
        self.calls: list[list[dict[str, str]]] = []
        self.closed_streams = 0

    async def stream_chat(self, messages: list[dict[str, str]]):
        self.calls.append(messages)
        try:
            for index, token in enumerate(self.tokens):
                if self.fail_after is not None and index == self.fail_after:
                    raise self.error
                if self.yield_control:
                    await asyncio.sleep(0)
                yield CompletionFragment(content=token)
            if self.fail_after is not None and self.fail_after >= len(self.tokens):
                raise self.error
            yield CompletionFragment(content="", done=True)
            yield CompletionFragment(content=" trailing")
        finally:
            self.closed_streams += 1


async def collect(frames) -> list:
    """Drain an async generator into a list."""
    return [frame async for frame in frames]
