"""
Ollama embedding client.

Sends chunk texts in fixed-size batches and single queries to the
``/api/embed`` endpoint. Failures are returned as ``Result`` values so
callers can fall back to lexical retrieval.

Dependencies: httpx, chat_engine.core
System role: Embedding provider adapter
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from chat_engine.core.exceptions import EmbeddingUnavailableError
from chat_engine.core.result import ErrorKind, Result

logger = logging.getLogger(__name__)

EMBED_PATH = "/api/embed"


class OllamaEmbeddingClient:
    """Batched embedding requests against an Ollama server."""

    def __init__(
        self,
        base_url: str,
        model: str,
        batch_size: int = 24,
        max_chars: int = 1400,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize embedding client.

        Args:
            base_url: Ollama server URL
            model: Embedding model name
            batch_size: Texts per request
            max_chars: Character cap applied to each text before sending
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a mock)
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.batch_size = max(1, batch_size)
        self.max_chars = max_chars
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def embed_batch(self, texts: Sequence[str]) -> Result[list[list[float]]]:
        """
        Embed chunk texts, batch by batch.

        Args:
            texts: Chunk texts in chunk order

        Returns:
            Result: Vectors index-aligned with ``texts``, or
                EMBEDDING_UNAVAILABLE when any batch fails
        """
        if not texts:
            return Result.ok([])

        vectors: list[list[float]] = []
        try:
            async with self._client() as client:
                for start in range(0, len(texts), self.batch_size):
                    batch = [str(text or "")[: self.max_chars] for text in texts[start:start + self.batch_size]]
                    vectors.extend(await self._embed(client, batch))
        except EmbeddingUnavailableError as e:
            logger.warning(
                "Chunk embedding failed",
                extra={"text_count": len(texts), "embedded": len(vectors), "error_msg": e.message},
            )
            return Result.failure(e.kind, e.message)

        logger.debug("Embedded chunk batch", extra={"text_count": len(texts)})
        return Result.ok(vectors)

    async def embed_one(self, text: str) -> Result[list[float]]:
        """
        Embed a single query.

        Returns:
            Result: The query vector, or EMBEDDING_UNAVAILABLE
        """
        try:
            async with self._client() as client:
                vectors = await self._embed(client, text)
        except EmbeddingUnavailableError as e:
            return Result.failure(e.kind, e.message)

        if not vectors:
            return Result.failure(ErrorKind.EMBEDDING_UNAVAILABLE, "embed returned no vectors")
        return Result.ok(vectors[0])

    async def _embed(self, client: httpx.AsyncClient, payload_input: str | list[str]) -> list[list[float]]:
        """
        POST one embedding request.

        Raises:
            EmbeddingUnavailableError: On transport errors, non-OK status or
                an unreadable response body
        """
        try:
            response = await client.post(
                EMBED_PATH,
                json={"model": self.model, "input": payload_input, "truncate": True},
            )
        except httpx.HTTPError as e:
            raise EmbeddingUnavailableError(f"embed request failed: {e}") from e

        if not response.is_success:
            body = response.text
            raise EmbeddingUnavailableError(
                f"embed failed ({response.status_code}): {body or response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            data: Any = response.json()
        except ValueError as e:
            raise EmbeddingUnavailableError("embed returned invalid JSON") from e

        embeddings = data.get("embeddings") if isinstance(data, dict) else None
        return embeddings if isinstance(embeddings, list) else []
