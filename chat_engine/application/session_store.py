"""
Per-connection session state.

Holds the current chunk set, its embeddings and signature, document
metadata, and a bounded conversation history. Owned by exactly one
connection; nothing here is shared or locked.

Dependencies: chat_engine.core.retrieval, chat_engine.models
System role: Session state and signature-gated embedding cache
"""

import logging
from collections.abc import Sequence
from typing import Any

from chat_engine.core.retrieval.selector import embeddings_aligned
from chat_engine.core.retrieval.signature import ChunkSignature, compute_chunk_signature
from chat_engine.models.chat import ChatRole, Turn
from chat_engine.models.chunk import Chunk
from chat_engine.models.streaming import ContextPayload

logger = logging.getLogger(__name__)


class SessionStore:
    """Mutable state for one chat connection."""

    def __init__(self, max_history_turns: int = 6) -> None:
        """
        Initialize an empty session.

        Args:
            max_history_turns: User/assistant pairs retained in history
        """
        self.max_history_turns = max(0, max_history_turns)
        self.chunks: list[Chunk] = []
        self.embeddings: list[list[float]] = []
        self.signature: ChunkSignature | None = None
        self.pending_signature: ChunkSignature | None = None
        self.stats: Any = None
        self.files: list[Any] = []
        self.extraction: Any = None
        self.history: list[Turn] = []

    @property
    def history_limit(self) -> int:
        """Maximum number of history entries."""
        return self.max_history_turns * 2

    @property
    def embeddings_valid(self) -> bool:
        """True when embeddings line up one-to-one with the chunks."""
        return embeddings_aligned(self.chunks, self.embeddings)

    @property
    def embeddings_pending(self) -> bool:
        """True while embeddings for the current chunk set are being computed."""
        return self.pending_signature is not None and self.pending_signature == self.signature

    def apply_context(self, context: ContextPayload) -> bool:
        """
        Install a context update.

        Document metadata is always replaced. The chunk list and embeddings
        are only replaced when the chunk-set signature changed.

        Args:
            context: Normalized context payload

        Returns:
            bool: True when the chunk set changed and needs re-embedding
        """
        self.stats = context.stats
        self.files = list(context.files)
        self.extraction = context.extraction

        next_signature = compute_chunk_signature(context.chunks)
        if next_signature == self.signature:
            logger.info(
                "Context update with unchanged chunks, reusing embeddings",
                extra={"chunk_count": len(self.chunks), "signature": str(next_signature)},
            )
            return False

        self.chunks = list(context.chunks)
        self.embeddings = []
        self.signature = next_signature
        logger.info(
            "Chunk set changed",
            extra={"chunk_count": len(self.chunks), "signature": str(next_signature)},
        )
        return True

    def install_embeddings(self, signature: ChunkSignature, embeddings: Sequence[list[float]]) -> bool:
        """
        Store embeddings computed for ``signature``.

        Vectors computed for a chunk set that has since been replaced are
        discarded.

        Returns:
            bool: True when the embeddings were installed
        """
        if signature != self.signature:
            logger.info(
                "Discarding embeddings for superseded chunk set",
                extra={"stale_signature": str(signature), "current_signature": str(self.signature)},
            )
            return False
        self.embeddings = list(embeddings)
        return True

    def recent_history(self) -> list[Turn]:
        """Return at most ``history_limit`` of the newest history entries."""
        if self.history_limit == 0:
            return []
        return list(self.history[-self.history_limit:])

    def append_exchange(self, user_content: str, assistant_content: str) -> None:
        """Append a completed user/assistant pair, trimming oldest-first."""
        self.history.append(Turn(role=ChatRole.USER, content=user_content))
        self.history.append(Turn(role=ChatRole.ASSISTANT, content=assistant_content))
        overflow = len(self.history) - self.history_limit
        if overflow > 0:
            del self.history[:overflow]
