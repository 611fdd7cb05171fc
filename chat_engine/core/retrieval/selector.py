"""
Context selection for one user turn.

Chooses between lexical-only and hybrid (lexical + dense + MMR) retrieval
depending on whether valid chunk embeddings are available.

Dependencies: chat_engine.core.retrieval, chat_engine.core.interfaces
System role: Retrieval business logic
"""

import logging
from collections.abc import Sequence

from chat_engine.core.interfaces import EmbeddingClient
from chat_engine.core.result import ErrorKind, Result
from chat_engine.core.retrieval.assembler import ContextBudget, assemble_context
from chat_engine.core.retrieval.dense import dense_scores
from chat_engine.core.retrieval.fusion import build_candidates
from chat_engine.core.retrieval.lexical import score_chunk
from chat_engine.core.retrieval.mmr import mmr_select
from chat_engine.core.retrieval.tokenizer import tokenize
from chat_engine.models.chunk import Chunk, SelectedContextItem

logger = logging.getLogger(__name__)


def embeddings_aligned(chunks: Sequence[Chunk], embeddings: Sequence[Sequence[float]]) -> bool:
    """True when there is exactly one embedding per chunk."""
    return bool(chunks) and len(embeddings) == len(chunks)


def select_context_lexical(
    chunks: Sequence[Chunk],
    query: str,
    budget: ContextBudget,
) -> list[SelectedContextItem]:
    """
    Rank chunks by whole-word term frequency and assemble the context.

    Without usable query terms the chunks keep document order. Otherwise
    ties keep document order and, when any chunk matches, chunks scoring 0
    are left out.

    Args:
        chunks: Session chunks
        query: User question
        budget: Context limits

    Returns:
        list[SelectedContextItem]: Assembled context
    """
    terms = tokenize(query)
    if not terms:
        return assemble_context(chunks, budget)

    scored = [(score_chunk(chunk.text, terms), chunk) for chunk in chunks]
    ranked = sorted(scored, key=lambda pair: pair[0], reverse=True)
    if ranked and ranked[0][0] > 0:
        ranked = [pair for pair in ranked if pair[0] > 0]
    return assemble_context((chunk for _, chunk in ranked), budget)


class ContextSelector:
    """Hybrid retrieval with lexical fallback."""

    def __init__(self, embedding_client: EmbeddingClient, budget: ContextBudget) -> None:
        """
        Initialize selector.

        Args:
            embedding_client: Provider used for the per-turn query vector
            budget: Context limits
        """
        self.embedding_client = embedding_client
        self.budget = budget

    async def select(
        self,
        chunks: Sequence[Chunk],
        query: str,
        embeddings: Sequence[Sequence[float]],
    ) -> list[SelectedContextItem]:
        """
        Select context for a query.

        Uses hybrid retrieval when the embeddings line up with the chunks,
        lexical retrieval otherwise.
        """
        if not embeddings_aligned(chunks, embeddings):
            if embeddings:
                logger.warning(
                    "Embeddings misaligned with chunks, using lexical retrieval",
                    extra={"chunk_count": len(chunks), "embedding_count": len(embeddings)},
                )
            return select_context_lexical(chunks, query, self.budget)
        return await self.select_hybrid(chunks, query, embeddings)

    async def select_hybrid(
        self,
        chunks: Sequence[Chunk],
        query: str,
        embeddings: Sequence[Sequence[float]],
    ) -> list[SelectedContextItem]:
        """
        Fuse lexical and dense scores, diversify with MMR, then assemble.

        A failed query embedding degrades this turn to lexical-only fusion.
        """
        if not chunks:
            return []

        terms = tokenize(query)
        sparse_raw = [score_chunk(chunk.text, terms) for chunk in chunks]

        query_result = await self._embed_query(query)
        dense_raw = None
        if query_result.is_ok:
            dense_raw = dense_scores(query_result.value, embeddings)
        elif query_result.error_kind is ErrorKind.QUERY_EMBEDDING_FAILURE:
            logger.info(
                "Query embedding unavailable, using sparse-only fusion for this turn",
                extra={"error_msg": query_result.error_message},
            )

        candidates = build_candidates(chunks, sparse_raw, dense_raw, embeddings)
        diversified = mmr_select(candidates, self.budget.max_chunks * 2)
        diversified.sort(key=lambda candidate: candidate.hybrid_score, reverse=True)
        return assemble_context((candidate.chunk for candidate in diversified), self.budget)

    async def _embed_query(self, query: str) -> Result[list[float]]:
        result = await self.embedding_client.embed_one(query)
        if result.is_ok and result.value:
            return result
        message = result.error_message or "empty query embedding"
        return Result.failure(ErrorKind.QUERY_EMBEDDING_FAILURE, message)
