"""
Hybrid score fusion.

Lexical and dense scores are min-max normalized independently, then
combined with fixed weights. Without a query embedding the hybrid score is
the normalized lexical score alone.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from chat_engine.models.chunk import Chunk

DENSE_WEIGHT = 0.65
SPARSE_WEIGHT = 0.35


@dataclass
class Candidate:
    """Scoring-time view of a chunk; built per query and then discarded."""

    chunk: Chunk
    sparse_score: float
    dense_score: float
    hybrid_score: float
    embedding: Sequence[float] | None = None


def normalize_scores(values: Sequence[float]) -> list[float]:
    """
    Min-max scale values into [0, 1].

    A constant vector maps entirely to 0.5.
    """
    if not values:
        return []
    low = min(values)
    high = max(values)
    if high == low:
        return [0.5] * len(values)
    span = high - low
    return [(value - low) / span for value in values]


def fuse_scores(
    sparse_raw: Sequence[float],
    dense_raw: Sequence[float] | None,
) -> tuple[list[float], list[float], list[float]]:
    """
    Normalize and combine per-chunk scores.

    Args:
        sparse_raw: Lexical scores, one per chunk
        dense_raw: Cosine scores, or None when no query embedding was obtained

    Returns:
        tuple: (normalized sparse, normalized dense, hybrid) score lists
    """
    sparse = normalize_scores(sparse_raw)
    if dense_raw is None:
        return sparse, [0.0] * len(sparse), list(sparse)

    dense = normalize_scores(dense_raw)
    hybrid = [DENSE_WEIGHT * d + SPARSE_WEIGHT * s for s, d in zip(sparse, dense)]
    return sparse, dense, hybrid


def build_candidates(
    chunks: Sequence[Chunk],
    sparse_raw: Sequence[float],
    dense_raw: Sequence[float] | None,
    embeddings: Sequence[Sequence[float]] | None,
) -> list[Candidate]:
    """Pair every chunk with its fused scores and its own embedding."""
    sparse, dense, hybrid = fuse_scores(sparse_raw, dense_raw)
    candidates = []
    for index, chunk in enumerate(chunks):
        embedding = embeddings[index] if embeddings and index < len(embeddings) else None
        candidates.append(
            Candidate(
                chunk=chunk,
                sparse_score=sparse[index],
                dense_score=dense[index],
                hybrid_score=hybrid[index],
                embedding=embedding,
            )
        )
    return candidates
