"""Cosine similarity between embedding vectors."""

import math
from collections.abc import Sequence


def cosine_similarity(vec1: Sequence[float] | None, vec2: Sequence[float] | None) -> float:
    """
    Calculate cosine similarity between two vectors.

    Mismatched lengths, empty vectors and zero-magnitude vectors score 0.

    Args:
        vec1: First embedding vector
        vec2: Second embedding vector

    Returns:
        float: Similarity in [-1, 1]
    """
    if not vec1 or not vec2 or len(vec1) != len(vec2):
        return 0.0

    dot = 0.0
    mag1 = 0.0
    mag2 = 0.0
    for a, b in zip(vec1, vec2):
        a = float(a or 0.0)
        b = float(b or 0.0)
        dot += a * b
        mag1 += a * a
        mag2 += b * b

    if mag1 == 0 or mag2 == 0:
        return 0.0
    return dot / (math.sqrt(mag1) * math.sqrt(mag2))


def dense_scores(
    query_vector: Sequence[float],
    chunk_vectors: Sequence[Sequence[float] | None],
) -> list[float]:
    """Score every chunk vector against the query vector."""
    return [cosine_similarity(query_vector, vector) for vector in chunk_vectors]
