"""Whole-word term frequency scoring."""

import re
from collections.abc import Sequence
from functools import lru_cache


@lru_cache(maxsize=1024)
def _term_pattern(term: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(term)}\b", re.ASCII)


def score_chunk(text: str, query_terms: Sequence[str]) -> int:
    """
    Count whole-word occurrences of every query term in a chunk.

    Args:
        text: Chunk text
        query_terms: Lowercase terms from ``tokenize``

    Returns:
        int: Sum of per-term occurrence counts
    """
    haystack = text.lower()
    return sum(len(_term_pattern(term).findall(haystack)) for term in query_terms)
