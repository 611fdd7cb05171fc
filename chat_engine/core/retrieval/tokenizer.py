"""Query tokenization for lexical scoring."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
MIN_TERM_LENGTH = 3


def tokenize(text: str | None) -> list[str]:
    """
    Split free text into lowercase alphanumeric terms.

    Punctuation becomes whitespace and terms shorter than three characters
    are dropped.

    Args:
        text: Raw query or document text

    Returns:
        list[str]: Terms in their original order, duplicates kept
    """
    normalized = _NON_ALNUM.sub(" ", str(text or "").lower())
    return [term for term in normalized.split() if len(term) >= MIN_TERM_LENGTH]
