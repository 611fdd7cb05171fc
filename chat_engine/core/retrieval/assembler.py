"""
Context assembly under chunk-count and character budgets.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from chat_engine.configs.retrieval import RetrievalSettings
from chat_engine.models.chunk import Chunk, SelectedContextItem


@dataclass(frozen=True)
class ContextBudget:
    """Limits applied while filling the prompt context."""

    max_chunks: int = 8
    max_chunk_chars: int = 1400
    max_context_chars: int = 9000

    @classmethod
    def from_settings(cls, settings: RetrievalSettings) -> "ContextBudget":
        return cls(
            max_chunks=settings.max_context_chunks,
            max_chunk_chars=settings.max_chunk_chars,
            max_context_chars=settings.max_context_chars,
        )


def assemble_context(chunks: Iterable[Chunk], budget: ContextBudget) -> list[SelectedContextItem]:
    """
    Trim ranked chunks into the final context list.

    Chunks are visited in the given order. Each text is cut to the per-chunk
    cap; empty results are skipped. Assembly stops at the first chunk that
    would overflow either budget.

    Args:
        chunks: Chunks in relevance order
        budget: Chunk-count and character limits

    Returns:
        list[SelectedContextItem]: Accepted items, traversal order preserved
    """
    selected: list[SelectedContextItem] = []
    total_chars = 0

    for chunk in chunks:
        if len(selected) >= budget.max_chunks:
            break
        text = chunk.text[: budget.max_chunk_chars]
        if not text:
            continue
        if total_chars + len(text) > budget.max_context_chars:
            break
        selected.append(
            SelectedContextItem(
                id=chunk.id,
                page_start=chunk.page_start,
                page_end=chunk.page_end,
                text=text,
            )
        )
        total_chars += len(text)

    return selected
