"""
Grounding system prompt.

Renders the instructions that restrict the model to the supplied PDF
context, followed by the numbered context references ([C1], [C2], ...).

Dependencies: langchain_core.prompts
System role: Prompt template for grounded PDF answers
"""

import json
from collections.abc import Sequence
from typing import Any

from langchain_core.prompts import PromptTemplate

from chat_engine.models.chat import AskCitation
from chat_engine.models.chunk import SelectedContextItem

NO_CHUNKS_PLACEHOLDER = "(no chunks available)"

SYSTEM_PROMPT = """You are a PDF assistant. Answer using only provided PDF context chunks.

If context is insufficient, clearly say so.

Cite context references like [C1], [C2] when used.

{stats_section}PDF context:

{references}"""

GROUNDING_PROMPT = PromptTemplate.from_template(SYSTEM_PROMPT)


def citation_label(index: int) -> str:
    """Return the 1-based citation label for an assembled context position."""
    return f"C{index + 1}"


def format_references(items: Sequence[SelectedContextItem]) -> str:
    """Render context items as labelled blocks, or the placeholder when empty."""
    blocks = [
        f"[{citation_label(index)}] pages {item.page_start or '?'}-{item.page_end or '?'}\n{item.text}"
        for index, item in enumerate(items)
    ]
    return "\n\n".join(blocks) or NO_CHUNKS_PLACEHOLDER


def build_system_prompt(items: Sequence[SelectedContextItem], stats: Any = None) -> str:
    """
    Build the grounding system prompt.

    Args:
        items: Assembled context in relevance order
        stats: Optional document statistics from the ingestion side

    Returns:
        str: Rendered system prompt
    """
    stats_section = ""
    if stats:
        stats_section = f"Document stats: {json.dumps(stats, ensure_ascii=False, default=str)}\n\n"

    return GROUNDING_PROMPT.format(
        stats_section=stats_section,
        references=format_references(items),
    )


def build_citations(items: Sequence[SelectedContextItem]) -> list[AskCitation]:
    """Map citation labels back to the page ranges they refer to."""
    return [
        AskCitation(id=citation_label(index), page_start=item.page_start, page_end=item.page_end)
        for index, item in enumerate(items)
    ]
