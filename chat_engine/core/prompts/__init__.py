"""Prompt templates."""

from chat_engine.core.prompts.grounding_prompt import (
    GROUNDING_PROMPT,
    NO_CHUNKS_PLACEHOLDER,
    build_citations,
    build_system_prompt,
    format_references,
)

__all__ = [
    "GROUNDING_PROMPT",
    "NO_CHUNKS_PLACEHOLDER",
    "build_citations",
    "build_system_prompt",
    "format_references",
]
