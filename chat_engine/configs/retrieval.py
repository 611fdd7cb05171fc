"""
Retrieval budget settings.

Budgets are kept conservative so large PDF chunk lists do not exhaust the
model context window.

Dependencies: pydantic_settings
System role: Context selection and history limits
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class RetrievalSettings(BaseSettings):
    """Chunk, character and history budgets for context assembly."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_context_chunks: int = Field(
        default=8,
        ge=1,
        description="Maximum number of chunks placed in the prompt",
    )
    max_chunk_chars: int = Field(
        default=1400,
        ge=1,
        description="Per-chunk character cap (also applied before embedding)",
    )
    max_context_chars: int = Field(
        default=9000,
        ge=1,
        description="Total character budget for the prompt context",
    )
    max_history_turns: int = Field(
        default=6,
        ge=0,
        description="User/assistant pairs kept in conversation history",
    )
    embed_batch_size: int = Field(
        default=24,
        ge=1,
        description="Chunk texts sent per embedding request",
    )
