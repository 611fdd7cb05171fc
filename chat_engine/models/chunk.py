"""
Chunk domain models.

Represents extracted document chunks as supplied by the ingestion side and
the trimmed items that end up in the grounding prompt.

Dependencies: pydantic
System role: Chunk data structures
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_page(value: Any) -> int:
    """Coerce a loosely-typed page number, falling back to 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


class Chunk(BaseModel):
    """Immutable extracted chunk with its source page range."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default="", description="Chunk identifier assigned by ingestion")
    text: str = Field(default="", description="Chunk text content")
    page_start: int = Field(default=0, alias="pageStart", description="First source page")
    page_end: int = Field(default=0, alias="pageEnd", description="Last source page")

    @field_validator("id", "text", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("page_start", "page_end", mode="before")
    @classmethod
    def _coerce_int(cls, value: Any) -> int:
        return _coerce_page(value)


class SelectedContextItem(BaseModel):
    """Chunk accepted into the prompt context, text possibly truncated."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    page_start: int = Field(alias="pageStart")
    page_end: int = Field(alias="pageEnd")
    text: str
