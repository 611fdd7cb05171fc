"""
Chat domain models.

Conversation turns and the stateless ask request/response schemas.

Dependencies: pydantic
System role: Chat API contracts
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from chat_engine.models.chunk import Chunk


class ChatRole(str, Enum):
    """Roles kept in conversation history."""

    USER = "user"
    ASSISTANT = "assistant"


class Turn(BaseModel):
    """Single role-tagged message in conversation history."""

    role: ChatRole = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")

    def to_message(self) -> dict[str, str]:
        """Convert to the completion endpoint message shape."""
        return {"role": self.role.value, "content": self.content}


class AskRequest(BaseModel):
    """Request schema for the stateless ask endpoint."""

    question: str = Field(default="", description="User question")
    chunks: list[Chunk] = Field(default_factory=list, description="Extracted PDF chunks")
    history: list[Turn] = Field(default_factory=list, description="Prior conversation turns")


class AskCitation(BaseModel):
    """Citation label mapped back to its source page range."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Citation label such as C1")
    page_start: int = Field(alias="pageStart")
    page_end: int = Field(alias="pageEnd")


class AskResponse(BaseModel):
    """Response schema for the stateless ask endpoint."""

    answer: str
    citations: list[AskCitation]
