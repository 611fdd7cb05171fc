"""
Streaming frame schemas for WebSocket chat.

Defines the tagged client request variants, validated at the protocol
boundary, and the server frames emitted while relaying a response.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

import json
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from chat_engine.core.exceptions import MalformedInputError
from chat_engine.models.chunk import Chunk


class ServerEventType(str, Enum):
    """Server-to-client frame types."""

    CONTEXT_ACK = "context_ack"
    ASSISTANT_MESSAGE = "assistant_message"
    ASSISTANT_START = "assistant_start"
    ASSISTANT_TOKEN = "assistant_token"
    ASSISTANT_END = "assistant_end"
    ERROR = "error"


class ClientEventType(str, Enum):
    """Client-to-server frame types."""

    CONTEXT_UPDATE = "context_update"
    USER_MESSAGE = "user_message"


# ---------------------------------------------------------------------------
# Client requests
# ---------------------------------------------------------------------------


class ContextPayload(BaseModel):
    """
    Document context pushed by the ingestion side.

    Attributes:
        chunks: Extracted chunks, empty-text chunks removed
        stats: Free-form document statistics rendered into the prompt
        files: Descriptors of the uploaded files
        extraction: Free-form extraction metadata
    """

    chunks: list[Chunk] = Field(default_factory=list)
    stats: Any = None
    files: list[Any] = Field(default_factory=list)
    extraction: Any = None

    @field_validator("chunks", mode="before")
    @classmethod
    def _chunks_as_list(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [chunk if isinstance(chunk, (dict, Chunk)) else {} for chunk in value]

    @field_validator("chunks", mode="after")
    @classmethod
    def _drop_empty_chunks(cls, value: list[Chunk]) -> list[Chunk]:
        return [chunk for chunk in value if chunk.text]

    @field_validator("files", mode="before")
    @classmethod
    def _files_as_list(cls, value: Any) -> list[Any]:
        return value if isinstance(value, list) else []


class ContextUpdateRequest(BaseModel):
    """Replace the session chunk set."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["context_update"]
    context_id: str = Field(default="", alias="contextId")
    context: ContextPayload = Field(default_factory=ContextPayload)

    @field_validator("context_id", mode="before")
    @classmethod
    def _coerce_context_id(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("context", mode="before")
    @classmethod
    def _context_as_dict(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, ContextPayload)) else {}


class UserMessageRequest(BaseModel):
    """Ask a question against the current session context."""

    type: Literal["user_message"]
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, value: Any) -> str:
        return "" if value is None else str(value)


ClientRequest = Annotated[
    Union[ContextUpdateRequest, UserMessageRequest],
    Field(discriminator="type"),
]

_client_request_adapter: TypeAdapter[ClientRequest] = TypeAdapter(ClientRequest)


def parse_client_frame(raw: str | bytes) -> ContextUpdateRequest | UserMessageRequest:
    """
    Parse and validate one inbound frame.

    Args:
        raw: Frame text as received from the socket

    Returns:
        The tagged request variant

    Raises:
        MalformedInputError: If the frame is not JSON, has an unknown type,
            or fails validation
    """
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        raise MalformedInputError("Invalid JSON payload") from e

    if not isinstance(payload, dict):
        raise MalformedInputError("Invalid JSON payload")

    payload_type = payload.get("type")
    if not isinstance(payload_type, str) or payload_type not in {event.value for event in ClientEventType}:
        raise MalformedInputError(
            f"Unsupported payload type: {payload_type}",
            payload_type=str(payload_type),
        )

    try:
        return _client_request_adapter.validate_python(payload)
    except ValidationError as e:
        raise MalformedInputError(
            f"Invalid {payload_type} payload: {e.errors()[0].get('msg', 'validation failed')}",
            payload_type=payload_type,
        ) from e


# ---------------------------------------------------------------------------
# Server frames
# ---------------------------------------------------------------------------


class ServerFrame(BaseModel):
    """Base class for outbound frames."""

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return self.model_dump(mode="json", by_alias=True)


class ContextAckFrame(ServerFrame):
    type: Literal["context_ack"] = ServerEventType.CONTEXT_ACK.value
    context_id: str = Field(alias="contextId")
    chunks: int


class AssistantMessageFrame(ServerFrame):
    type: Literal["assistant_message"] = ServerEventType.ASSISTANT_MESSAGE.value
    content: str


class AssistantStartFrame(ServerFrame):
    type: Literal["assistant_start"] = ServerEventType.ASSISTANT_START.value
    id: str
    timestamp: int


class AssistantTokenFrame(ServerFrame):
    type: Literal["assistant_token"] = ServerEventType.ASSISTANT_TOKEN.value
    id: str
    token: str


class AssistantEndFrame(ServerFrame):
    type: Literal["assistant_end"] = ServerEventType.ASSISTANT_END.value
    id: str
    timestamp: int


class ErrorFrame(ServerFrame):
    type: Literal["error"] = ServerEventType.ERROR.value
    message: str
