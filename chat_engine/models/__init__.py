"""Domain models and protocol schemas."""

from chat_engine.models.chat import AskCitation, AskRequest, AskResponse, ChatRole, Turn
from chat_engine.models.chunk import Chunk, SelectedContextItem
from chat_engine.models.streaming import (
    AssistantEndFrame,
    AssistantMessageFrame,
    AssistantStartFrame,
    AssistantTokenFrame,
    ContextAckFrame,
    ContextPayload,
    ContextUpdateRequest,
    ErrorFrame,
    ServerFrame,
    UserMessageRequest,
    parse_client_frame,
)

__all__ = [
    "AskCitation",
    "AskRequest",
    "AskResponse",
    "AssistantEndFrame",
    "AssistantMessageFrame",
    "AssistantStartFrame",
    "AssistantTokenFrame",
    "ChatRole",
    "Chunk",
    "ContextAckFrame",
    "ContextPayload",
    "ContextUpdateRequest",
    "ErrorFrame",
    "SelectedContextItem",
    "ServerFrame",
    "Turn",
    "UserMessageRequest",
    "parse_client_frame",
]
