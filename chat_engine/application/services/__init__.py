"""Service orchestrators."""

from .ask_service import AskService
from .chat_service import ChatService, RelayState

__all__ = [
    "AskService",
    "ChatService",
    "RelayState",
]
