"""API routers."""

from .ask import router as ask_router
from .chat_stream import websocket_chat
from .health import router as health_router

__all__ = [
    "ask_router",
    "health_router",
    "websocket_chat",
]
