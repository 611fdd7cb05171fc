"""
WebSocket streaming chat endpoint.

Each connection owns one SessionStore and one ChatService. The read loop
never waits on model calls: context updates and replies run as tasks and
push their frames back through the socket as they are produced.

Client sends:
    {"type": "context_update", "contextId": "...", "context": {"chunks": [...], "stats": {...}, "files": [...]}}
    {"type": "user_message", "content": "..."}

Server sends:
    {"type": "context_ack", "contextId": "...", "chunks": 12}
    {"type": "assistant_message", "content": "..."}
    {"type": "assistant_start", "id": "...", "timestamp": 0}
    {"type": "assistant_token", "id": "...", "token": "..."}
    {"type": "assistant_end", "id": "...", "timestamp": 0}
    {"type": "error", "message": "..."}

Dependencies: chat_engine.application.services.chat_service
System role: WebSocket streaming API
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from uuid import uuid4

from fastapi import Depends, WebSocket, WebSocketDisconnect
from fastapi.websockets import WebSocketState

from chat_engine.api.deps import (
    get_completion_client,
    get_embedding_client,
    get_settings_dependency,
)
from chat_engine.application.services import ChatService
from chat_engine.application.session_store import SessionStore
from chat_engine.configs import Settings
from chat_engine.core.exceptions import MalformedInputError
from chat_engine.models.streaming import (
    AssistantMessageFrame,
    ContextUpdateRequest,
    ErrorFrame,
    ServerFrame,
    parse_client_frame,
)
from chat_engine.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

GREETING = "Connected. Upload PDFs and start chatting."


class FrameSender:
    """Sends frames only while the socket is still open."""

    def __init__(self, websocket: WebSocket, connection_id: str) -> None:
        self.websocket = websocket
        self.connection_id = connection_id

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send(self, frame: ServerFrame) -> bool:
        """
        Send one frame.

        Returns:
            bool: False when the connection was already gone
        """
        if not self.is_open:
            return False
        try:
            await self.websocket.send_json(frame.to_dict())
        except (WebSocketDisconnect, RuntimeError) as e:
            logger.debug(
                "Dropping frame for closed connection",
                extra={"connection_id": self.connection_id, "error_msg": str(e)},
            )
            return False
        return True


async def _pump(frames: AsyncIterator[ServerFrame], sender: FrameSender, label: str) -> None:
    """Forward frames in production order; report unexpected failures."""
    try:
        async for frame in frames:
            await sender.send(frame)
    except Exception as e:
        log_exception_with_context(
            logger,
            "Unexpected error while handling frame",
            e,
            connection_id=sender.connection_id,
            frame_type=label,
        )
        await sender.send(ErrorFrame(message=str(e)))


async def websocket_chat(
    websocket: WebSocket,
    embedding_client=Depends(get_embedding_client),
    completion_client=Depends(get_completion_client),
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """
    WebSocket endpoint for grounded PDF chat.

    Args:
        websocket: WebSocket connection
        embedding_client: Embedding collaborator (injected)
        completion_client: Completion collaborator (injected)
        settings: Application settings (injected)
    """
    await websocket.accept()
    connection_id = uuid4().hex[:8]
    log_with_context(
        logger,
        logging.INFO,
        "WebSocket connection established",
        connection_id=connection_id,
        client=str(websocket.client),
    )

    service = ChatService(
        store=SessionStore(max_history_turns=settings.retrieval.max_history_turns),
        embedding_client=embedding_client,
        completion_client=completion_client,
        retrieval=settings.retrieval,
    )
    sender = FrameSender(websocket, connection_id)
    pending: set[asyncio.Task] = set()

    def spawn(frames: AsyncIterator[ServerFrame], label: str) -> None:
        task = asyncio.create_task(_pump(frames, sender, label))
        pending.add(task)
        task.add_done_callback(pending.discard)

    await sender.send(AssistantMessageFrame(content=GREETING))

    try:
        while True:
            raw_data = await websocket.receive_text()

            try:
                request = parse_client_frame(raw_data)
            except MalformedInputError as e:
                logger.warning(
                    "Rejected client frame",
                    extra={"connection_id": connection_id, "error_kind": e.kind.value, "error_msg": e.message},
                )
                await sender.send(ErrorFrame(message=e.message))
                continue

            if isinstance(request, ContextUpdateRequest):
                log_with_context(
                    logger,
                    logging.INFO,
                    "Context update received",
                    connection_id=connection_id,
                    context_id=request.context_id,
                    chunks=request.context.chunks,
                    files=request.context.files,
                )
                spawn(service.update_context(request), "context_update")
                continue

            query = request.content.strip()
            if not query:
                continue
            logger.info(
                "User message received",
                extra={"connection_id": connection_id, "message_length": len(query)},
            )
            spawn(service.stream_reply(query), "user_message")

    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected", extra={"connection_id": connection_id})
    finally:
        tasks = list(pending)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
