"""
Chat service for one WebSocket connection.

Applies context updates with signature-gated re-embedding and relays
grounded completions token by token. Each user turn walks the states
Idle -> Retrieving -> Building -> Streaming -> Idle; turns on the same
connection are serialized in arrival order.

Dependencies: chat_engine.core, chat_engine.application.session_store
System role: Chat service orchestration layer
"""

import asyncio
import logging
import secrets
import time
from collections.abc import AsyncGenerator
from contextlib import aclosing
from enum import Enum

from chat_engine.application.session_store import SessionStore
from chat_engine.configs.retrieval import RetrievalSettings
from chat_engine.core.exceptions import CompletionEndpointError
from chat_engine.core.interfaces import CompletionClient, EmbeddingClient
from chat_engine.core.prompts.grounding_prompt import build_system_prompt
from chat_engine.core.result import ErrorKind
from chat_engine.core.retrieval.assembler import ContextBudget
from chat_engine.core.retrieval.selector import ContextSelector
from chat_engine.models.streaming import (
    AssistantEndFrame,
    AssistantMessageFrame,
    AssistantStartFrame,
    AssistantTokenFrame,
    ContextAckFrame,
    ContextUpdateRequest,
    ErrorFrame,
    ServerFrame,
)
from chat_engine.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class RelayState(str, Enum):
    """Lifecycle of a single user turn."""

    IDLE = "idle"
    RETRIEVING = "retrieving"
    BUILDING = "building"
    STREAMING = "streaming"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def new_message_id() -> str:
    """Identifier shared by the start/token/end frames of one reply."""
    return f"assistant-{now_ms()}-{secrets.token_hex(3)}"


class ChatService:
    """
    Per-connection chat orchestration.

    Owns nothing global: the session store and both model clients are
    injected, so one instance serves exactly one connection.
    """

    def __init__(
        self,
        store: SessionStore,
        embedding_client: EmbeddingClient,
        completion_client: CompletionClient,
        retrieval: RetrievalSettings,
    ) -> None:
        """
        Initialize chat service.

        Args:
            store: Session state for this connection
            embedding_client: Embedding provider
            completion_client: Streaming completion provider
            retrieval: Context and history budgets
        """
        self.store = store
        self.embedding_client = embedding_client
        self.completion_client = completion_client
        self.selector = ContextSelector(embedding_client, ContextBudget.from_settings(retrieval))
        self.state = RelayState.IDLE
        self._reply_lock = asyncio.Lock()

    async def update_context(self, request: ContextUpdateRequest) -> AsyncGenerator[ServerFrame, None]:
        """
        Apply a context update.

        The acknowledgement is yielded as soon as the chunk list is in place,
        so lexical retrieval is usable while embeddings are computed.

        Yields:
            ServerFrame: ``context_ack`` then a status ``assistant_message``
        """
        changed = self.store.apply_context(request.context)
        chunks = self.store.chunks
        signature = self.store.signature

        yield ContextAckFrame(context_id=request.context_id, chunks=len(chunks))

        if changed and chunks:
            self.store.pending_signature = signature
            try:
                result = await self.embedding_client.embed_batch([chunk.text for chunk in chunks])
            finally:
                if self.store.pending_signature == signature:
                    self.store.pending_signature = None
            if result.is_ok:
                if self.store.install_embeddings(signature, result.value or []):
                    logger.info(
                        "Embedded chunks",
                        extra={"embedded": len(result.value or []), "signature": str(signature)},
                    )
            elif result.error_kind is ErrorKind.EMBEDDING_UNAVAILABLE:
                logger.warning(
                    "Embedding failed, falling back to lexical retrieval",
                    extra={"error_msg": result.error_message},
                )

        if self.store.embeddings_valid:
            mode = "Hybrid retrieval enabled."
        elif self.store.embeddings_pending:
            mode = "Lexical retrieval enabled until embeddings finish."
        else:
            mode = "Lexical retrieval enabled."
        yield AssistantMessageFrame(
            content=(
                f"Context updated: {len(self.store.chunks)} chunks, "
                f"{len(self.store.files)} files. {mode}"
            )
        )

    def build_messages(self, system_prompt: str, query: str) -> list[dict[str, str]]:
        """Assemble system prompt, bounded history and the new user turn."""
        messages = [{"role": "system", "content": system_prompt}]
        messages.extend(turn.to_message() for turn in self.store.recent_history())
        messages.append({"role": "user", "content": query})
        return messages

    async def stream_reply(self, query: str) -> AsyncGenerator[ServerFrame, None]:
        """
        Answer one user message.

        History is only extended once the completion stream finishes; a
        failed stream leaves it untouched.

        Args:
            query: Trimmed, non-empty user message

        Yields:
            ServerFrame: ``assistant_start``, ``assistant_token`` frames, and
                exactly one ``assistant_end`` (preceded by ``error`` on failure)
        """
        async with self._reply_lock:
            try:
                self.state = RelayState.RETRIEVING
                chunks = self.store.chunks
                embeddings = self.store.embeddings
                selected = await self.selector.select(chunks, query, embeddings)
                logger.info(
                    "Context selected",
                    extra={
                        "mode": "hybrid" if self.store.embeddings_valid else "lexical",
                        "selected": len(selected),
                        "chunk_count": len(chunks),
                    },
                )

                self.state = RelayState.BUILDING
                system_prompt = build_system_prompt(selected, self.store.stats)
                messages = self.build_messages(system_prompt, query)

                message_id = new_message_id()
                yield AssistantStartFrame(id=message_id, timestamp=now_ms())

                self.state = RelayState.STREAMING
                parts: list[str] = []
                failure: str | None = None
                try:
                    async with aclosing(self.completion_client.stream_chat(messages)) as fragments:
                        async for fragment in fragments:
                            if fragment.content:
                                parts.append(fragment.content)
                                yield AssistantTokenFrame(id=message_id, token=fragment.content)
                            if fragment.done:
                                break
                except CompletionEndpointError as e:
                    logger.warning(
                        "Completion stream failed, turn discarded",
                        extra={
                            "message_id": message_id,
                            "tokens": len(parts),
                            "error_kind": e.kind.value,
                            "error_msg": e.message,
                        },
                    )
                    failure = e.message
                except Exception as e:
                    log_exception_with_context(
                        logger,
                        "Completion stream raised unexpectedly, turn discarded",
                        e,
                        message_id=message_id,
                        tokens=len(parts),
                    )
                    failure = f"Completion stream failed: {e}"

                if failure is not None:
                    yield ErrorFrame(message=failure)
                    yield AssistantEndFrame(id=message_id, timestamp=now_ms())
                    return

                self.store.append_exchange(query, "".join(parts))
                logger.info(
                    "Completion stream finished",
                    extra={"message_id": message_id, "tokens": len(parts)},
                )
                yield AssistantEndFrame(id=message_id, timestamp=now_ms())
            finally:
                self.state = RelayState.IDLE
