"""
Ollama streaming chat client.

Posts the message list to ``/api/chat`` with ``stream: true`` and decodes
the newline-delimited JSON response into completion fragments.

Dependencies: httpx, chat_engine.core
System role: Completion provider adapter
"""

import json
import logging
from collections.abc import AsyncIterator

import httpx

from chat_engine.core.exceptions import CompletionEndpointError
from chat_engine.core.interfaces import CompletionFragment

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"


class OllamaCompletionClient:
    """Streaming chat completions against an Ollama server."""

    def __init__(
        self,
        base_url: str,
        model: str,
        num_ctx: int = 8192,
        temperature: float = 0.2,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize completion client.

        Args:
            base_url: Ollama server URL
            model: Chat model name
            num_ctx: Context window requested from the model
            temperature: Sampling temperature
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a mock)
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.num_ctx = num_ctx
        self.temperature = temperature
        self.timeout = timeout
        self._transport = transport

    async def stream_chat(self, messages: list[dict[str, str]]) -> AsyncIterator[CompletionFragment]:
        """
        Stream a chat completion.

        Blank and unparseable lines are skipped. The stream ends after the
        first fragment flagged ``done``.

        Args:
            messages: Role/content messages, system prompt first

        Yields:
            CompletionFragment: Decoded fragments in arrival order

        Raises:
            CompletionEndpointError: On non-OK status, an error line, or a
                transport failure at any point of the stream
        """
        payload = {
            "model": self.model,
            "stream": True,
            "messages": messages,
            "options": {
                "num_ctx": self.num_ctx,
                "temperature": self.temperature,
            },
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                async with client.stream("POST", CHAT_PATH, json=payload) as response:
                    if not response.is_success:
                        body = (await response.aread()).decode("utf-8", errors="replace")
                        raise CompletionEndpointError(
                            f"Ollama error ({response.status_code}): {body or response.reason_phrase}",
                            status_code=response.status_code,
                        )

                    async for line in response.aiter_lines():
                        fragment = _decode_line(line)
                        if fragment is None:
                            continue
                        yield fragment
                        if fragment.done:
                            return
        except httpx.HTTPError as e:
            logger.warning("Completion stream failed", extra={"error_msg": str(e)})
            raise CompletionEndpointError(f"Ollama stream failed: {e}") from e


def _decode_line(line: str) -> CompletionFragment | None:
    if not line.strip():
        return None
    try:
        data = json.loads(line)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    if data.get("error"):
        raise CompletionEndpointError(f"Ollama error: {data['error']}")

    message = data.get("message")
    content = message.get("content") if isinstance(message, dict) else None
    return CompletionFragment(content=str(content or ""), done=bool(data.get("done")))
