"""
Test suite for the Ollama HTTP clients.

Uses httpx.MockTransport so no server is contacted.

System role: Verification of the embedding and completion adapters
"""

import json

import httpx
import pytest

from chat_engine.boundary.ollama import OllamaCompletionClient, OllamaEmbeddingClient
from chat_engine.core.exceptions import CompletionEndpointError
from chat_engine.core.result import ErrorKind

BASE_URL = "http://ollama.test"


def _embedding_client(handler, **kwargs) -> OllamaEmbeddingClient:
    return OllamaEmbeddingClient(
        BASE_URL,
        "nomic-embed-text",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def _completion_client(handler) -> OllamaCompletionClient:
    return OllamaCompletionClient(
        BASE_URL,
        "llama3:8b",
        num_ctx=4096,
        temperature=0.1,
        transport=httpx.MockTransport(handler),
    )


def _ndjson(*lines) -> bytes:
    return "\n".join(line if isinstance(line, str) else json.dumps(line) for line in lines).encode()


class TestOllamaEmbeddingClient:
    """Test suite for OllamaEmbeddingClient."""

    @pytest.mark.asyncio
    async def test_should_batch_and_truncate_texts(self) -> None:
        requests: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            requests.append(body)
            return httpx.Response(200, json={"embeddings": [[float(len(t))] for t in body["input"]]})

        client = _embedding_client(handler, batch_size=2, max_chars=5)

        result = await client.embed_batch(["alpha", "beta", "gamma-ray"])

        assert result.is_ok
        assert result.value == [[5.0], [4.0], [5.0]]
        assert [body["input"] for body in requests] == [["alpha", "beta"], ["gamma"]]
        assert requests[0]["model"] == "nomic-embed-text"
        assert requests[0]["truncate"] is True

    @pytest.mark.asyncio
    async def test_empty_input_should_not_call_server(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("unexpected request")

        result = await _embedding_client(handler).embed_batch([])

        assert result.is_ok
        assert result.value == []

    @pytest.mark.asyncio
    async def test_server_error_should_return_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="model not loaded")

        result = await _embedding_client(handler).embed_batch(["text"])

        assert not result.is_ok
        assert result.error_kind is ErrorKind.EMBEDDING_UNAVAILABLE
        assert result.error_message == "embed failed (500): model not loaded"

    @pytest.mark.asyncio
    async def test_connection_error_should_return_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = await _embedding_client(handler).embed_batch(["text"])

        assert result.error_kind is ErrorKind.EMBEDDING_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_embed_one_should_send_string_input(self) -> None:
        seen: list[object] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content)["input"])
            return httpx.Response(200, json={"embeddings": [[0.1, 0.2]]})

        result = await _embedding_client(handler).embed_one("what is a cat")

        assert result.value == [0.1, 0.2]
        assert seen == ["what is a cat"]

    @pytest.mark.asyncio
    async def test_embed_one_without_vectors_should_fail(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"embeddings": []})

        result = await _embedding_client(handler).embed_one("query")

        assert not result.is_ok


class TestOllamaCompletionClient:
    """Test suite for OllamaCompletionClient."""

    @pytest.mark.asyncio
    async def test_should_decode_stream_and_skip_bad_lines(self) -> None:
        payloads: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            payloads.append(json.loads(request.content))
            content = _ndjson(
                {"message": {"role": "assistant", "content": "Hel"}, "done": False},
                "",
                "not json",
                {"message": {"role": "assistant", "content": "lo"}, "done": False},
                {"message": {"role": "assistant", "content": ""}, "done": True},
                {"message": {"role": "assistant", "content": "ignored"}, "done": False},
            )
            return httpx.Response(200, content=content)

        client = _completion_client(handler)

        fragments = [f async for f in client.stream_chat([{"role": "user", "content": "hi"}])]

        assert [f.content for f in fragments] == ["Hel", "lo", ""]
        assert fragments[-1].done is True
        assert payloads[0]["stream"] is True
        assert payloads[0]["options"] == {"num_ctx": 4096, "temperature": 0.1}
        assert payloads[0]["model"] == "llama3:8b"

    @pytest.mark.asyncio
    async def test_non_ok_status_should_raise(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="model 'llama3:8b' not found")

        client = _completion_client(handler)

        with pytest.raises(CompletionEndpointError) as exc_info:
            _ = [f async for f in client.stream_chat([])]

        assert exc_info.value.message == "Ollama error (404): model 'llama3:8b' not found"
        assert exc_info.value.details == {"status_code": 404}

    @pytest.mark.asyncio
    async def test_error_line_should_raise(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                content=_ndjson(
                    {"message": {"content": "par"}, "done": False},
                    {"error": "out of memory"},
                ),
            )

        client = _completion_client(handler)
        received: list[str] = []

        with pytest.raises(CompletionEndpointError, match="out of memory"):
            async for fragment in client.stream_chat([]):
                received.append(fragment.content)

        assert received == ["par"]

    @pytest.mark.asyncio
    async def test_transport_failure_should_raise(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _completion_client(handler)

        with pytest.raises(CompletionEndpointError, match="Ollama stream failed"):
            _ = [f async for f in client.stream_chat([])]
