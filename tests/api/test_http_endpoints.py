"""
Test suite for the HTTP endpoints.

Tests health check and the stateless ask endpoint with overridden
model clients.

System role: Verification of the HTTP API surface
"""

from chat_engine.api.deps import get_completion_client
from fakes import FakeCompletionClient

CHUNKS = [
    {"id": "c1", "text": "cats are mammals", "pageStart": 1, "pageEnd": 1},
    {"id": "c2", "text": "rockets orbit planets", "pageStart": 5, "pageEnd": 6},
]


class TestHealthEndpoint:
    """Test suite for GET /api/v1/health."""

    def test_should_report_healthy_with_models(self, client) -> None:
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["message"] == "Server Healthy"
        assert body["chat_model"]
        assert body["embed_model"]


class TestAskEndpoint:
    """Test suite for POST /api/v1/ask."""

    def test_should_return_answer_and_citations(self, client) -> None:
        response = client.post("/api/v1/ask", json={"question": "what are cats", "chunks": CHUNKS})

        assert response.status_code == 200
        assert response.json() == {
            "answer": "Hello world",
            "citations": [{"id": "C1", "pageStart": 1, "pageEnd": 1}],
        }

    def test_blank_question_should_return_400(self, client) -> None:
        response = client.post("/api/v1/ask", json={"question": " ", "chunks": CHUNKS})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required field: question"

    def test_missing_chunks_should_return_400(self, client) -> None:
        response = client.post("/api/v1/ask", json={"question": "why"})

        assert response.status_code == 400

    def test_completion_failure_should_return_502(self, app, client) -> None:
        app.dependency_overrides[get_completion_client] = lambda: FakeCompletionClient(fail_after=0)

        response = client.post("/api/v1/ask", json={"question": "cats", "chunks": CHUNKS})

        assert response.status_code == 502
        assert response.json()["detail"] == "Ollama stream failed: connection reset"
