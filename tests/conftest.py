"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory embedding/completion collaborators, sample chunks, settings, app client
Dependencies: pytest, fastapi.testclient
System role: Test infrastructure and fixture management
"""

import pytest
from fastapi.testclient import TestClient

from chat_engine.api.deps import get_completion_client, get_embedding_client
from chat_engine.configs import RetrievalSettings
from chat_engine.main import create_app
from chat_engine.models.chunk import Chunk
from fakes import FakeCompletionClient, FakeEmbeddingClient


@pytest.fixture
def animal_chunks() -> list[Chunk]:
    """Three chunks, two about mammals and one about rockets."""
    return [
        Chunk(id="c1", text="cats are mammals", page_start=1, page_end=1),
        Chunk(id="c2", text="dogs are mammals", page_start=2, page_end=2),
        Chunk(id="c3", text="rockets orbit planets", page_start=3, page_end=4),
    ]


@pytest.fixture
def retrieval_settings() -> RetrievalSettings:
    """Default retrieval budgets."""
    return RetrievalSettings()


@pytest.fixture
def embedding_client() -> FakeEmbeddingClient:
    """Embedding collaborator that always succeeds."""
    return FakeEmbeddingClient()


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    """Completion collaborator streaming "Hello world"."""
    return FakeCompletionClient()


@pytest.fixture
def app(embedding_client: FakeEmbeddingClient, completion_client: FakeCompletionClient):
    """Application wired to the in-memory model clients."""
    application = create_app()
    application.dependency_overrides[get_embedding_client] = lambda: embedding_client
    application.dependency_overrides[get_completion_client] = lambda: completion_client
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """HTTP/WebSocket test client without lifespan startup."""
    return TestClient(app)
