"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: chat_engine.configs, chat_engine.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends

from chat_engine.application.services import AskService
from chat_engine.boundary.ollama import OllamaCompletionClient, OllamaEmbeddingClient
from chat_engine.configs import Settings, get_settings


class ServiceCache:
    """Container for cached collaborator instances."""

    def __init__(self):
        self._embedding_client = None
        self._completion_client = None

    @property
    def embedding_client(self) -> OllamaEmbeddingClient:
        """Get cached embedding client."""
        if self._embedding_client is None:
            settings = get_settings()
            self._embedding_client = OllamaEmbeddingClient(
                base_url=settings.ollama.base_url,
                model=settings.ollama.embed_model,
                batch_size=settings.retrieval.embed_batch_size,
                max_chars=settings.retrieval.max_chunk_chars,
                timeout=settings.ollama.request_timeout,
            )
        return self._embedding_client

    @property
    def completion_client(self) -> OllamaCompletionClient:
        """Get cached completion client."""
        if self._completion_client is None:
            settings = get_settings()
            self._completion_client = OllamaCompletionClient(
                base_url=settings.ollama.base_url,
                model=settings.ollama.model,
                num_ctx=settings.ollama.num_ctx,
                temperature=settings.ollama.temperature,
                timeout=settings.ollama.request_timeout,
            )
        return self._completion_client

    def clear(self) -> None:
        """Clear all cached instances."""
        self._embedding_client = None
        self._completion_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_embedding_client():
    """
    Get the embedding collaborator.

    Returns:
        EmbeddingClient: Shared Ollama embedding client
    """
    return get_service_cache().embedding_client


def get_completion_client():
    """
    Get the completion collaborator.

    Returns:
        CompletionClient: Shared Ollama completion client
    """
    return get_service_cache().completion_client


def get_ask_service(
    completion_client=Depends(get_completion_client),
    settings: Settings = Depends(get_settings_dependency),
) -> AskService:
    """
    Get ask service instance.

    Args:
        completion_client: Completion collaborator (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        AskService: Stateless question answering service
    """
    return AskService(completion_client=completion_client, retrieval=settings.retrieval)
