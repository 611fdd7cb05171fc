"""Ollama HTTP adapters."""

from chat_engine.boundary.ollama.completion_client import OllamaCompletionClient
from chat_engine.boundary.ollama.embedding_client import OllamaEmbeddingClient

__all__ = ["OllamaCompletionClient", "OllamaEmbeddingClient"]
