"""
Unified application settings.

Combines the Ollama, server and retrieval sections into one object that the
app factory and the FastAPI dependencies share.

Dependencies: chat_engine.configs section modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from chat_engine.configs.base import BaseSettings
from chat_engine.configs.ollama import OllamaSettings
from chat_engine.configs.retrieval import RetrievalSettings
from chat_engine.configs.server import ServerSettings


class Settings(BaseSettings):
    """All configuration sections, each read from its own env prefix."""

    ollama: OllamaSettings = Field(default_factory=OllamaSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get the process-wide settings.

    The environment and ``.env`` are read on first call only.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
