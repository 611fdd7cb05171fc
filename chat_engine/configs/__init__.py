"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from chat_engine.configs.ollama import OllamaSettings
from chat_engine.configs.retrieval import RetrievalSettings
from chat_engine.configs.server import ServerSettings
from chat_engine.configs.settings import Settings, get_settings

__all__ = [
    "OllamaSettings",
    "RetrievalSettings",
    "ServerSettings",
    "Settings",
    "get_settings",
]
