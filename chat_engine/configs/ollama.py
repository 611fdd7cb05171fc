"""
Ollama endpoint settings.

Base URL and model names for the embedding and chat completion endpoints.

Dependencies: pydantic_settings
System role: Model endpoint configuration
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class OllamaSettings(BaseSettings):
    """Ollama connection and generation options."""

    model_config = SettingsConfigDict(
        env_prefix="OLLAMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:11434",
        description="Base URL of the Ollama server",
    )
    model: str = Field(
        default="llama3:8b",
        description="Chat completion model name",
    )
    embed_model: str = Field(
        default="nomic-embed-text",
        description="Embedding model name",
    )
    num_ctx: int = Field(
        default=8192,
        ge=512,
        description="Context window passed to the completion endpoint",
    )
    temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for completions",
    )
    request_timeout: float = Field(
        default=120.0,
        gt=0,
        description="HTTP timeout in seconds for embedding and completion calls",
    )
