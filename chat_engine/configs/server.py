"""
WebSocket server settings.

Dependencies: pydantic_settings
System role: Listener configuration
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class ServerSettings(BaseSettings):
    """Host, port and path of the chat WebSocket listener."""

    model_config = SettingsConfigDict(
        env_prefix="CHAT_WS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    path: str = Field(default="/ws/chat", description="WebSocket route path")
