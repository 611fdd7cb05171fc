"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_ask_service,
    get_completion_client,
    get_embedding_client,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "get_ask_service",
    "get_completion_client",
    "get_embedding_client",
    "get_service_cache",
    "get_settings_dependency",
]
