"""
Health check API endpoints.

Routes: GET /health

Dependencies: chat_engine.configs
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from chat_engine.api.deps import get_settings_dependency
from chat_engine.configs import Settings


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    chat_model: str
    embed_model: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings_dependency)) -> HealthResponse:
    """Basic health check."""
    return HealthResponse(
        status="healthy",
        message="Server Healthy",
        chat_model=settings.ollama.model,
        embed_model=settings.ollama.embed_model,
    )
