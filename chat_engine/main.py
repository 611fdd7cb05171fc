"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, uvicorn, chat_engine.api, chat_engine.observability, chat_engine.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_engine import __version__
from chat_engine.api import api_router
from chat_engine.api.deps import get_service_cache
from chat_engine.api.routers import websocket_chat
from chat_engine.configs import get_settings
from chat_engine.observability.logger import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging and builds the shared model clients once.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    cache = get_service_cache()
    _ = cache.embedding_client
    _ = cache.completion_client
    logger.info(
        "Model clients initialized",
        extra={
            "base_url": settings.ollama.base_url,
            "chat_model": settings.ollama.model,
            "embed_model": settings.ollama.embed_model,
        },
    )

    yield

    cache.clear()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="PDF Chat Engine",
        description="Retrieval-augmented WebSocket chat over extracted PDF chunks",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")
    app.add_api_websocket_route(settings.server.path, websocket_chat, name="chat")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "chat_engine.main:app",
        host=settings.server.host,
        port=settings.server.port,
    )
