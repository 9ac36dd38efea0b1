"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sipangkat import __version__
from sipangkat.agent.config import GatewayConfig, get_gateway_config
from sipangkat.api.knowledge import router as knowledge_router
from sipangkat.api.routes import router as chat_router
from sipangkat.conversation.controller import GatewayFactory
from sipangkat.conversation.sessions import SessionRegistry
from sipangkat.intake.file_intake import MAX_FILE_SIZE

logger = logging.getLogger(__name__)


def _max_upload_size() -> int:
    megabytes = os.getenv("MAX_UPLOAD_MB")
    if megabytes:
        return int(megabytes) * 1024 * 1024
    return MAX_FILE_SIZE


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    config: GatewayConfig = app.state.config
    logger.info(
        f"Starting SiPangkat API (model={config.model_name}, "
        f"credentials={config.credential_mode}, env key={'set' if config.api_key else 'missing'})"
    )
    yield
    logger.info(f"Shutting down SiPangkat API ({len(app.state.sessions)} sessions)")


def create_app(
    config: GatewayConfig | None = None,
    gateway_factory: GatewayFactory | None = None,
    max_upload_size: int | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Gateway configuration. Loads from environment if omitted.
        gateway_factory: Optional override for building model gateways.
        max_upload_size: Attachment size ceiling in bytes.

    Returns:
        Configured FastAPI application instance.
    """
    config = config or get_gateway_config()

    application = FastAPI(
        title="SiPangkat API",
        description=(
            "Virtual assistant for rank promotion (Kenaikan Pangkat) questions at "
            "Dinas Kesehatan Kota Samarinda. Answers come from Gemini, optionally "
            "grounded in PDF or image attachments uploaded with the question."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.config = config
    application.state.sessions = SessionRegistry(config=config, gateway_factory=gateway_factory)
    application.state.max_upload_size = max_upload_size or _max_upload_size()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(chat_router)
    application.include_router(knowledge_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "sipangkat"}

    return application
