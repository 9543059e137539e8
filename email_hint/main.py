"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (directory lookup, health)
- Error handlers (centralized domain-to-HTTP mapping)
- Access logging middleware
- Logging configuration
- The directory provider, owned by the application and closed on shutdown

No business logic belongs here.

Run with ``python -m email_hint serve`` or
``uvicorn --factory email_hint.main:create_app``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from email_hint.core.config import Settings, load_settings
from email_hint.domain.directory.ports import DirectoryProvider
from email_hint.infrastructure.directory.providers import build_directory_provider
from email_hint.interfaces.directory.dependencies import PROVIDER_STATE_KEY
from email_hint.interfaces.directory.router import router as directory_router
from email_hint.interfaces.health import router as health_router
from email_hint.shared.errors.handlers import register_error_handlers
from email_hint.shared.logging import configure_logging
from email_hint.shared.middleware import AccessLogMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: release the directory provider on shutdown."""
    logger.info("%s %s started.", app.title, app.version)

    yield

    provider = getattr(app.state, PROVIDER_STATE_KEY, None)
    if provider is not None:
        provider.close()
    logger.info("%s stopped.", app.title)


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[DirectoryProvider] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        settings: Application settings. Loaded from the environment if omitted.
        provider: Directory provider to serve requests with. Built from
            ``settings.storage_backend`` if omitted.

    Returns:
        A fully configured FastAPI application instance.

    Raises:
        ConfigurationError: If settings are omitted and the environment
            lacks a required variable.
    """
    if settings is None:
        settings = load_settings()

    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    if provider is None:
        provider = build_directory_provider(settings)
    setattr(app.state, PROVIDER_STATE_KEY, provider)

    # --- Middleware ---
    app.add_middleware(AccessLogMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(directory_router)

    return app
