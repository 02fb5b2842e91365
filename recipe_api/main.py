# recipe_api/main.py

"""
Application factory.

Run with:  uvicorn recipe_api.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_api.adapters.configuration.config import Settings
from recipe_api.adapters.configuration.container import ServiceContainer, build_services
from recipe_api.adapters.inbound.api.v1.router import api_router
from recipe_api.shared.middleware.csrf_middleware import CSRFProtectionMiddleware, csrf_settings
from recipe_api.shared.middleware.error_handler_middleware import (
    ErrorHandlerMiddleware,
    register_exception_handlers,
)
from recipe_api.shared.middleware.logging_middleware import RequestLoggingMiddleware
from recipe_api.shared.middleware.security_headers_middleware import (
    CORRELATION_HEADER,
    SecurityHeadersMiddleware,
)
from recipe_api.shared.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    services: ServiceContainer = app.state.services
    settings = services.settings
    logger.info(f"[Startup] {settings.PROJECT_NAME} {settings.VERSION} ({settings.ENVIRONMENT})")

    if services.db is not None and settings.DB_AUTO_CREATE:
        await services.db.create_tables()

    try:
        yield
    finally:
        if services.db is not None:
            await services.db.close()
        logger.info("[Shutdown] finished")


def create_app(settings: Optional[Settings] = None, services: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Raises:
        ConfigurationFatal: If JWT_SECRET is missing or shorter than 32 characters
    """
    settings = settings or (services.settings if services else Settings())
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    services = services or build_services(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )
    app.state.services = services
    app.state.db = services.db

    # Starlette aplica em ordem inversa: o último adicionado é o mais externo
    app.add_middleware(CSRFProtectionMiddleware, **csrf_settings(settings))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Guest-ID", settings.CSRF_HEADER_NAME],
        expose_headers=[CORRELATION_HEADER, "Retry-After"],
    )
    app.add_middleware(RequestLoggingMiddleware, production=settings.is_production)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router, prefix=API_PREFIX)

    return app
