"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    GavelError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
)
from shared.logging_config import configure_logging
from modules.debates.routes import router as debates_router
from modules.reputation.routes import router as reputation_router
from .routes import health

logger = logging.getLogger(__name__)

# Most specific first; GavelError itself falls through to 500
ERROR_STATUS: list[tuple[type[GavelError], int]] = [
    (NotFoundError, 404),
    (ValidationError, 422),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ConflictError, 409),
    (ExternalServiceError, 502),
]


def status_for(error: GavelError) -> int:
    """HTTP status code for a domain error."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return 500


async def gavel_error_handler(request: Request, exc: GavelError) -> JSONResponse:
    """Render a GavelError as JSON with its mapped status code."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("Unhandled domain error on %s: %s", request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Starting %s on %s:%s (storage: %s)",
        settings.app_name, settings.host, settings.port, settings.storage_backend,
    )
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Staked debates: turn-based arguments, weighted voting and prize settlement",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(GavelError, gavel_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(debates_router, prefix="/api/debates", tags=["debates"])
    app.include_router(reputation_router, prefix="/api/reputation", tags=["reputation"])

    return app


# Application instance for uvicorn
app = create_app()
