"""
FastAPI application for the issue creation wizard.

Run with:  python -m issue_wizard.main
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from issue_wizard.api.middleware import RequestContextMiddleware, add_exception_handlers
from issue_wizard.api.v1 import api_router
from issue_wizard.api.v1.schemas import HealthResponse
from issue_wizard.core.logging import configure_logging
from issue_wizard.settings import Settings, get_settings


logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    """Build the application with logging, middleware and routes wired up."""
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, format_type=settings.log_format)

    app = FastAPI(
        title=settings.app_name,
        description="Step-by-step issue creation against an issue tracker",
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)
    add_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        """Liveness check."""
        return HealthResponse(
            status="healthy",
            version=settings.app_version,
            tracker_configured=settings.tracker_configured,
        )

    app.include_router(api_router)

    logger.info(f"{settings.app_name} {settings.app_version} configured ({settings.environment})")
    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
