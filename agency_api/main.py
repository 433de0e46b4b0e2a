"""
Main FastAPI application entry point.
Configures the app, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agency_api.config import Settings, get_settings
from agency_api.infrastructure.db.database import create_all_tables
from agency_api.infrastructure.email.email_service import EmailService
from agency_api.infrastructure.events.event_setup import setup_event_handlers
from agency_api.infrastructure.push.push_service import PushNotificationService
from agency_api.infrastructure.web.middleware.error_handler import (
    ErrorHandlerMiddleware,
    register_exception_handlers,
)
from agency_api.infrastructure.web.routers import (
    admin,
    contact,
    feedback,
    health,
    invoices,
    messages,
    notifications,
    projects,
    push,
)


logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.
    Setup and teardown operations.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.environment}")

    create_all_tables()
    logger.info("Database tables ready")

    if not app.state.push_service.is_configured:
        logger.warning("VAPID keys not configured, web push is disabled")

    yield

    # Shutdown
    logger.info("Shutting down application")
    await app.state.dispatcher.wait_for_pending()


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
        redoc_url=f"{settings.api_prefix}/redoc" if settings.debug else None,
        openapi_url=f"{settings.api_prefix}/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    # Services are built once and shared by every request
    app.state.settings = settings
    app.state.email_service = EmailService(settings)
    app.state.push_service = PushNotificationService(settings)
    app.state.dispatcher = setup_event_handlers(app.state.email_service, app.state.push_service)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add custom error handler middleware
    app.add_middleware(ErrorHandlerMiddleware)
    register_exception_handlers(app)

    # Include routers
    prefix = settings.api_prefix
    app.include_router(health.router, prefix=prefix, tags=["Health"])
    app.include_router(projects.router, prefix=f"{prefix}/projects", tags=["Projects"])
    app.include_router(invoices.router, prefix=f"{prefix}/invoices", tags=["Invoices"])
    app.include_router(notifications.router, prefix=f"{prefix}/notifications", tags=["Notifications"])
    app.include_router(push.router, prefix=f"{prefix}/push", tags=["Push Notifications"])
    app.include_router(messages.router, prefix=f"{prefix}/messages", tags=["Messages"])
    app.include_router(contact.router, prefix=f"{prefix}/contact", tags=["Contact"])
    app.include_router(feedback.router, prefix=f"{prefix}/feedback", tags=["Feedback"])
    app.include_router(admin.router, prefix=f"{prefix}/admin", tags=["Admin"])

    # Root endpoint
    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "environment": settings.environment,
            "docs": f"{prefix}/docs" if settings.debug else None,
            "health": f"{prefix}/health"
        }

    return app


# Create the FastAPI app instance
app = create_application()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "agency_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
