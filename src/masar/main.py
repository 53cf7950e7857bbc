"""
Masar API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database and Redis connections
- WhatsApp notification dispatcher
- Background job scheduler
- CORS middleware and error envelope handlers
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

import masar.models  # noqa: F401
from masar import __version__
from masar.api import api_router
from masar.core.auth import CurrentUser, require_roles
from masar.core.config import Settings, get_settings
from masar.core.database import close_db, init_db
from masar.core.exceptions import NotFoundError, register_exception_handlers
from masar.core.notifications import NotificationDispatcher
from masar.core.redis import close_redis, init_redis
from masar.core.scheduler import (
    list_registered_jobs,
    start_scheduler,
    stop_scheduler,
    trigger_job_manually,
)
from masar.modules.selection.jobs import register_selection_jobs
from masar.modules.shared.schemas import ApiResponse
from masar.modules.users.models import UserRole

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Redis connection
    - Database connection
    - Notification dispatcher worker
    - Background job scheduler
    """
    settings: Settings = app.state.settings
    dispatcher: NotificationDispatcher = app.state.dispatcher

    # Startup
    logger.info(f"Starting {settings.app_name} in {settings.python_env} mode...")

    # Redis is optional outside production; the rate limiter falls back to memory
    try:
        await init_redis(settings)
        logger.info("[OK] Redis connected")
    except Exception as e:
        logger.error(f"[FAIL] Redis connection failed: {e}")
        await close_redis()
        if settings.is_production:
            raise

    try:
        await init_db(settings)
        logger.info("[OK] Database connected")
    except Exception as e:
        logger.error(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    dispatcher.start()

    try:
        await start_scheduler()
        logger.info("[OK] Background scheduler started")
    except Exception as e:
        logger.error(f"[FAIL] Background scheduler failed to start: {e}")
        if settings.is_production:
            raise

    yield  # Application runs here

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")

    await stop_scheduler()
    await dispatcher.stop()
    await close_redis()
    await close_db()
    logger.info("[OK] Cleanup complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application from the given (or cached) settings."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Teacher recruitment matching API: selections, acceptances and videos",
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    # Routers and auth dependencies resolve Settings through get_settings
    app.dependency_overrides[get_settings] = lambda: settings
    app.state.dispatcher = NotificationDispatcher(settings)

    # Scheduled in the lifespan; registered here so they can be listed and triggered
    register_selection_jobs()

    app.include_router(api_router, prefix="/api")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings.is_production)

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        """Root endpoint - API welcome message."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "status": "running",
            "environment": settings.python_env,
        }

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {"status": "healthy"}

    admin_only = require_roles(UserRole.ADMIN)

    @app.get("/api/jobs", tags=["Jobs"], response_model=ApiResponse[list[dict[str, Any]]])
    async def list_jobs(user: CurrentUser = Depends(admin_only)) -> ApiResponse:
        """List registered background jobs and their next run time (admin)."""
        return ApiResponse(data=list_registered_jobs())

    @app.post(
        "/api/jobs/{job_id}/trigger",
        tags=["Jobs"],
        response_model=ApiResponse[dict[str, Any]],
    )
    async def trigger_job(job_id: str, user: CurrentUser = Depends(admin_only)) -> ApiResponse:
        """
        Run a background job now, outside its schedule (admin).

        Raises:
            NotFoundError: If no job is registered under job_id
        """
        try:
            result = await trigger_job_manually(job_id)
        except ValueError as e:
            raise NotFoundError("Job") from e

        logger.info(f"Job {job_id} triggered by {user}: {result['status']}")
        message = "Job executed" if result["status"] == "success" else "Job failed"
        return ApiResponse(message=message, data=result)

    return app


app = create_app()
