"""
InnoHub API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database and Redis connections
- Background job scheduler
- CORS middleware and the error boundary
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from innohub.api import api_router
from innohub.core.auth import Actor, require_roles
from innohub.core.config import settings
from innohub.core.database import async_session_maker, close_db, init_db
from innohub.core.exceptions import NotFoundError, register_exception_handlers
from innohub.core.redis import close_redis, init_redis, redis_status
from innohub.core.scheduler import (
    list_registered_jobs,
    start_scheduler,
    stop_scheduler,
    trigger_job_manually,
)
from innohub.modules.articles import register_article_jobs
from innohub.modules.users.models import UserRole

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

require_admin = require_roles(UserRole.ADMIN.value)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Redis connection
    - Database connection
    - Background job scheduler
    """
    logger.info(f"Starting InnoHub API in {settings.python_env} mode...")

    # Redis is optional outside production: rate limits fall back to memory
    try:
        await init_redis()
        logger.info("Redis connected")
    except Exception as e:
        logger.error(f"Redis connection failed: {e}")
        if settings.is_production:
            raise

    try:
        await init_db()
        logger.info("Database connected")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        if settings.is_production:
            raise

    # Jobs are registered even when the scheduler is off so they can be triggered manually
    register_article_jobs()
    if settings.scheduler_enabled:
        try:
            await start_scheduler()
            logger.info("Background scheduler started")
        except Exception as e:
            logger.error(f"Background scheduler failed to start: {e}")
            if settings.is_production:
                raise

    yield

    logger.info("Shutting down InnoHub API...")

    # Stop the scheduler first (wait for running jobs)
    await stop_scheduler()
    await close_redis()
    await close_db()
    logger.info("Cleanup complete")


app = FastAPI(
    title="InnoHub API",
    description="Articles, projects, startups and internship applications with moderation",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api/v1")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to InnoHub API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check: database reachable, Redis reported but optional."""
    async with async_session_maker() as session:
        await session.execute(text("SELECT 1"))

    return {"status": "ready", "database": "connected", "redis": await redis_status()}


# ============================================
# Background Job Endpoints
# ============================================
# Manual triggering for operators. Jobs otherwise run on schedule.


@app.get("/debug/jobs", tags=["Debug"])
async def list_jobs(_admin: Actor = Depends(require_admin)) -> dict:
    """List registered background jobs and their next run time."""
    return {"jobs": list_registered_jobs()}


@app.post("/debug/jobs/{job_id}/trigger", tags=["Debug"])
async def trigger_job(job_id: str, admin: Actor = Depends(require_admin)) -> dict:
    """
    Run a background job immediately, bypassing the schedule.

    Available jobs:
        - articles_release_scheduled

    Raises:
        NotFoundError: If job_id is not registered
    """
    try:
        result = await trigger_job_manually(job_id)
    except ValueError as e:
        raise NotFoundError("Job", job_id) from e

    logger.info(f"Admin {admin.id} triggered job {job_id}: {result['status']}")
    return result
