"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routes and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.notifications.console import ConsoleNotificationSink
from src.adapters.repository.postgres import PostgresRegistryRepository, run_migrations
from src.api.v1 import router as v1_router
from src.config.settings import Settings, get_settings
from src.domain.registry import Registry
from src.domain.service import RegistryService

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Name Registry API v1 - Claim names and transfer their ownership",
    },
]


def build_registry_service(
    settings: Settings, pool: ConnectionPool | None = None
) -> RegistryService:
    """
    Build the deployment's single registry service.

    With a pool, state is restored from and saved to PostgreSQL; without
    one the registry lives in memory only.
    """
    notifications = ConsoleNotificationSink()

    if pool is None:
        registry = Registry(settings.administrative_owner, notifications)
        return RegistryService(registry=registry)

    repository = PostgresRegistryRepository(pool)
    snapshot = repository.load()
    if snapshot is None:
        logger.info("No saved registry state, starting empty")
        registry = Registry(settings.administrative_owner, notifications)
    else:
        registry = Registry.from_snapshot(snapshot, notifications)
    return RegistryService(registry=registry, repository=repository)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Configures logging
    - Creates database connection pool and runs migrations (if persistence enabled)
    - Builds the registry service
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info("Starting application...")

    pool = None
    if settings.persistence_enabled:
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)

    app.state.pool = pool
    app.state.registry_service = build_registry_service(settings, pool)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="registrar",
    description="Name Registry API - Unique name claims with transferable ownership",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application (and database, when enabled) are healthy.
    Raises exception if database connection fails.
    """
    pool = request.app.state.pool
    if pool is not None:
        with pool.connection() as conn:
            conn.execute("SELECT 1")

    return {"status": "healthy"}
