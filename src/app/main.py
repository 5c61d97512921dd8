import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI

from src.app.api.v1 import clients, transactions, health
from src.app.api.errors import register_exception_handlers
from src.app.config import get_settings
from src.app.containers import Container, API_MODULES
from src.app.logging import configure_logging

# Configure logging at module load time
configure_logging(get_settings().logging.level)

logger = logging.getLogger(__name__)

# Type alias for lifespan context manager
LifespanType = Callable[[FastAPI], AsyncIterator[None]]


@asynccontextmanager
async def default_lifespan(app: FastAPI):
    """Default application lifespan manager - creates the schema on startup, disposes the pool on shutdown."""
    container: Container = app.state.container
    logger.info("Starting DimDim API...")

    db = container.database()
    await db.create_tables()
    logger.info("Database initialized successfully")

    yield

    logger.info("Shutting down DimDim API...")
    await db.dispose()


def create_app(container: Container, lifespan: LifespanType = default_lifespan) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        container: DI container providing settings, database and services.
        lifespan: Optional lifespan context manager. If not provided, uses default_lifespan.

    Returns:
        Configured FastAPI application.
    """
    container.wire(modules=API_MODULES)

    config = container.config()

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        description=config.app_description,
        lifespan=lifespan,
    )

    # Attach container to app state for access in lifespan and routes
    app.state.container = container

    register_exception_handlers(app)

    # Include routers
    app.include_router(clients.router, prefix="/api/v1")
    app.include_router(transactions.router, prefix="/api/v1")
    app.include_router(transactions.client_transactions_router, prefix="/api/v1")
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {"message": "Welcome to DimDim API"}

    return app

container = Container()
app = create_app(container=container)
