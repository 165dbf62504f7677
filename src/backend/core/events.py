"""
Application lifecycle event handlers.

Startup builds the configured storage backend and seeds reference data;
shutdown closes the backend.
"""

from typing import Callable

import structlog
from fastapi import FastAPI

from core.config import settings
from repositories.provider import close_storage, init_storage

logger = structlog.get_logger(__name__)


def create_start_app_handler(app: FastAPI) -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        logger.info("Starting VoteHub API...", storage_backend=settings.STORAGE_BACKEND)

        storage = await init_storage(settings)
        app.state.storage = storage

        if settings.SEED_CATEGORIES:
            from services.startup_seeder import seed_all

            await seed_all(storage)

        logger.info("VoteHub API started successfully")

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        logger.info("Shutting down VoteHub API...")
        await close_storage()
        logger.info("VoteHub API shutdown complete")

    return stop_app
