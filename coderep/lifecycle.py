"""
Application lifespan management.

Handles startup and shutdown:
- Logging configuration
- Database initialization
- Service container setup

Usage:
    async with open_app() as app:
        review = app.get(Services.REVIEW)
        await review.log_attempt("Two Sum", Difficulty.MEDIUM)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from .core.config import Settings, get_settings
from .core.container import ServiceContainer
from .core.database import Database
from .core.services import setup_services
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_app(
    settings: Optional[Settings] = None, configure_logging: bool = True
) -> AsyncIterator[ServiceContainer]:
    """Start the application and yield its service container."""
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_to_file, settings.logs_dir)

    database = Database(settings.database_url, echo=settings.database_echo)
    try:
        await database.init()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    container = setup_services(ServiceContainer(), database, settings)
    logger.info(f"coderep started ({settings.environment})")
    try:
        yield container
    finally:
        container.clear()
        await database.close()
        logger.info("coderep shut down")
