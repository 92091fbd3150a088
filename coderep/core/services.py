"""
Service Registry - wires application services into a container.

Usage:
    from coderep.core.services import Services, setup_services

    container = ServiceContainer()
    setup_services(container, database, settings)
    review = container.get(Services.REVIEW)
"""

import logging

from .config import Settings
from .container import ServiceContainer
from .database import Database

logger = logging.getLogger(__name__)


class Services:
    """Registered service names."""

    SETTINGS = "settings"
    DATABASE = "database"
    PROBLEM_REPOSITORY = "problem_repository"
    TODO_REPOSITORY = "todo_repository"
    REVIEW_QUEUE = "review_queue"
    TODO = "todo_service"
    REVIEW = "review_service"


def setup_services(
    container: ServiceContainer, database: Database, settings: Settings
) -> ServiceContainer:
    """
    Register all application services in ``container``.

    The database must already be initialized. Services are created lazily on
    first ``get``.
    """
    container.register_instance(Services.SETTINGS, settings)
    container.register_instance(Services.DATABASE, database)

    # ========================================================================
    # Record store
    # ========================================================================

    def create_problem_repository(c):
        from ..infrastructure.repositories import SqlAlchemyProblemRepository

        return SqlAlchemyProblemRepository(c.get(Services.DATABASE).session_factory)

    container.register(Services.PROBLEM_REPOSITORY, create_problem_repository)

    def create_todo_repository(c):
        from ..infrastructure.repositories import SqlAlchemyTodoRepository

        return SqlAlchemyTodoRepository(c.get(Services.DATABASE).session_factory)

    container.register(Services.TODO_REPOSITORY, create_todo_repository)

    # ========================================================================
    # Business logic
    # ========================================================================

    def create_review_queue(c):
        from ..services.srs.review_queue import ReviewQueue

        return ReviewQueue(c.get(Services.PROBLEM_REPOSITORY))

    container.register(Services.REVIEW_QUEUE, create_review_queue)

    def create_todo_service(c):
        from ..services.todo_service import TodoService

        return TodoService(
            c.get(Services.TODO_REPOSITORY),
            search_threshold=c.get(Services.SETTINGS).search_threshold,
        )

    container.register(Services.TODO, create_todo_service)

    def create_review_service(c):
        from ..services.review_service import ReviewService

        return ReviewService(
            c.get(Services.PROBLEM_REPOSITORY),
            c.get(Services.TODO),
            queue=c.get(Services.REVIEW_QUEUE),
            search_threshold=c.get(Services.SETTINGS).search_threshold,
        )

    container.register(Services.REVIEW, create_review_service)

    logger.info(f"Registered services: {', '.join(container.names())}")
    return container
