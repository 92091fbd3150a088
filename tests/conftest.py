import logging
import os
from datetime import datetime

import pytest

# Set test environment variables
os.environ["CODEREP_ENVIRONMENT"] = "test"
os.environ["CODEREP_LOG_LEVEL"] = "WARNING"

from coderep.core.database import Database  # noqa: E402
from coderep.infrastructure.repositories import (  # noqa: E402
    SqlAlchemyProblemRepository,
    SqlAlchemyTodoRepository,
)
from coderep.services.review_service import ReviewService  # noqa: E402
from coderep.services.todo_service import TodoService  # noqa: E402

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def _isolate_root_logger():
    """Keep each test's logging setup (and any log files) out of the next test."""
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        # pytest manages its own capture handlers
        if handler not in before and not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
async def database():
    """Fresh in-memory database with all tables."""
    db = Database(MEMORY_URL)
    await db.init()
    yield db
    await db.close()


@pytest.fixture
def problem_repository(database):
    return SqlAlchemyProblemRepository(database.session_factory)


@pytest.fixture
def todo_repository(database):
    return SqlAlchemyTodoRepository(database.session_factory)


@pytest.fixture
def todo_service(todo_repository):
    return TodoService(todo_repository)


@pytest.fixture
def review_service(problem_repository, todo_service):
    return ReviewService(problem_repository, todo_service)


@pytest.fixture
def day0():
    """A mid-afternoon timestamp used as 'day 0' in scheduling scenarios."""
    return datetime(2026, 1, 5, 14, 30, 15)
