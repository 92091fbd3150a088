"""
Tests for SQLAlchemy repository implementations.

Runs against an in-memory SQLite database created per test.
"""

from datetime import datetime, timedelta

import pytest

from coderep.models.problem import Difficulty, Problem, ReviewRecord
from coderep.models.todo_item import TodoItem

BASE = datetime(2026, 1, 5, 9, 0)


# =============================================================================
# ProblemRepository
# =============================================================================


class TestSqlAlchemyProblemRepository:
    @pytest.mark.asyncio
    async def test_save_and_get(self, problem_repository):
        problem = Problem(
            name="Two Sum",
            number=1,
            review_history=[
                ReviewRecord(date=BASE, difficulty=Difficulty.HARD, notes="brute force"),
                ReviewRecord(date=BASE + timedelta(days=3), difficulty=Difficulty.EASY),
            ],
            next_review_date=datetime(2026, 4, 7),
            created_at=BASE,
        )

        await problem_repository.save(problem)
        loaded = await problem_repository.get(problem.id)

        assert loaded == problem
        assert [r.difficulty for r in loaded.review_history] == [
            Difficulty.HARD,
            Difficulty.EASY,
        ]

    @pytest.mark.asyncio
    async def test_get_missing(self, problem_repository):
        assert await problem_repository.get("missing") is None

    @pytest.mark.asyncio
    async def test_save_overwrites(self, problem_repository):
        problem = Problem(name="Two Sum")
        await problem_repository.save(problem)

        problem.review_history.append(ReviewRecord(date=BASE, difficulty=Difficulty.MEDIUM))
        problem.next_review_date = datetime(2026, 1, 12)
        await problem_repository.save(problem)

        loaded = await problem_repository.get(problem.id)
        assert len(loaded.review_history) == 1
        assert loaded.next_review_date == datetime(2026, 1, 12)

    @pytest.mark.asyncio
    async def test_find_by_name_case_insensitive(self, problem_repository):
        older = Problem(name="Two Sum", created_at=BASE)
        newer = Problem(name="TWO SUM", created_at=BASE + timedelta(days=1))
        await problem_repository.save(newer)
        await problem_repository.save(older)

        found = await problem_repository.find_by_name("two sum")

        assert found.id == older.id
        assert await problem_repository.find_by_name("two") is None

    @pytest.mark.asyncio
    async def test_find_by_name_folds_unicode(self, problem_repository):
        problem = Problem(name="Straße Élan")
        await problem_repository.save(problem)

        found = await problem_repository.find_by_name("STRASSE élan")

        assert found.id == problem.id

    @pytest.mark.asyncio
    async def test_list_all_filters_archived(self, problem_repository):
        active = Problem(name="Active", created_at=BASE)
        archived = Problem(name="Archived", created_at=BASE + timedelta(hours=1), archived=True)
        await problem_repository.save(archived)
        await problem_repository.save(active)

        assert [p.id for p in await problem_repository.list_all()] == [active.id]
        assert [p.id for p in await problem_repository.list_all(include_archived=True)] == [
            active.id,
            archived.id,
        ]

    @pytest.mark.asyncio
    async def test_set_archived(self, problem_repository):
        problem = Problem(name="Two Sum")
        await problem_repository.save(problem)

        assert await problem_repository.set_archived(problem.id, True) is True
        assert (await problem_repository.get(problem.id)).archived is True
        assert await problem_repository.set_archived("missing", True) is False

    @pytest.mark.asyncio
    async def test_delete(self, problem_repository):
        problem = Problem(name="Two Sum")
        await problem_repository.save(problem)

        assert await problem_repository.delete(problem.id) is True
        assert await problem_repository.delete(problem.id) is False
        assert await problem_repository.get(problem.id) is None

    @pytest.mark.asyncio
    async def test_delete_all_and_import_many(self, problem_repository):
        problems = [Problem(name=f"Problem {i}") for i in range(3)]

        assert await problem_repository.import_many(problems) == 3
        assert len(await problem_repository.list_all()) == 3
        assert await problem_repository.delete_all() == 3
        assert await problem_repository.list_all(include_archived=True) == []

    @pytest.mark.asyncio
    async def test_import_many_upserts(self, problem_repository):
        problem = Problem(name="Original")
        await problem_repository.save(problem)

        await problem_repository.import_many([problem.model_copy(update={"name": "Replaced"})])

        loaded = await problem_repository.get(problem.id)
        assert loaded.name == "Replaced"


# =============================================================================
# TodoRepository
# =============================================================================


class TestSqlAlchemyTodoRepository:
    @pytest.mark.asyncio
    async def test_save_and_get(self, todo_repository):
        item = TodoItem(name="Two Sum", number=1, note="warm-up", created_at=BASE)

        await todo_repository.save(item)

        assert await todo_repository.get(item.id) == item
        assert await todo_repository.get("missing") is None

    @pytest.mark.asyncio
    async def test_find_pending_by_name(self, todo_repository):
        done = TodoItem(name="Two Sum", completed=True, completed_at=BASE, created_at=BASE)
        first = TodoItem(name="two sum", created_at=BASE + timedelta(hours=1))
        second = TodoItem(name="Two Sum", created_at=BASE + timedelta(hours=2))
        for item in (second, done, first):
            await todo_repository.save(item)

        found = await todo_repository.find_pending_by_name("TWO SUM")

        assert found.id == first.id

    @pytest.mark.asyncio
    async def test_find_pending_by_name_folds_unicode(self, todo_repository):
        item = TodoItem(name="Ärger Pairs")
        await todo_repository.save(item)

        found = await todo_repository.find_pending_by_name("ÄRGER PAIRS")

        assert found.id == item.id

    @pytest.mark.asyncio
    async def test_list_by_status(self, todo_repository):
        pending = TodoItem(name="Pending")
        done = TodoItem(name="Done", completed=True, completed_at=BASE)
        await todo_repository.save(pending)
        await todo_repository.save(done)

        assert [t.id for t in await todo_repository.list_by_status(False)] == [pending.id]
        assert [t.id for t in await todo_repository.list_by_status(True)] == [done.id]
        assert len(await todo_repository.list_all()) == 2

    @pytest.mark.asyncio
    async def test_set_completed(self, todo_repository):
        item = TodoItem(name="Two Sum")
        await todo_repository.save(item)

        assert await todo_repository.set_completed(item.id, True, BASE) is True
        loaded = await todo_repository.get(item.id)
        assert (loaded.completed, loaded.completed_at) == (True, BASE)

        assert await todo_repository.set_completed(item.id, False, None) is True
        loaded = await todo_repository.get(item.id)
        assert (loaded.completed, loaded.completed_at) == (False, None)

        assert await todo_repository.set_completed("missing", True, BASE) is False

    @pytest.mark.asyncio
    async def test_delete_and_delete_all(self, todo_repository):
        items = [TodoItem(name=f"Item {i}") for i in range(3)]
        assert await todo_repository.import_many(items) == 3

        assert await todo_repository.delete(items[0].id) is True
        assert await todo_repository.delete(items[0].id) is False
        assert await todo_repository.delete_all() == 2
        assert await todo_repository.list_all() == []
