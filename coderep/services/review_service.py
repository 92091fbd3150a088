"""
ReviewService - problem and review use cases.

Thin orchestration over the problem store, the scheduler and the review
queue. Also owns the operations that span both collections: reset, export
and import. The to-do list is reached only through TodoService, and only by
name (``log_attempt``); ``record_review`` itself never touches to-do items.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from ..domain.errors import ProblemNotFound, ReviewRecordNotFound
from ..domain.repositories import ProblemRepository
from ..models.problem import Difficulty, Problem, ReviewRecord, to_local_naive
from ..utils.fuzzy import DEFAULT_THRESHOLD, fuzzy_filter
from ..utils.logging import get_logger
from ..utils.text import blank_to_none
from .backup_format import build_export, parse_export
from .srs.review_queue import ReviewItem, ReviewQueue
from .srs.scheduler import schedule_next_review, should_archive
from .todo_service import TodoService

logger = logging.getLogger(__name__)
events = get_logger(__name__)


@dataclass(frozen=True)
class ReviewStats:
    """Dashboard counters over non-archived problems."""

    total_problems: int
    due_today: int
    completed_reviews: int


@dataclass(frozen=True)
class ImportSummary:
    problems: int
    todo_items: int


class ReviewService:
    """Service for problems, reviews and whole-database operations."""

    def __init__(
        self,
        repository: ProblemRepository,
        todo_service: TodoService,
        queue: Optional[ReviewQueue] = None,
        search_threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self._repository = repository
        self._todo_service = todo_service
        self._queue = queue or ReviewQueue(repository)
        self._search_threshold = search_threshold

    # ------------------------------------------------------------------
    # Problems
    # ------------------------------------------------------------------

    async def add_problem(
        self,
        name: str,
        number: Optional[int] = None,
        review_date: Optional[datetime] = None,
    ) -> Problem:
        """Add a new problem, or return the existing one with the same name.

        Name comparison ignores case. An existing problem is returned
        unchanged, even if ``number`` or ``review_date`` differ.

        Args:
            name: Problem name
            number: Optional external problem number
            review_date: First review date (defaults to now, not truncated)
        """
        existing = await self._repository.find_by_name(name)
        if existing is not None:
            logger.debug(f"Problem already exists: {name} ({existing.id})")
            return existing

        problem = Problem(name=name, number=number)
        if review_date is not None:
            problem.next_review_date = review_date

        await self._repository.save(problem)
        logger.info(f"Added problem: {name} ({problem.id})")
        return problem

    async def get_problem(self, problem_id: str) -> Problem:
        """Fetch a problem.

        Raises:
            ProblemNotFound: If no problem has this ID
        """
        problem = await self._repository.get(problem_id)
        if problem is None:
            raise ProblemNotFound(problem_id)
        return problem

    async def get_all_problems(self, include_archived: bool = False) -> List[Problem]:
        return await self._repository.list_all(include_archived=include_archived)

    async def search_problems(self, query: str) -> List[Problem]:
        """Fuzzy search by name across all problems. Blank query returns []."""
        if not query.strip():
            return []
        problems = await self._repository.list_all(include_archived=True)
        return fuzzy_filter(
            query, problems, key=lambda p: p.name, threshold=self._search_threshold
        )

    async def archive_problem(self, problem_id: str) -> None:
        if not await self._repository.set_archived(problem_id, True):
            logger.warning(f"archive_problem: problem {problem_id} not found")

    async def unarchive_problem(self, problem_id: str) -> None:
        if not await self._repository.set_archived(problem_id, False):
            logger.warning(f"unarchive_problem: problem {problem_id} not found")

    async def delete_problem(self, problem_id: str) -> None:
        if not await self._repository.delete(problem_id):
            logger.warning(f"delete_problem: problem {problem_id} not found")

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    async def record_review(
        self,
        problem_id: str,
        difficulty: Difficulty,
        review_date: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> Problem:
        """Record a review and schedule the next one.

        The interval is computed from the history as it was before this
        review. Crossing the success threshold archives the problem; this
        never un-archives.

        Raises:
            ProblemNotFound: If no problem has this ID
        """
        problem = await self.get_problem(problem_id)
        difficulty = Difficulty(difficulty)
        reviewed_at = to_local_naive(review_date) or datetime.now()

        next_review = schedule_next_review(problem, difficulty, as_of=reviewed_at)
        problem.review_history.append(
            ReviewRecord(date=reviewed_at, difficulty=difficulty, notes=blank_to_none(notes))
        )
        problem.next_review_date = next_review

        if not problem.archived and should_archive(problem):
            problem.archived = True
            events.info("problem_auto_archived", problem_id=problem.id, name=problem.name)

        await self._repository.save(problem)
        events.info(
            "review_recorded",
            problem_id=problem.id,
            difficulty=difficulty.value,
            review_count=len(problem.review_history),
            next_review=next_review.date().isoformat(),
        )
        return problem

    async def update_review_record(
        self,
        problem_id: str,
        index: int,
        date: Optional[datetime] = None,
        difficulty: Optional[Difficulty] = None,
        note: Optional[str] = None,
    ) -> Problem:
        """Edit one review record in place.

        Only given fields change; a blank ``note`` removes the note. When the
        edited record is the last one by position and its date or difficulty
        actually changed, the next review date is recomputed from it. The
        history is not re-sorted, so "last" means last by index even if
        another record now carries a later date.

        Raises:
            ProblemNotFound: If no problem has this ID
            ReviewRecordNotFound: If ``index`` is outside the history
        """
        problem = await self.get_problem(problem_id)
        history = problem.review_history
        if index < 0 or index >= len(history):
            raise ReviewRecordNotFound(problem_id, index)

        record = history[index]
        date = to_local_naive(date)
        schedule_changed = False

        if date is not None and date != record.date:
            record.date = date
            schedule_changed = True
        if difficulty is not None and Difficulty(difficulty) != record.difficulty:
            record.difficulty = Difficulty(difficulty)
            schedule_changed = True
        if note is not None:
            record.notes = blank_to_none(note)

        if schedule_changed and index == len(history) - 1:
            before = problem.model_copy(update={"review_history": history[:index]})
            problem.next_review_date = schedule_next_review(
                before, record.difficulty, as_of=record.date
            )
            logger.info(
                f"Rescheduled {problem.id} after editing latest review: "
                f"{problem.next_review_date.date().isoformat()}"
            )

        await self._repository.save(problem)
        return problem

    async def log_attempt(
        self,
        name: str,
        difficulty: Difficulty,
        number: Optional[int] = None,
        review_date: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> Tuple[Problem, bool]:
        """Log an attempt by problem name.

        Finds or creates the problem, records the review, then completes the
        pending to-do item with the same name (ignoring case), if any.

        Returns:
            (updated problem, whether a to-do item was completed)
        """
        name = name.strip()
        problem = await self.add_problem(name, number, review_date)
        problem = await self.record_review(problem.id, difficulty, review_date, notes)
        todo_completed = await self._todo_service.mark_complete_by_name(name)
        return problem, todo_completed

    # ------------------------------------------------------------------
    # Queue
    # ------------------------------------------------------------------

    async def get_todays_reviews(self, today: Optional[date] = None) -> List[ReviewItem]:
        return await self._queue.get_todays_reviews(today)

    async def get_upcoming_reviews(self, today: Optional[date] = None) -> List[ReviewItem]:
        return await self._queue.get_upcoming_reviews(today)

    async def get_all_reviews(self, today: Optional[date] = None) -> List[ReviewItem]:
        return await self._queue.get_all_reviews(today)

    async def get_overdue_count(self, today: Optional[date] = None) -> int:
        return await self._queue.get_overdue_count(today)

    async def get_stats(self, today: Optional[date] = None) -> ReviewStats:
        """Total active problems, due-today count and total reviews done."""
        snapshot = await self._queue.snapshot(today)
        active = snapshot.all_reviews
        return ReviewStats(
            total_problems=len(active),
            due_today=len(snapshot.due_today),
            completed_reviews=sum(len(item.problem.review_history) for item in active),
        )

    # ------------------------------------------------------------------
    # Whole-database operations
    # ------------------------------------------------------------------

    async def reset_database(self) -> None:
        """Delete every problem and every to-do item.

        Two separate store calls; a failure in the second leaves the first done.
        """
        problems = await self._repository.delete_all()
        todos = await self._todo_service.delete_all()
        events.warning("database_reset", problems_deleted=problems, todos_deleted=todos)

    async def export_data(self) -> Dict[str, Any]:
        """Versioned snapshot of all problems (archived too) and to-do items."""
        problems = await self._repository.list_all(include_archived=True)
        todo_items = await self._todo_service.get_all_todos()
        logger.info(f"Exporting {len(problems)} problems and {len(todo_items)} todo items")
        return build_export(problems, todo_items)

    async def export_json(self) -> str:
        return json.dumps(await self.export_data(), indent=2)

    async def import_data(self, payload: Union[str, bytes, Dict[str, Any]]) -> ImportSummary:
        """Restore an export document.

        Records sharing an ID with existing ones replace them. To-do items are
        imported only when the document has them.

        Raises:
            InvalidExportFormat: If the document is unrecognizable; nothing is written
        """
        bundle = parse_export(payload)
        problem_count = await self._repository.import_many(bundle.problems)
        todo_count = 0
        if bundle.todo_items is not None:
            todo_count = await self._todo_service.import_data(bundle.todo_items)

        events.info(
            "data_imported",
            version=bundle.version,
            problems=problem_count,
            todo_items=todo_count,
        )
        return ImportSummary(problems=problem_count, todo_items=todo_count)
