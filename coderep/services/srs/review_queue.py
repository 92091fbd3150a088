"""
Review queue partitioning.

Splits non-archived problems into "due today" (today or earlier, overdue
included) and "upcoming" (strictly later), comparing calendar days only.
Overdue/today flags are derived on every call and never stored.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from ...domain.repositories import ProblemRepository
from ...models.problem import Problem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewItem:
    """A problem plus its due-date metadata relative to one day."""

    problem: Problem
    days_overdue: int
    is_overdue: bool
    is_today: bool


@dataclass(frozen=True)
class ReviewQueueSnapshot:
    """Both halves of the queue for a single ``today``."""

    today: date
    due_today: List[ReviewItem] = field(default_factory=list)
    upcoming: List[ReviewItem] = field(default_factory=list)

    @property
    def all_reviews(self) -> List[ReviewItem]:
        return self.due_today + self.upcoming

    @property
    def overdue_count(self) -> int:
        return sum(1 for item in self.due_today if item.is_overdue)


def as_day(today: Union[date, datetime]) -> date:
    """Calendar day of ``today``; datetimes are truncated."""
    return today.date() if isinstance(today, datetime) else today


def make_review_item(problem: Problem, today: Union[date, datetime]) -> ReviewItem:
    today = as_day(today)
    due_day = problem.next_review_date.date()
    is_overdue = due_day < today
    return ReviewItem(
        problem=problem,
        days_overdue=(today - due_day).days if is_overdue else 0,
        is_overdue=is_overdue,
        is_today=due_day == today,
    )


def partition_reviews(
    problems: Iterable[Problem], today: Union[date, datetime]
) -> ReviewQueueSnapshot:
    """Partition non-archived problems around ``today``.

    Each half is sorted by next review day, oldest first. The sort is stable,
    so problems due the same day keep their input order.
    """
    today = as_day(today)
    due_today: List[ReviewItem] = []
    upcoming: List[ReviewItem] = []
    for problem in problems:
        if problem.archived:
            continue
        item = make_review_item(problem, today)
        if problem.next_review_date.date() <= today:
            due_today.append(item)
        else:
            upcoming.append(item)

    due_today.sort(key=lambda item: item.problem.next_review_date.date())
    upcoming.sort(key=lambda item: item.problem.next_review_date.date())
    return ReviewQueueSnapshot(today=today, due_today=due_today, upcoming=upcoming)


class ReviewQueue:
    """Re-reads the store on every query; holds no cache."""

    def __init__(self, repository: ProblemRepository) -> None:
        self._repository = repository

    async def snapshot(self, today: Optional[date] = None) -> ReviewQueueSnapshot:
        problems = await self._repository.list_all(include_archived=False)
        return partition_reviews(problems, today or datetime.now().date())

    async def get_todays_reviews(self, today: Optional[date] = None) -> List[ReviewItem]:
        """Due today or overdue, most overdue first."""
        return (await self.snapshot(today)).due_today

    async def get_upcoming_reviews(self, today: Optional[date] = None) -> List[ReviewItem]:
        """Due after today, soonest first."""
        return (await self.snapshot(today)).upcoming

    async def get_all_reviews(self, today: Optional[date] = None) -> List[ReviewItem]:
        """Due-today items followed by upcoming items."""
        return (await self.snapshot(today)).all_reviews

    async def get_overdue_count(self, today: Optional[date] = None) -> int:
        return (await self.snapshot(today)).overdue_count
