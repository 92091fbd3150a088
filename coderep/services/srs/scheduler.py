"""
SRS interval scheduling.

Fixed base intervals per difficulty, stretched by a step multiplier as the
review count grows, capped at 90 days. Deterministic: no randomness, and the
result always lands on a start of day.
"""

from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional

from ...models.problem import Difficulty, Problem, ReviewRecord

MAX_INTERVAL_DAYS = 90
AUTO_ARCHIVE_THRESHOLD = 3  # successful reviews before a problem auto-archives

BASE_INTERVAL_DAYS: Dict[Difficulty, int] = {
    Difficulty.EASY: MAX_INTERVAL_DAYS,
    Difficulty.MEDIUM: 7,
    Difficulty.HARD: 3,
    Difficulty.DIDNT_GET: 1,
}

# Difficulties whose interval grows with the review count
PROGRESSIVE: Dict[Difficulty, bool] = {
    Difficulty.EASY: False,
    Difficulty.MEDIUM: True,
    Difficulty.HARD: True,
    Difficulty.DIDNT_GET: False,
}

SUCCESSFUL: Dict[Difficulty, bool] = {
    Difficulty.EASY: True,
    Difficulty.MEDIUM: True,
    Difficulty.HARD: False,
    Difficulty.DIDNT_GET: False,
}


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def base_interval(difficulty: Difficulty) -> int:
    """Base interval in days. Raises ValueError for anything outside Difficulty."""
    return BASE_INTERVAL_DAYS[Difficulty(difficulty)]


def interval_multiplier(review_count: int, difficulty: Difficulty) -> int:
    """Multiplier for the base interval.

    Progression for MEDIUM/HARD: 1x, 1x, 2x, 2x, 3x, 3x, ...
    EASY and DIDNT_GET always use 1x.
    """
    if not PROGRESSIVE[Difficulty(difficulty)]:
        return 1
    if review_count <= 1:
        return 1
    if review_count <= 3:
        return 2
    return 3


def schedule_next_review(
    problem: Problem,
    difficulty: Difficulty,
    as_of: Optional[datetime] = None,
) -> datetime:
    """Calculate the next review date.

    Args:
        problem: The problem as it stood *before* the new review is appended;
            its history length is the review count.
        difficulty: Difficulty just reported.
        as_of: Date the review happened (defaults to now).

    Returns:
        Start of day of ``as_of`` plus the interval.
    """
    review_count = len(problem.review_history)
    interval_days = min(
        base_interval(difficulty) * interval_multiplier(review_count, difficulty),
        MAX_INTERVAL_DAYS,
    )
    return start_of_day(as_of or datetime.now()) + timedelta(days=interval_days)


def count_successful_reviews(history: Iterable[ReviewRecord]) -> int:
    """Count EASY and MEDIUM reviews anywhere in the history."""
    return sum(1 for record in history if SUCCESSFUL[record.difficulty])


def should_archive(problem: Problem) -> bool:
    """True once the problem has enough successful reviews to retire."""
    return count_successful_reviews(problem.review_history) >= AUTO_ARCHIVE_THRESHOLD
