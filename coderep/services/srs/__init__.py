"""Spaced-repetition core: interval scheduling and review-queue partitioning."""

from .review_queue import ReviewItem, ReviewQueue, ReviewQueueSnapshot, partition_reviews
from .scheduler import (
    AUTO_ARCHIVE_THRESHOLD,
    MAX_INTERVAL_DAYS,
    base_interval,
    interval_multiplier,
    schedule_next_review,
    should_archive,
)

__all__ = [
    "AUTO_ARCHIVE_THRESHOLD",
    "MAX_INTERVAL_DAYS",
    "ReviewItem",
    "ReviewQueue",
    "ReviewQueueSnapshot",
    "base_interval",
    "interval_multiplier",
    "partition_reviews",
    "schedule_next_review",
    "should_archive",
]
