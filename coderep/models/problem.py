"""
Problem entities: the practiced problem and its review history.

Entities are pydantic models so the same classes drive persistence mapping
and the camelCase export document.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Difficulty(str, Enum):
    """User-reported recall quality for a single review."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"
    DIDNT_GET = "DIDNT_GET"


def new_id() -> str:
    return str(uuid.uuid4())


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime (e.g. a `Z`-suffixed ISO string) to naive local time."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class ReviewRecord(BaseModel):
    """One attempt at a problem.

    ``date`` keeps the full timestamp; scheduling only looks at its calendar day.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, validate_assignment=True
    )

    date: datetime
    difficulty: Difficulty
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def date_local(cls, v: datetime) -> datetime:
        return to_local_naive(v)


class Problem(BaseModel):
    """A practiced problem with its append-only review history."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, validate_assignment=True
    )

    id: str = Field(default_factory=new_id)
    name: str
    number: Optional[int] = None
    review_history: List[ReviewRecord] = Field(default_factory=list)
    next_review_date: datetime = Field(default_factory=datetime.now)
    created_at: datetime = Field(default_factory=datetime.now)
    archived: bool = False

    @field_validator("next_review_date", "created_at")
    @classmethod
    def dates_local(cls, v: datetime) -> datetime:
        return to_local_naive(v)

    @property
    def latest_review(self) -> Optional[ReviewRecord]:
        """Most recent review by insertion index (not by date)."""
        return self.review_history[-1] if self.review_history else None

    def __repr__(self) -> str:
        return (
            f"<Problem(id={self.id}, name={self.name!r}, "
            f"reviews={len(self.review_history)}, archived={self.archived})>"
        )
