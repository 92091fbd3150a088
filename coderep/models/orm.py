"""
Storage tables for the two record collections.

Each row is one key-value record keyed by the entity id. A problem's review
history lives in a JSON column on its row, so a problem is always read and
written as a whole.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ProblemRow(Base):
    """Persisted form of a Problem."""

    __tablename__ = "problems"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # name.casefold(), matched by the case-insensitive lookups
    name_key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # [{"date": iso, "difficulty": "MEDIUM", "notes": "..."}], insertion order
    review_history: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )

    next_review_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    archived: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    def __repr__(self) -> str:
        return f"<ProblemRow(id={self.id}, name={self.name}, archived={self.archived})>"


class TodoItemRow(Base):
    """Persisted form of a TodoItem."""

    __tablename__ = "todo_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # name.casefold(), matched by the case-insensitive lookups
    name_key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<TodoItemRow(id={self.id}, name={self.name}, completed={self.completed})>"
