"""To-do item: a problem the user intends to attempt."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .problem import new_id, to_local_naive


class TodoItem(BaseModel):
    """Entry on the to-do list.

    ``completed_at`` is set exactly when ``completed`` is true.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, validate_assignment=True
    )

    id: str = Field(default_factory=new_id)
    name: str
    number: Optional[int] = None
    note: Optional[str] = None
    completed: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    @field_validator("created_at", "completed_at")
    @classmethod
    def dates_local(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(v)

    def __repr__(self) -> str:
        return f"<TodoItem(id={self.id}, name={self.name!r}, completed={self.completed})>"
