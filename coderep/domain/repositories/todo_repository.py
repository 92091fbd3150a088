"""TodoRepository protocol - to-do persistence contract."""

from datetime import datetime
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from ...models.todo_item import TodoItem


@runtime_checkable
class TodoRepository(Protocol):
    """Repository interface for the ``todo_items`` collection."""

    async def get(self, todo_id: str) -> Optional[TodoItem]:
        """Look up a to-do item by ID, or None if not found."""
        ...

    async def save(self, item: TodoItem) -> TodoItem:
        """Insert or replace a to-do item (upsert by ID)."""
        ...

    async def find_pending_by_name(self, name: str) -> Optional[TodoItem]:
        """Oldest pending item whose name equals ``name`` ignoring case."""
        ...

    async def list_all(self) -> List[TodoItem]:
        """Full scan of the collection."""
        ...

    async def list_by_status(self, completed: bool) -> List[TodoItem]:
        """All items with the given completed flag (unordered)."""
        ...

    async def set_completed(
        self, todo_id: str, completed: bool, completed_at: Optional[datetime]
    ) -> bool:
        """Update ``completed`` and ``completed_at`` together in one write.

        Returns:
            False if the ID is unknown.
        """
        ...

    async def delete(self, todo_id: str) -> bool:
        """Remove an item. Returns False if the ID is unknown."""
        ...

    async def delete_all(self) -> int:
        """Remove every item. Returns the number removed."""
        ...

    async def import_many(self, items: Sequence[TodoItem]) -> int:
        """Bulk upsert; existing rows sharing an ID are replaced."""
        ...
