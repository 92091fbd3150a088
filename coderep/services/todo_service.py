"""TodoService - the list of problems still to attempt.

Correlates with problems only by name: when a problem is reviewed the caller
may complete the matching pending item through ``mark_complete_by_name``.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from ..domain.errors import InvalidExportFormat, TodoItemNotFound
from ..domain.repositories import TodoRepository
from ..models.todo_item import TodoItem
from ..utils.fuzzy import DEFAULT_THRESHOLD, fuzzy_filter
from ..utils.logging import get_logger
from ..utils.text import blank_to_none
from .backup_format import dump_todo_item

logger = logging.getLogger(__name__)
events = get_logger(__name__)


class TodoService:
    """Service for managing the to-do list."""

    def __init__(
        self,
        repository: TodoRepository,
        search_threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self._repository = repository
        self._search_threshold = search_threshold

    async def add_todo_item(
        self,
        name: str,
        number: Optional[int] = None,
        note: Optional[str] = None,
    ) -> TodoItem:
        """Create a new to-do item. Duplicate names are allowed."""
        item = TodoItem(name=name, number=number, note=blank_to_none(note))
        await self._repository.save(item)
        logger.info(f"Added todo item: {name} ({item.id})")
        return item

    async def get_todo_item(self, todo_id: str) -> TodoItem:
        """Fetch a to-do item.

        Raises:
            TodoItemNotFound: If no item has this ID
        """
        item = await self._repository.get(todo_id)
        if item is None:
            raise TodoItemNotFound(todo_id)
        return item

    async def get_all_todos(self) -> List[TodoItem]:
        return await self._repository.list_all()

    async def get_pending_todos(self) -> List[TodoItem]:
        """Pending items, oldest created first."""
        items = await self._repository.list_by_status(completed=False)
        return sorted(items, key=lambda t: t.created_at)

    async def get_completed_todos(self) -> List[TodoItem]:
        """Completed items, most recently completed first."""
        items = await self._repository.list_by_status(completed=True)
        return sorted(items, key=lambda t: t.completed_at or t.created_at, reverse=True)

    async def search_todos(self, query: str) -> List[TodoItem]:
        """Fuzzy search over pending items by name. Blank query returns []."""
        if not query.strip():
            return []
        pending = await self.get_pending_todos()
        return fuzzy_filter(query, pending, key=lambda t: t.name, threshold=self._search_threshold)

    async def mark_complete(self, todo_id: str) -> None:
        """Set ``completed`` and ``completed_at`` in a single update."""
        if not await self._repository.set_completed(todo_id, True, datetime.now()):
            logger.warning(f"mark_complete: todo item {todo_id} not found")

    async def mark_incomplete(self, todo_id: str) -> None:
        """Clear ``completed`` and ``completed_at`` in a single update."""
        if not await self._repository.set_completed(todo_id, False, None):
            logger.warning(f"mark_incomplete: todo item {todo_id} not found")

    async def mark_complete_by_name(self, name: str) -> bool:
        """Complete the pending item whose name matches, ignoring case.

        At most one item is completed. Completed items are never matched.

        Returns:
            True if a pending item was found and completed
        """
        item = await self._repository.find_pending_by_name(name)
        if item is None:
            return False
        await self.mark_complete(item.id)
        events.info("todo_auto_completed", todo_id=item.id, name=item.name)
        return True

    async def update_todo_item(
        self,
        todo_id: str,
        name: Optional[str] = None,
        number: Optional[int] = None,
        note: Optional[str] = None,
    ) -> TodoItem:
        """Patch name, number or note.

        A falsy ``number`` or blank ``note`` clears that field.

        Raises:
            TodoItemNotFound: If no item has this ID
        """
        item = await self.get_todo_item(todo_id)
        if name is not None:
            item.name = name
        if number is not None:
            item.number = number or None
        if note is not None:
            item.note = blank_to_none(note)
        await self._repository.save(item)
        return item

    async def delete_todo_item(self, todo_id: str) -> None:
        if not await self._repository.delete(todo_id):
            logger.warning(f"delete_todo_item: todo item {todo_id} not found")

    async def delete_all(self) -> int:
        """Remove every to-do item. Returns count."""
        removed = await self._repository.delete_all()
        logger.info(f"Deleted {removed} todo items")
        return removed

    async def export_data(self) -> List[Dict[str, Any]]:
        """All items as JSON-ready dicts (camelCase, ISO datetimes)."""
        return [dump_todo_item(item) for item in await self.get_all_todos()]

    async def import_data(
        self, items: Iterable[Union[TodoItem, Dict[str, Any]]]
    ) -> int:
        """Upsert items, parsing serialized datetimes.

        Raises:
            InvalidExportFormat: If any item fails validation (nothing is written)
        """
        try:
            parsed = [
                item if isinstance(item, TodoItem) else TodoItem.model_validate(item)
                for item in items
            ]
        except ValidationError as e:
            raise InvalidExportFormat(f"{e.error_count()} invalid todo field(s)") from e
        count = await self._repository.import_many(parsed)
        logger.info(f"Imported {count} todo items")
        return count
