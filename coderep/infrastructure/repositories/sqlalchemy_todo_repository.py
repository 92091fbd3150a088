"""SQLAlchemy implementation of TodoRepository."""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...models.orm import TodoItemRow
from ...models.todo_item import TodoItem
from ...utils.text import name_key

logger = logging.getLogger(__name__)


def _to_row(item: TodoItem) -> TodoItemRow:
    return TodoItemRow(
        id=item.id,
        name=item.name,
        name_key=name_key(item.name),
        number=item.number,
        note=item.note,
        completed=item.completed,
        created_at=item.created_at,
        completed_at=item.completed_at,
    )


def _to_entity(row: TodoItemRow) -> TodoItem:
    return TodoItem(
        id=row.id,
        name=row.name,
        number=row.number,
        note=row.note,
        completed=bool(row.completed),
        created_at=row.created_at,
        completed_at=row.completed_at,
    )


class SqlAlchemyTodoRepository:
    """Concrete TodoRepository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, todo_id: str) -> Optional[TodoItem]:
        """Look up a to-do item by ID."""
        async with self._session_factory() as session:
            row = await session.get(TodoItemRow, todo_id)
            return _to_entity(row) if row is not None else None

    async def save(self, item: TodoItem) -> TodoItem:
        """Upsert a to-do item."""
        async with self._session_factory() as session:
            await session.merge(_to_row(item))
            await session.commit()
        return item

    async def find_pending_by_name(self, name: str) -> Optional[TodoItem]:
        """Oldest pending item with a case-insensitively equal name."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TodoItemRow)
                .where(
                    TodoItemRow.completed.is_(False),
                    TodoItemRow.name_key == name_key(name),
                )
                .order_by(TodoItemRow.created_at.asc())
                .limit(1)
            )
            row = result.scalar_one_or_none()
            return _to_entity(row) if row is not None else None

    async def list_all(self) -> List[TodoItem]:
        """Scan the whole collection."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TodoItemRow).order_by(TodoItemRow.created_at.asc(), TodoItemRow.id)
            )
            return [_to_entity(row) for row in result.scalars().all()]

    async def list_by_status(self, completed: bool) -> List[TodoItem]:
        """Items filtered by completed flag."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TodoItemRow).where(TodoItemRow.completed.is_(completed))
            )
            return [_to_entity(row) for row in result.scalars().all()]

    async def set_completed(
        self, todo_id: str, completed: bool, completed_at: Optional[datetime]
    ) -> bool:
        """Write the completed flag and timestamp in one UPDATE."""
        async with self._session_factory() as session:
            result = await session.execute(
                update(TodoItemRow)
                .where(TodoItemRow.id == todo_id)
                .values(completed=completed, completed_at=completed_at)
            )
            await session.commit()
            return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete(self, todo_id: str) -> bool:
        """Remove a to-do item by ID."""
        async with self._session_factory() as session:
            result = await session.execute(
                delete(TodoItemRow).where(TodoItemRow.id == todo_id)
            )
            await session.commit()
            return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_all(self) -> int:
        """Remove every to-do item. Returns count."""
        async with self._session_factory() as session:
            result = await session.execute(delete(TodoItemRow))
            await session.commit()
            return result.rowcount  # type: ignore[attr-defined]

    async def import_many(self, items: Sequence[TodoItem]) -> int:
        """Upsert many items in a single commit."""
        async with self._session_factory() as session:
            for item in items:
                await session.merge(_to_row(item))
            await session.commit()
        logger.debug(f"Upserted {len(items)} todo items")
        return len(items)
