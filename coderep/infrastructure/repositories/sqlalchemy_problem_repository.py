"""SQLAlchemy implementation of ProblemRepository."""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...models.orm import ProblemRow
from ...models.problem import Problem, ReviewRecord
from ...utils.text import name_key

logger = logging.getLogger(__name__)


def _to_row(problem: Problem) -> ProblemRow:
    return ProblemRow(
        id=problem.id,
        name=problem.name,
        name_key=name_key(problem.name),
        number=problem.number,
        review_history=[
            record.model_dump(mode="json", exclude_none=True)
            for record in problem.review_history
        ],
        next_review_date=problem.next_review_date,
        created_at=problem.created_at,
        archived=problem.archived,
    )


def _to_entity(row: ProblemRow) -> Problem:
    return Problem(
        id=row.id,
        name=row.name,
        number=row.number,
        review_history=[ReviewRecord.model_validate(r) for r in row.review_history or []],
        next_review_date=row.next_review_date,
        created_at=row.created_at,
        archived=bool(row.archived),
    )


class SqlAlchemyProblemRepository:
    """Concrete ProblemRepository backed by SQLAlchemy async sessions.

    Each call opens its own session and commits once.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, problem_id: str) -> Optional[Problem]:
        """Look up a problem by ID."""
        async with self._session_factory() as session:
            row = await session.get(ProblemRow, problem_id)
            return _to_entity(row) if row is not None else None

    async def save(self, problem: Problem) -> Problem:
        """Upsert the whole problem, history included."""
        async with self._session_factory() as session:
            await session.merge(_to_row(problem))
            await session.commit()
        return problem

    async def find_by_name(self, name: str) -> Optional[Problem]:
        """Case-insensitive exact name lookup (oldest match wins)."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProblemRow)
                .where(ProblemRow.name_key == name_key(name))
                .order_by(ProblemRow.created_at.asc())
                .limit(1)
            )
            row = result.scalar_one_or_none()
            return _to_entity(row) if row is not None else None

    async def list_all(self, include_archived: bool = False) -> List[Problem]:
        """Scan the collection, optionally skipping archived problems."""
        stmt = select(ProblemRow).order_by(ProblemRow.created_at.asc(), ProblemRow.id)
        if not include_archived:
            stmt = stmt.where(ProblemRow.archived.is_(False))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [_to_entity(row) for row in result.scalars().all()]

    async def set_archived(self, problem_id: str, archived: bool) -> bool:
        """Flip the archived flag on a single row."""
        async with self._session_factory() as session:
            result = await session.execute(
                update(ProblemRow)
                .where(ProblemRow.id == problem_id)
                .values(archived=archived)
            )
            await session.commit()
            return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete(self, problem_id: str) -> bool:
        """Remove a problem by ID."""
        async with self._session_factory() as session:
            result = await session.execute(
                delete(ProblemRow).where(ProblemRow.id == problem_id)
            )
            await session.commit()
            return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_all(self) -> int:
        """Remove every problem. Returns count."""
        async with self._session_factory() as session:
            result = await session.execute(delete(ProblemRow))
            await session.commit()
            return result.rowcount  # type: ignore[attr-defined]

    async def import_many(self, problems: Sequence[Problem]) -> int:
        """Upsert many problems in a single commit."""
        async with self._session_factory() as session:
            for problem in problems:
                await session.merge(_to_row(problem))
            await session.commit()
        logger.debug(f"Upserted {len(problems)} problems")
        return len(problems)
