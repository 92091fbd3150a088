"""ProblemRepository protocol - problem persistence contract."""

from typing import List, Optional, Protocol, Sequence, runtime_checkable

from ...models.problem import Problem


@runtime_checkable
class ProblemRepository(Protocol):
    """Repository interface for the ``problems`` collection.

    Every method is one atomic store call; multi-step sequences built on top
    of it are not transactional.
    """

    async def get(self, problem_id: str) -> Optional[Problem]:
        """Look up a problem by ID.

        Returns:
            The Problem, or None if not found.
        """
        ...

    async def save(self, problem: Problem) -> Problem:
        """Insert or replace a problem (upsert by ID)."""
        ...

    async def find_by_name(self, name: str) -> Optional[Problem]:
        """Find a problem whose name equals ``name`` ignoring case."""
        ...

    async def list_all(self, include_archived: bool = False) -> List[Problem]:
        """Full scan of the collection.

        Args:
            include_archived: When False (default), archived problems are skipped.
        """
        ...

    async def set_archived(self, problem_id: str, archived: bool) -> bool:
        """Flip the archived flag. Returns False if the ID is unknown."""
        ...

    async def delete(self, problem_id: str) -> bool:
        """Remove a problem. Returns False if the ID is unknown."""
        ...

    async def delete_all(self) -> int:
        """Remove every problem. Returns the number removed."""
        ...

    async def import_many(self, problems: Sequence[Problem]) -> int:
        """Bulk upsert; existing rows sharing an ID are replaced."""
        ...
