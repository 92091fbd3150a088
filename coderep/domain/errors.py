"""
Typed domain errors for coderep.

Callers can tell a missing problem from a missing to-do item or a rejected
import file and map each to its own message.
"""


class DomainError(Exception):
    """Base class for all domain-specific errors."""


# ---------------------------------------------------------------------------
# Problems / reviews
# ---------------------------------------------------------------------------


class ProblemNotFound(DomainError):
    """Problem with the given ID does not exist."""

    def __init__(self, problem_id: str) -> None:
        self.problem_id = problem_id
        super().__init__(f"Problem not found: {problem_id}")


class ReviewRecordNotFound(DomainError):
    """Review index is outside the problem's history."""

    def __init__(self, problem_id: str, index: int) -> None:
        self.problem_id = problem_id
        self.index = index
        super().__init__(f"Review record {index} not found for problem {problem_id}")


# ---------------------------------------------------------------------------
# To-do list
# ---------------------------------------------------------------------------


class TodoItemNotFound(DomainError):
    """To-do item with the given ID does not exist."""

    def __init__(self, todo_id: str) -> None:
        self.todo_id = todo_id
        super().__init__(f"Todo item not found: {todo_id}")


# ---------------------------------------------------------------------------
# Backup / restore
# ---------------------------------------------------------------------------


class InvalidExportFormat(DomainError):
    """Import payload is not a recognizable export document."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = "Invalid export file format"
        super().__init__(f"{message}: {detail}" if detail else message)
