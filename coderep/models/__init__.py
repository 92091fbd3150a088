from .base import Base
from .orm import ProblemRow, TodoItemRow
from .problem import Difficulty, Problem, ReviewRecord
from .todo_item import TodoItem

__all__ = [
    "Base",
    "ProblemRow",
    "TodoItemRow",
    "Difficulty",
    "Problem",
    "ReviewRecord",
    "TodoItem",
]
