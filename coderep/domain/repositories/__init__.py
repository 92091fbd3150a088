from .problem_repository import ProblemRepository
from .todo_repository import TodoRepository

__all__ = ["ProblemRepository", "TodoRepository"]
