from .sqlalchemy_problem_repository import SqlAlchemyProblemRepository
from .sqlalchemy_todo_repository import SqlAlchemyTodoRepository

__all__ = [
    "SqlAlchemyProblemRepository",
    "SqlAlchemyTodoRepository",
]
