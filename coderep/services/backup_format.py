"""
Versioned export document for backup and restore.

Layout::

    {
      "version": 2,
      "exportedAt": "2026-10-19T08:30:00",
      "data": {"problems": [...], "todoItems": [...]}
    }

Version 1 files carry no ``todoItems``; they are still accepted.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from ..domain.errors import InvalidExportFormat
from ..models.problem import Problem
from ..models.todo_item import TodoItem

logger = logging.getLogger(__name__)

EXPORT_VERSION = 2


@dataclass
class ExportBundle:
    """Parsed, validated contents of an export document."""

    version: int
    exported_at: Optional[str]
    problems: List[Problem] = field(default_factory=list)
    todo_items: Optional[List[TodoItem]] = None


def dump_problem(problem: Problem) -> Dict[str, Any]:
    return problem.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_todo_item(item: TodoItem) -> Dict[str, Any]:
    return item.model_dump(mode="json", by_alias=True, exclude_none=True)


def build_export(
    problems: Sequence[Problem],
    todo_items: Sequence[TodoItem],
    exported_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Build a JSON-ready export document."""
    return {
        "version": EXPORT_VERSION,
        "exportedAt": (exported_at or datetime.now()).isoformat(),
        "data": {
            "problems": [dump_problem(p) for p in problems],
            "todoItems": [dump_todo_item(t) for t in todo_items],
        },
    }


def parse_export(payload: Union[str, bytes, Dict[str, Any]]) -> ExportBundle:
    """Validate an export document and rehydrate its entities.

    Everything is validated before anything is returned, so a caller never
    sees a partially parsed file.

    Raises:
        InvalidExportFormat: The payload is not JSON, has no usable version,
            has no problems list, or contains a malformed entity.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise InvalidExportFormat("not valid JSON") from e

    if not isinstance(payload, dict):
        raise InvalidExportFormat("document must be an object")

    version = payload.get("version")
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        raise InvalidExportFormat("missing or unrecognized version")

    data = payload.get("data")
    if not isinstance(data, dict) or not isinstance(data.get("problems"), list):
        raise InvalidExportFormat("missing data.problems")

    raw_todos = data.get("todoItems")
    if raw_todos is not None and not isinstance(raw_todos, list):
        raise InvalidExportFormat("data.todoItems must be a list")

    try:
        problems = [Problem.model_validate(raw) for raw in data["problems"]]
        todo_items = (
            [TodoItem.model_validate(raw) for raw in raw_todos]
            if raw_todos is not None
            else None
        )
    except ValidationError as e:
        raise InvalidExportFormat(f"{e.error_count()} invalid field(s)") from e

    logger.debug(
        f"Parsed export v{version}: {len(problems)} problems, "
        f"{len(todo_items) if todo_items is not None else 'no'} todo items"
    )
    return ExportBundle(
        version=version,
        exported_at=payload.get("exportedAt"),
        problems=problems,
        todo_items=todo_items,
    )
