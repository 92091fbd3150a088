"""Tests for the export document builder and parser."""

import json
from datetime import datetime

import pytest

from coderep.domain.errors import InvalidExportFormat
from coderep.models.problem import Difficulty, Problem, ReviewRecord
from coderep.models.todo_item import TodoItem
from coderep.services.backup_format import (
    EXPORT_VERSION,
    build_export,
    dump_problem,
    parse_export,
)


@pytest.fixture
def problem():
    return Problem(
        id="p-1",
        name="Two Sum",
        number=1,
        review_history=[
            ReviewRecord(date=datetime(2026, 1, 5, 14, 30), difficulty=Difficulty.MEDIUM),
        ],
        next_review_date=datetime(2026, 1, 12),
        created_at=datetime(2026, 1, 5, 14, 0),
    )


class TestBuildExport:
    def test_layout(self, problem):
        export = build_export(
            [problem], [TodoItem(id="t-1", name="3Sum")], exported_at=datetime(2026, 2, 1)
        )

        assert export["version"] == EXPORT_VERSION == 2
        assert export["exportedAt"] == "2026-02-01T00:00:00"
        assert [p["id"] for p in export["data"]["problems"]] == ["p-1"]
        assert [t["id"] for t in export["data"]["todoItems"]] == ["t-1"]

    def test_problem_fields(self, problem):
        dumped = dump_problem(problem)

        assert dumped["nextReviewDate"] == "2026-01-12T00:00:00"
        assert dumped["createdAt"] == "2026-01-05T14:00:00"
        assert dumped["reviewHistory"] == [
            {"date": "2026-01-05T14:30:00", "difficulty": "MEDIUM"}
        ]
        assert dumped["archived"] is False

    def test_is_json_serializable(self, problem):
        json.dumps(build_export([problem], []))


class TestParseExport:
    def test_parses_string_and_bytes(self, problem):
        text = json.dumps(build_export([problem], []))

        for payload in (text, text.encode("utf-8")):
            bundle = parse_export(payload)
            assert bundle.version == 2
            assert bundle.problems == [problem]
            assert bundle.todo_items == []

    def test_missing_todo_items_is_none(self, problem):
        payload = {"version": 1, "data": {"problems": [dump_problem(problem)]}}

        bundle = parse_export(payload)

        assert bundle.todo_items is None
        assert bundle.exported_at is None

    def test_future_version_accepted(self):
        bundle = parse_export({"version": 7, "data": {"problems": []}})
        assert bundle.version == 7

    def test_snake_case_fields_accepted(self):
        bundle = parse_export(
            {
                "version": 2,
                "data": {
                    "problems": [
                        {"id": "p-1", "name": "Two Sum", "next_review_date": "2026-01-12T00:00:00"}
                    ]
                },
            }
        )
        assert bundle.problems[0].next_review_date == datetime(2026, 1, 12)

    @pytest.mark.parametrize(
        "payload,detail",
        [
            ("{", "not valid JSON"),
            ("42", "document must be an object"),
            ({"version": None, "data": {"problems": []}}, "version"),
            ({"version": 2, "data": []}, "data.problems"),
            ({"version": 2, "data": {"problems": [{"id": "x"}]}}, "invalid field"),
        ],
    )
    def test_errors_carry_detail(self, payload, detail):
        with pytest.raises(InvalidExportFormat) as exc_info:
            parse_export(payload)
        assert detail in str(exc_info.value)
        assert str(exc_info.value).startswith("Invalid export file format")
