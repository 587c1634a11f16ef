"""Tests for inline table rendering."""

from __future__ import annotations

from typing import Any

import pytest
from rich.console import Console

from grafq.output.console import get_output
from grafq.output.results import results_table, table_cell


def _render(out: Console, rows: list[dict[str, Any]]) -> str:
    out.print(results_table(rows))
    return get_output(out)


class TestResultsTable:
    def test_columns_in_first_seen_order(self, out: Console) -> None:
        text = _render(out, [{"b": 1, "a": 2}, {"c": 3}])
        header = next(line for line in text.splitlines() if line.strip())
        assert header.index("b") < header.index("a") < header.index("c")

    def test_null_and_missing_cells(self, out: Console) -> None:
        text = _render(out, [{"name": "alice", "age": None}, {"name": "bob"}])
        lines = text.splitlines()
        alice = next(line for line in lines if "alice" in line)
        bob = next(line for line in lines if "bob" in line)
        assert "null" in alice
        assert "null" not in bob

    def test_nested_values_as_json(self, out: Console) -> None:
        text = _render(out, [{"n": {"labels": ["Person"]}}])
        assert '{"labels": ["Person"]}' in text

    def test_no_ansi(self, out: Console) -> None:
        assert "\x1b" not in _render(out, [{"a": 1}])


class TestTableCell:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            ("plain", "plain"),
            (True, "true"),
            (3, "3"),
            (2.5, "2.5"),
            ([1, "x"], '[1, "x"]'),
        ],
    )
    def test_cell(self, value: object, expected: str) -> None:
        assert table_cell(value) == expected
