"""Tests for result set types."""

from __future__ import annotations

import pytest

from grafq.domain.results import EmptyResults, NonEmptyResults, column_names, query_results


class TestQueryResults:
    def test_no_rows_is_empty(self) -> None:
        assert query_results([]) == EmptyResults()

    def test_rows_are_kept_in_order(self) -> None:
        rows = [{"n": 2}, {"n": 1}]
        results = query_results(rows)
        assert isinstance(results, NonEmptyResults)
        assert results.rows == ({"n": 2}, {"n": 1})

    def test_non_empty_rejects_no_rows(self) -> None:
        with pytest.raises(ValueError):
            NonEmptyResults(())


class TestColumnNames:
    def test_union_in_first_seen_order(self) -> None:
        rows = [{"b": 1, "a": 2}, {"a": 3, "c": 4}, {"d": None}]
        assert column_names(rows) == ["b", "a", "c", "d"]

    def test_no_rows(self) -> None:
        assert column_names([]) == []
