"""Query result sets.

A query either produced no rows (:class:`EmptyResults`) or an ordered,
non-empty list of records (:class:`NonEmptyResults`).  Each record maps a
column name to a JSON-compatible value.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

Row = dict[str, Any]


@dataclass(frozen=True)
class EmptyResults:
    """The query ran and returned no rows."""


@dataclass(frozen=True)
class NonEmptyResults:
    """The query returned at least one row."""

    rows: tuple[Row, ...]

    def __post_init__(self) -> None:
        if not self.rows:
            raise ValueError("NonEmptyResults requires at least one row")


QueryResults = EmptyResults | NonEmptyResults


def query_results(rows: Sequence[Row]) -> QueryResults:
    """Wrap *rows* in the matching result variant."""
    if not rows:
        return EmptyResults()
    return NonEmptyResults(tuple(rows))


def column_names(rows: Sequence[Row]) -> list[str]:
    """Return the union of keys across *rows*, in first-seen order."""
    names: dict[str, None] = {}
    for row in rows:
        for key in row:
            names.setdefault(key, None)
    return list(names)
