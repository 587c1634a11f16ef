"""Tabular rendering of result sets.

Columns are the union of record keys in first-seen order.  ``null`` is
shown as ``null``; a key missing from a record leaves its cell empty.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from rich import box
from rich.table import Table
from rich.text import Text

from grafq.domain.results import Row, column_names


def results_table(rows: Sequence[Row]) -> Table:
    """Build a Rich Table for *rows*."""
    table = Table(box=box.SIMPLE_HEAD, show_header=True, pad_edge=False, expand=False)
    headers = column_names(rows)
    for header in headers:
        table.add_column(Text(header), overflow="fold")
    for row in rows:
        table.add_row(*(Text(table_cell(row[h])) if h in row else Text("") for h in headers))
    return table


def table_cell(value: Any) -> str:
    """Format a single JSON-compatible value for display."""
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    return json.dumps(value)
