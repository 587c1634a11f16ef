"""Persisting result sets as CSV or JSON files.

File names are derived from the reference time (``%m-%d-%H-%M-%S``) and
the format's extension, inside a directory that is created on demand.
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import IO, Any

from grafq.domain.output import OutputFormat
from grafq.domain.results import Row, column_names

logger = logging.getLogger(__name__)

FILE_NAME_FORMAT = "%m-%d-%H-%M-%S"


class OutputError(Exception):
    """Results couldn't be written to disk."""


def results_file_path(directory: Path, fmt: OutputFormat, reference_time: datetime) -> Path:
    """Return the path a result set written at *reference_time* goes to."""
    return directory / f"{reference_time.strftime(FILE_NAME_FORMAT)}.{fmt.extension}"


def write_results(
    rows: Sequence[Row],
    directory: Path,
    fmt: OutputFormat,
    reference_time: datetime,
) -> Path:
    """Write *rows* into *directory* and return the file's path.

    Raises:
        OutputError: If the directory or file can't be created or written.
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"failed to create results directory: {directory}") from exc

    path = results_file_path(directory, fmt, reference_time)
    try:
        with path.open("w", encoding="utf-8", newline="") as fh:
            if fmt is OutputFormat.CSV:
                _write_csv(rows, fh)
            else:
                _write_json(rows, fh)
    except OSError as exc:
        raise OutputError(f"couldn't write output file: {path}") from exc

    logger.debug("Wrote %d rows to %s", len(rows), path)
    return path


def _write_csv(rows: Sequence[Row], fh: IO[str]) -> None:
    if not rows:
        return
    headers = column_names(rows)
    writer = csv.writer(fh)
    writer.writerow(headers)
    for row in rows:
        writer.writerow([csv_field(row[h]) if h in row else "" for h in headers])


def csv_field(value: Any) -> str:
    """Convert a JSON-compatible value into a CSV cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    return json.dumps(value, separators=(",", ":"))


def _write_json(rows: Sequence[Row], fh: IO[str]) -> None:
    try:
        json.dump(list(rows), fh, indent=2)
    except (TypeError, ValueError) as exc:
        raise OutputError("couldn't serialize results to JSON") from exc
