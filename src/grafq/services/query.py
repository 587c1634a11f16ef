"""One-shot query execution and benchmarking.

Unlike the interactive console, failures here are fatal: they propagate
as :class:`~grafq.errors.GrafqError` and end the command with exit code 1.
"""

from __future__ import annotations

import logging
import tempfile
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from rich.text import Text

from grafq.domain.benchmark import BenchmarkStats
from grafq.domain.pager import PagerError
from grafq.domain.results import EmptyResults
from grafq.errors import GrafqError
from grafq.output.results import results_table
from grafq.services.output import OutputError, write_results

if TYPE_CHECKING:
    from rich.console import Console

    from grafq.domain.output import OutputFormat
    from grafq.domain.pager import Pager
    from grafq.infrastructure.client import QueryExecutor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputOptions:
    """Where a one-shot query's rows go."""

    page_results: bool
    write_results: bool
    results_directory: Path
    results_format: OutputFormat


async def execute_query(
    db_client: QueryExecutor,
    query: str,
    options: OutputOptions,
    out: Console,
    *,
    pager: Pager | None = None,
) -> None:
    """Run *query* once and deliver its rows according to *options*.

    Raises:
        GrafqError: If the query, the write, or the pager fails.
    """
    try:
        results = await db_client.execute(query)
    except Exception as exc:
        raise GrafqError("couldn't execute query") from exc

    if isinstance(results, EmptyResults):
        out.print("no results")
        return

    rows = results.rows
    if options.write_results:
        try:
            path = write_results(
                rows, options.results_directory, options.results_format, datetime.now(UTC)
            )
        except OutputError as exc:
            raise GrafqError("couldn't write results") from exc
        out.print(Text(f"wrote results to {path}", style="grafq.info"))
        if options.page_results and pager is not None:
            _page(pager, path)
    elif options.page_results and pager is not None:
        with tempfile.TemporaryDirectory(prefix="grafq-") as tmp_dir:
            try:
                path = write_results(
                    rows, Path(tmp_dir), options.results_format, datetime.now(UTC)
                )
            except OutputError as exc:
                raise GrafqError("couldn't write results to temporary directory") from exc
            _page(pager, path)
    else:
        out.print(results_table(rows))


def _page(pager: Pager, path: Path) -> None:
    try:
        pager.launch(path)
    except PagerError as exc:
        raise GrafqError("couldn't display results via pager") from exc


async def benchmark_query(
    db_client: QueryExecutor,
    query: str,
    out: Console,
    *,
    num_runs: int,
    num_warmup_runs: int,
) -> BenchmarkStats | None:
    """Time *num_runs* executions of *query* after *num_warmup_runs* warm-ups.

    Raises:
        GrafqError: If any run fails.
    """
    if num_warmup_runs > 0:
        out.print(Text(f"Warming up ({num_warmup_runs} runs) ...", style="grafq.heading"))
        for i in range(num_warmup_runs):
            elapsed = await _timed_run(db_client, query, f"warmup run #{i + 1}")
            _print_run(out, i + 1, elapsed)
        out.print()

    out.print(Text(f"Benchmarking ({num_runs} runs) ...", style="grafq.heading"))
    samples: list[int] = []
    for i in range(num_runs):
        elapsed = await _timed_run(db_client, query, f"benchmark run #{i + 1}")
        _print_run(out, i + 1, elapsed)
        samples.append(elapsed)

    stats = BenchmarkStats.from_samples(samples)
    if stats is not None:
        out.print()
        out.print(Text("Statistics:", style="grafq.heading"))
        for label, value in (("min", stats.min_ms), ("max", stats.max_ms), ("mean", stats.mean_ms)):
            out.print(
                Text(f"{label + ':':<14}"), Text(f"{value}ms", style="grafq.metric"), sep=""
            )
    return stats


async def _timed_run(db_client: QueryExecutor, query: str, label: str) -> int:
    started = time.perf_counter()
    try:
        await db_client.execute(query)
    except Exception as exc:
        raise GrafqError(f"couldn't execute query for {label}") from exc
    elapsed = int((time.perf_counter() - started) * 1000)
    logger.debug("%s took %dms", label, elapsed)
    return elapsed


def _print_run(out: Console, number: int, elapsed_ms: int) -> None:
    out.print(
        Text(f"run {number:03}:      "), Text(f"{elapsed_ms}ms", style="grafq.metric"), sep=""
    )
