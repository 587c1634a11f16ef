"""QueryConsole — grafq's interactive read-eval-print loop.

The loop reads a line, classifies it (see :mod:`grafq.console.classifier`)
and either adjusts the :class:`SessionConfig`, controls the loop, or runs
the line as a query.  Queries race against an interrupt: if the user
presses Ctrl+C first, the console stops waiting and the query is
abandoned.  It is not cancelled on the database side.  Ctrl+C pressed
once the query has finished is ignored.

Results are routed by the session config:

* ``write_results`` — write a file to ``results_directory``, then page it
  if paging is on.
* ``page_results`` only — write to a temporary directory, page, clean up.
* neither — print an inline table.
"""

from __future__ import annotations

import asyncio
import logging
import tempfile
import time
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.text import Text

from grafq.console.classifier import (
    ClearCommand,
    ConfigCommand,
    EmptyInput,
    ExitCommand,
    HelpCommand,
    QueryFileError,
    QueryInput,
    classify,
    read_query_file,
)
from grafq.console.interrupts import InterruptSource, SigintListener, sigint_ignored
from grafq.domain.output import OutputFormat
from grafq.domain.pager import PagerError
from grafq.domain.results import EmptyResults, QueryResults, Row
from grafq.errors import describe_error
from grafq.output.help import print_banner, print_help
from grafq.output.results import results_table
from grafq.services.output import OutputError, write_results

if TYPE_CHECKING:
    from rich.console import Console

    from grafq.console.editor import LineEditor
    from grafq.console.session import SessionConfig
    from grafq.domain.pager import Pager
    from grafq.infrastructure.client import QueryExecutor

logger = logging.getLogger(__name__)

PROMPT = ">> "
DOUBLE_INTERRUPT_WINDOW = 1.0  # seconds


class QueryCancelledError(Exception):
    """The user interrupted the wait for a query."""


class QueryConsole:
    """Stateful console session over one query executor.

    Args:
        db_client: The executor queries are sent to.
        config: Session configuration; mutated by config commands.
        editor: Source of input lines and owner of the history.
        out: Rich console all feedback is printed to.
        pager: A pager acquired before the loop started, if any.
        pager_factory: Builds a pager when the user runs ``page on``.
        interrupts: Interrupt source raced against running queries.
        clock: Monotonic clock used for the double Ctrl+C rule.
        now: Timestamp source for result file names.
    """

    def __init__(
        self,
        db_client: QueryExecutor,
        config: SessionConfig,
        *,
        editor: LineEditor,
        out: Console,
        pager: Pager | None = None,
        pager_factory: Callable[[], Pager],
        interrupts: InterruptSource | None = None,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.db_client = db_client
        self.config = config
        self.pager = pager
        self._editor = editor
        self._out = out
        self._pager_factory = pager_factory
        self._interrupts = interrupts or SigintListener()
        self._clock = clock
        self._now = now
        self._last_interrupt: float | None = None

    # --- Loop ---

    async def run_loop(self) -> None:
        """Run until the user exits; history is saved on every exit path."""
        self.print_help(banner=True)

        with self._editor.history_scope():
            while True:
                try:
                    line = await self._editor.read_line(PROMPT)
                except KeyboardInterrupt:
                    if self._interrupt_should_quit():
                        break
                    continue
                except EOFError:
                    break

                self._last_interrupt = None
                if not await self.handle_line(line):
                    break

        logger.debug("Console loop finished")

    def _interrupt_should_quit(self) -> bool:
        """Apply the double Ctrl+C rule to an interrupt received while idle."""
        now = self._clock()
        last, self._last_interrupt = self._last_interrupt, now
        if last is not None and now - last <= DOUBLE_INTERRUPT_WINDOW:
            return True
        self._info("press <c-c> again to quit")
        return False

    async def handle_line(self, line: str) -> bool:
        """Act on one line of input. Returns False when the loop should end."""
        command = classify(line)

        if isinstance(command, EmptyInput):
            return True
        if isinstance(command, ExitCommand):
            return False
        if isinstance(command, ClearCommand):
            self._clear_screen()
        elif isinstance(command, HelpCommand):
            self.print_help(banner=True)
        elif isinstance(command, ConfigCommand):
            self._CONFIG_HANDLERS[command.verb](self, command.argument)
        elif isinstance(command, QueryInput):
            with sigint_ignored():
                await self._handle_query(command)
        return True

    def print_help(self, *, banner: bool = False) -> None:
        if banner:
            print_banner(self._out)
        print_help(self._out, self.db_client.connection_uri(), self.config)

    def _clear_screen(self) -> None:
        try:
            self._editor.clear_screen()
        except OSError as exc:
            logger.debug("Clearing the screen failed", exc_info=True)
            self._warning(f"Warning: couldn't clear screen: {exc}")

    # --- Config commands ---

    def _set_paging(self, argument: str | None) -> None:
        if argument == "on":
            if self.pager is None:
                try:
                    self.pager = self._pager_factory()
                except PagerError as exc:
                    self._error(f"Error: couldn't turn on pager: {describe_error(exc)}")
                    return
            self.config.page_results = True
            self._info("paging results turned ON")
        elif argument == "off":
            self.config.page_results = False
            self._info("paging results turned OFF")
        else:
            self._error("Usage: page on/off")

    def _set_format(self, argument: str | None) -> None:
        if argument is None:
            self._error("Usage: format <csv/json>")
            return
        try:
            fmt = OutputFormat.parse(argument)
        except ValueError as exc:
            self._error(f"Error: {exc}")
            return
        self.config.results_format = fmt
        self._info(f"output format set to: {fmt}")

    def _set_directory(self, argument: str | None) -> None:
        if argument is None:
            self._error("Usage: dir <PATH> / dir reset")
        elif argument == "reset":
            self.config.reset_results_directory()
            self._info(f"output path changed to grafq's default: {self.config.results_directory}")
        else:
            self.config.results_directory = Path(argument)
            self._info(f"output path changed to: {argument}")

    def _set_writing(self, argument: str | None) -> None:
        if argument == "on":
            self.config.write_results = True
            self._info("writing output turned ON")
        elif argument == "off":
            self.config.write_results = False
            self._info("writing output turned OFF")
        else:
            self._error("Usage: write on/off")

    _CONFIG_HANDLERS: dict[str, Callable[[QueryConsole, str | None], None]] = {
        "page": _set_paging,
        "format": _set_format,
        "dir": _set_directory,
        "write": _set_writing,
    }

    # --- Queries ---

    async def _handle_query(self, command: QueryInput) -> None:
        query = command.line
        if command.is_file_reference:
            try:
                query = read_query_file(command.line)
            except QueryFileError as exc:
                self._error(f"Error: {describe_error(exc)}")
                return

        self._editor.record(command.line)

        started = time.perf_counter()
        try:
            results = await self._execute_cancellable(query)
        except QueryCancelledError:
            self._info("query cancelled")
            return
        except Exception as exc:
            logger.debug("Query failed", exc_info=True)
            self._error(f"Error: couldn't get results: {describe_error(exc)}")
            return
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        self._out.print(Text(f"took {elapsed_ms}ms", style="grafq.timing"))
        if isinstance(results, EmptyResults):
            self._out.print("\nNo results\n")
            return
        self._route_results(results.rows)

    async def _execute_cancellable(self, query: str) -> QueryResults:
        """Race the query against an interrupt; the first to finish wins.

        A query that loses the race is abandoned: it keeps running in the
        background and its outcome is discarded.

        Raises:
            QueryCancelledError: If the interrupt arrived first.
        """
        query_task = asyncio.ensure_future(self.db_client.execute(query))
        interrupt_task = asyncio.ensure_future(self._interrupts.wait())
        try:
            await asyncio.wait({query_task, interrupt_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            interrupt_task.cancel()
            await asyncio.wait({interrupt_task})

        if query_task.done():
            return query_task.result()

        query_task.add_done_callback(_discard_outcome)
        if not interrupt_task.cancelled():
            interrupt_task.result()
        raise QueryCancelledError()

    # --- Result routing ---

    def _route_results(self, rows: Sequence[Row]) -> None:
        config = self.config
        if config.write_results:
            try:
                path = write_results(
                    rows, config.results_directory, config.results_format, self._now()
                )
            except OutputError as exc:
                self._error(f"Error: couldn't write results: {describe_error(exc)}")
                return
            self._info(f"wrote results to {path}")
            if config.page_results and self.pager is not None:
                self._page(path)
        elif config.page_results and self.pager is not None:
            self._page_via_temporary_file(rows)
        else:
            self._out.print()
            self._out.print(results_table(rows))
            self._out.print()

    def _page_via_temporary_file(self, rows: Sequence[Row]) -> None:
        try:
            tmp = tempfile.TemporaryDirectory(prefix="grafq-")
        except OSError as exc:
            self._error(
                "Error: couldn't create temporary directory for paging results: "
                f"{describe_error(exc)}"
            )
            return

        with tmp as tmp_dir:
            try:
                path = write_results(rows, Path(tmp_dir), self.config.results_format, self._now())
            except OutputError as exc:
                self._error(
                    "Error: couldn't write results to temporary directory: "
                    f"{describe_error(exc)}"
                )
                return
            self._page(path)

    def _page(self, path: Path) -> None:
        assert self.pager is not None
        try:
            self.pager.launch(path)
        except PagerError as exc:
            self._error(f"Error: couldn't display results via pager: {describe_error(exc)}")

    # --- Feedback ---

    def _info(self, message: str) -> None:
        self._out.print(Text(message, style="grafq.info"))

    def _warning(self, message: str) -> None:
        self._out.print(Text(message, style="grafq.warning"))

    def _error(self, message: str) -> None:
        self._out.print(Text(message, style="grafq.error"))


def _discard_outcome(task: asyncio.Future[Any]) -> None:
    """Consume an abandoned query's outcome so it is never reported."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned query failed", exc_info=exc)
