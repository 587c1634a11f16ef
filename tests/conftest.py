"""Shared pytest fixtures and test doubles for grafq tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from rich.console import Console

from grafq.console.engine import QueryConsole
from grafq.console.session import SessionConfig
from grafq.domain.output import OutputFormat
from grafq.domain.pager import Pager, PagerError
from grafq.domain.results import QueryResults, query_results
from grafq.output.console import create_console

FIXED_NOW = datetime(2025, 3, 14, 9, 26, 53, tzinfo=UTC)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the real home directory and database settings."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("XDG_CONFIG_HOME", "XDG_DATA_HOME", "XDG_STATE_HOME"):
        monkeypatch.setenv(var, str(home / var.lower()))
    for var in (
        "DB_URI",
        "NEO4J_USER",
        "NEO4J_PASSWORD",
        "NEO4J_DB",
        "GRAFQ_PAGER",
        "GRAFQ_LOG",
        "GRAFQ_DEBUG",
        "GRAFQ_VERBOSE",
        "GRAFQ_LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeExecutor:
    """Query executor that replays canned outcomes.

    Each entry in *outcomes* is either a list of rows or an exception to
    raise.  The last entry repeats once the list runs out.  Setting *block*
    makes ``execute`` wait forever, so the query always loses a race.
    """

    def __init__(
        self,
        outcomes: Sequence[list[dict[str, Any]] | BaseException] = ([],),
        *,
        uri: str = "bolt://127.0.0.1:7687",
        block: bool = False,
    ) -> None:
        self._outcomes = list(outcomes)
        self._uri = uri
        self._block = block
        self.queries: list[str] = []
        self.closed = False

    async def execute(self, query: str) -> QueryResults:
        self.queries.append(query)
        if self._block:
            await asyncio.Event().wait()
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return query_results(outcome)

    def connection_uri(self) -> str:
        return self._uri

    async def close(self) -> None:
        self.closed = True


class FakeEditor:
    """Line editor that feeds scripted input.

    Entries in *lines* are returned in order; exception instances are
    raised instead.  Once the script runs out, ``read_line`` raises
    EOFError.
    """

    def __init__(self, lines: Sequence[str | BaseException] = ()) -> None:
        self._lines = list(lines)
        self.recorded: list[str] = []
        self.prompts: list[str] = []
        self.saved = False
        self.cleared = 0
        self.clear_error: OSError | None = None

    async def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        line = self._lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line

    def clear_screen(self) -> None:
        if self.clear_error is not None:
            raise self.clear_error
        self.cleared += 1

    def record(self, line: str) -> None:
        self.recorded.append(line)

    @contextmanager
    def history_scope(self) -> Iterator[None]:
        try:
            yield
        finally:
            self.saved = True


class FakeInterrupts:
    """Interrupt source that fires immediately or never."""

    def __init__(self, *, fire: bool = False) -> None:
        self.fire = fire
        self.waits = 0

    async def wait(self) -> None:
        self.waits += 1
        if not self.fire:
            await asyncio.Event().wait()


class FakePager(Pager):
    """Pager that captures the file it was asked to show."""

    def __init__(self, error: PagerError | None = None) -> None:
        super().__init__("fake-pager")
        object.__setattr__(self, "error", error)
        object.__setattr__(self, "shown", [])

    def launch(self, path: Path) -> None:
        if self.error is not None:
            raise self.error
        self.shown.append((path, path.read_text(encoding="utf-8")))


class FakeClock:
    """Monotonic clock returning scripted readings."""

    def __init__(self, *readings: float) -> None:
        self._readings = list(readings)

    def __call__(self) -> float:
        return self._readings.pop(0)


@pytest.fixture
def out() -> Console:
    """StringIO-backed console with colors off."""
    return create_console(no_color=True, width=300)


@pytest.fixture
def session_config(tmp_path: Path) -> SessionConfig:
    return SessionConfig(
        page_results=False,
        write_results=False,
        results_directory=tmp_path / "results",
        results_format=OutputFormat.CSV,
        history_file_path=tmp_path / "history.txt",
    )


@pytest.fixture
def make_console(
    out: Console, session_config: SessionConfig
) -> Callable[..., QueryConsole]:
    """Factory for a QueryConsole wired to test doubles.

    Keyword arguments override the defaults: an empty FakeEditor, a
    FakeExecutor returning no rows, a never-firing FakeInterrupts, and a
    pager factory that hands out a FakePager.
    """

    def _make(**overrides: Any) -> QueryConsole:
        kwargs: dict[str, Any] = {
            "editor": FakeEditor(),
            "out": out,
            "pager_factory": FakePager,
            "interrupts": FakeInterrupts(),
            "now": lambda: FIXED_NOW,
        }
        db_client = overrides.pop("db_client", None) or FakeExecutor()
        config = overrides.pop("config", None) or session_config
        kwargs.update(overrides)
        return QueryConsole(db_client, config, **kwargs)

    return _make


@pytest.fixture
def fakes() -> Any:
    """Expose the test double classes to test modules."""

    class _Fakes:
        Executor = FakeExecutor
        Editor = FakeEditor
        Interrupts = FakeInterrupts
        Pager = FakePager
        Clock = FakeClock

    return _Fakes
