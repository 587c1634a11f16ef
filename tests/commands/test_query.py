"""Tests for the query command."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
import pytest
from click.testing import CliRunner

from grafq.cli import cli
from grafq.commands._context import AppContext
from grafq.infrastructure.client import QueryError


@pytest.fixture
def connect_to(monkeypatch: pytest.MonkeyPatch) -> Callable[[Any], None]:
    """Make AppContext.connect hand out the given executor."""

    def _patch(executor: Any) -> None:
        async def fake_connect(self: AppContext) -> Any:
            return executor

        monkeypatch.setattr(AppContext, "connect", fake_connect)

    return _patch


class TestQueryDebug:
    def test_debug(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "--debug", "MATCH (n) RETURN n"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "DEBUG INFO",
            "",
            "command:                    query",
            "benchmark:                  false",
            "print query:                false",
            "query:",
            "---",
            "MATCH (n) RETURN n",
            "---",
        ]

    def test_debug_benchmark(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--debug", "query", "-b", "-n", "10", "-W", "0", "-P", "RETURN 1"]
        )
        assert result.exit_code == 0
        assert "benchmark:                  true" in result.output
        assert "benchmark num runs:         10" in result.output
        assert "benchmark num warmup runs:  0" in result.output
        assert "print query:                true" in result.output

    def test_debug_stdin(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "--debug", "-"], input="RETURN 1")
        assert result.exit_code == 0
        assert "query:                      -" in result.output


class TestQueryUsage:
    def test_bench_and_write_conflict(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "-b", "-w", "RETURN 1"])
        assert result.exit_code == 2
        assert "cannot benchmark and write results at the same time" in result.output

    def test_num_runs_must_be_positive(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "-b", "-n", "0", "RETURN 1"])
        assert result.exit_code == 2

    def test_invalid_format(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "-f", "xml", "RETURN 1"])
        assert result.exit_code == 2

    def test_empty_stdin(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "-"], input="  \n")
        assert result.exit_code == 2
        assert "query is empty" in result.output


class TestQueryRun:
    def test_prints_table(
        self, cli_runner: CliRunner, connect_to: Callable[[Any], None], fakes: Any
    ) -> None:
        executor = fakes.Executor([[{"name": "alice"}, {"name": "bob"}]])
        connect_to(executor)
        result = cli_runner.invoke(cli, ["query", "MATCH (n) RETURN n.name AS name"])
        assert result.exit_code == 0, result.output
        assert "alice" in result.output
        assert "bob" in result.output
        assert executor.closed is True

    def test_no_results(
        self, cli_runner: CliRunner, connect_to: Callable[[Any], None], fakes: Any
    ) -> None:
        connect_to(fakes.Executor([[]]))
        result = cli_runner.invoke(cli, ["query", "MATCH (n:Missing) RETURN n"])
        assert result.exit_code == 0
        assert "no results" in result.output

    def test_reads_stdin_and_prints_query(
        self, cli_runner: CliRunner, connect_to: Callable[[Any], None], fakes: Any
    ) -> None:
        executor = fakes.Executor([[{"n": 1}]])
        connect_to(executor)
        result = cli_runner.invoke(cli, ["query", "-P", "-"], input="  RETURN 1 AS n\n")
        assert result.exit_code == 0
        assert executor.queries == ["RETURN 1 AS n"]
        assert "RETURN 1 AS n" in result.output

    def test_stdin_read_without_text_stream_helper(
        self,
        cli_runner: CliRunner,
        connect_to: Callable[[Any], None],
        fakes: Any,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _unavailable(*_args: Any, **_kwargs: Any) -> Any:
            raise AssertionError("click.get_text_stream is deprecated")

        monkeypatch.setattr(click, "get_text_stream", _unavailable)
        executor = fakes.Executor([[{"n": 1}]])
        connect_to(executor)
        result = cli_runner.invoke(cli, ["query", "-"], input="RETURN 1 AS n")
        assert result.exit_code == 0, result.output
        assert executor.queries == ["RETURN 1 AS n"]

    def test_writes_results(
        self,
        cli_runner: CliRunner,
        connect_to: Callable[[Any], None],
        fakes: Any,
        tmp_path: Path,
    ) -> None:
        connect_to(fakes.Executor([[{"n": 1}]]))
        out_dir = tmp_path / "out"
        result = cli_runner.invoke(
            cli, ["query", "-w", "-f", "json", "-d", str(out_dir), "RETURN 1 AS n"]
        )
        assert result.exit_code == 0, result.output
        [written] = list(out_dir.iterdir())
        assert written.suffix == ".json"
        assert "wrote results to" in result.output

    def test_failure_is_fatal(
        self, cli_runner: CliRunner, connect_to: Callable[[Any], None], fakes: Any
    ) -> None:
        error = QueryError("couldn't execute query")
        error.__cause__ = ValueError("Invalid input 'RETRUN'")
        executor = fakes.Executor([error])
        connect_to(executor)
        result = cli_runner.invoke(cli, ["query", "RETRUN 1"])
        assert result.exit_code == 1
        assert "Error: couldn't execute query: couldn't execute query: Invalid input" not in (
            result.output
        )
        assert "Error: couldn't execute query: Invalid input 'RETRUN'" in result.output
        assert executor.closed is True

    def test_benchmark(
        self, cli_runner: CliRunner, connect_to: Callable[[Any], None], fakes: Any
    ) -> None:
        executor = fakes.Executor([[{"n": 1}]])
        connect_to(executor)
        result = cli_runner.invoke(cli, ["query", "-b", "-n", "2", "-W", "1", "RETURN 1"])
        assert result.exit_code == 0, result.output
        assert len(executor.queries) == 3
        assert "Warming up (1 runs) ..." in result.output
        assert "Benchmarking (2 runs) ..." in result.output
        assert "Statistics:" in result.output
