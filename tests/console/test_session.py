"""Tests for SessionConfig."""

from __future__ import annotations

from pathlib import Path

from grafq.config.models import ConsoleDefaults
from grafq.console.session import SessionConfig
from grafq.domain.output import OutputFormat


class TestFromDefaults:
    def test_uses_defaults(self, tmp_path: Path) -> None:
        config = SessionConfig.from_defaults(
            ConsoleDefaults(), history_file_path=tmp_path / "history.txt"
        )
        assert config.page_results is False
        assert config.write_results is False
        assert config.results_directory == Path(".grafq")
        assert config.results_format is OutputFormat.CSV
        assert config.history_file_path == tmp_path / "history.txt"

    def test_explicit_values_win(self, tmp_path: Path) -> None:
        defaults = ConsoleDefaults(page_results=True, results_format=OutputFormat.JSON)
        config = SessionConfig.from_defaults(
            defaults,
            history_file_path=tmp_path / "history.txt",
            page_results=False,
            write_results=True,
            results_directory=tmp_path / "out",
        )
        assert config.page_results is False
        assert config.write_results is True
        assert config.results_directory == tmp_path / "out"
        assert config.results_format is OutputFormat.JSON


class TestResetResultsDirectory:
    def test_reset(self, tmp_path: Path) -> None:
        config = SessionConfig.from_defaults(
            ConsoleDefaults(),
            history_file_path=tmp_path / "history.txt",
            results_directory=tmp_path / "elsewhere",
        )
        config.reset_results_directory()
        assert config.results_directory == Path(".grafq")
        config.reset_results_directory()
        assert config.results_directory == Path(".grafq")
