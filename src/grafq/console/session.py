"""Per-session output configuration for the interactive console."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from grafq.config.models import DEFAULT_RESULTS_DIR, ConsoleDefaults
from grafq.domain.output import OutputFormat


@dataclass
class SessionConfig:
    """Mutable display and persistence preferences for one console run.

    ``page_results`` and ``write_results`` are independent.  The console's
    config commands change every field except ``history_file_path``.
    """

    page_results: bool
    write_results: bool
    results_directory: Path
    results_format: OutputFormat
    history_file_path: Path

    @classmethod
    def from_defaults(
        cls,
        defaults: ConsoleDefaults,
        *,
        history_file_path: Path,
        page_results: bool | None = None,
        write_results: bool | None = None,
        results_directory: Path | None = None,
        results_format: OutputFormat | None = None,
    ) -> SessionConfig:
        """Start from *defaults*, letting explicitly given values win."""
        return cls(
            page_results=defaults.page_results if page_results is None else page_results,
            write_results=defaults.write_results if write_results is None else write_results,
            results_directory=(
                defaults.results_directory if results_directory is None else results_directory
            ),
            results_format=defaults.results_format if results_format is None else results_format,
            history_file_path=history_file_path,
        )

    def reset_results_directory(self) -> None:
        self.results_directory = Path(DEFAULT_RESULTS_DIR)
