"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, grafq.toml only contains overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from grafq.domain.output import OutputFormat

DEFAULT_RESULTS_DIR = ".grafq"


class ConsoleDefaults(BaseModel):
    """[console] section — starting values for output settings.

    Shared by ``grafq console`` and ``grafq query``; CLI flags win.
    """

    model_config = {"frozen": True}

    page_results: bool = False
    write_results: bool = False
    results_directory: Path = Path(DEFAULT_RESULTS_DIR)
    results_format: OutputFormat = OutputFormat.CSV
