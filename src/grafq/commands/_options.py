"""Output options shared by ``grafq console`` and ``grafq query``.

Each option resolves to None when it wasn't given on the command line, so
the ``[console]`` config section can supply the value instead.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click
from click.core import ParameterSource

from grafq.domain.output import OutputFormat

F = TypeVar("F", bound=Callable[..., Any])

OUTPUT_OPTION_NAMES = ("page_results", "write_results", "results_directory", "results_format")


def output_options(func: F) -> F:
    """Attach the four output options to a command."""
    options = [
        click.option(
            "-p", "--page-results", is_flag=True, help="Display results via a pager."
        ),
        click.option(
            "-w", "--write-results", is_flag=True, help="Write results to the filesystem."
        ),
        click.option(
            "-d",
            "--results-dir",
            "results_directory",
            type=click.Path(file_okay=False, path_type=Path),
            default=None,
            help="Directory to write results in.",
        ),
        click.option(
            "-f",
            "--results-format",
            type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
            default=None,
            help="Format to write results in.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def explicit_output_options(ctx: click.Context, params: dict[str, Any]) -> dict[str, Any]:
    """Return only the output options the user actually passed."""
    explicit: dict[str, Any] = {}
    for name in OUTPUT_OPTION_NAMES:
        if ctx.get_parameter_source(name) in (None, ParameterSource.DEFAULT):
            continue
        value = params[name]
        if name == "results_format" and value is not None:
            value = OutputFormat.parse(value)
        explicit[name] = value
    return explicit


def debug_option(func: F) -> F:
    """Accept ``--debug`` after the subcommand name too."""
    return click.option(
        "--debug",
        "debug",
        is_flag=True,
        help="Output debug information without doing anything.",
    )(func)
