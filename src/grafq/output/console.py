"""Rich Console factories and theme for grafq output.

:func:`create_terminal_console` writes straight to the terminal and is what
the interactive console and the query command use.  :func:`create_console`
renders into a StringIO buffer for string-returning helpers and tests.  In
non-TTY environments (tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

GRAFQ_THEME = Theme(
    {
        "grafq.info": "blue",
        "grafq.error": "red",
        "grafq.warning": "yellow",
        "grafq.uri": "cyan",
        "grafq.config": "blue",
        "grafq.commands": "yellow",
        "grafq.keymaps": "green",
        "grafq.timing": "dim",
        "grafq.heading": "bold yellow",
        "grafq.metric": "cyan",
        "grafq.query": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=GRAFQ_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def create_terminal_console() -> Console:
    """Create a Console bound to stdout."""
    return Console(theme=GRAFQ_THEME, highlight=False)


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
