"""Classify a line of console input.

Priority order: empty, exit, clear, help, config command, query.  Config
commands are recognised by their first word; everything after the first
space is the argument, taken verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

EXIT_KEYWORDS = frozenset({"bye", "exit", "quit", ":q"})
CLEAR_KEYWORDS = frozenset({"clear"})
HELP_KEYWORDS = frozenset({"help", ":h"})

# "output" is an alias of "dir".
CONFIG_VERBS = {
    "page": "page",
    "format": "format",
    "dir": "dir",
    "output": "dir",
    "write": "write",
}

FILE_QUERY_PREFIX = "@"


@dataclass(frozen=True)
class EmptyInput:
    pass


@dataclass(frozen=True)
class ExitCommand:
    pass


@dataclass(frozen=True)
class ClearCommand:
    pass


@dataclass(frozen=True)
class HelpCommand:
    pass


@dataclass(frozen=True)
class ConfigCommand:
    """A config verb and its raw argument (None when missing)."""

    verb: str
    argument: str | None


@dataclass(frozen=True)
class QueryInput:
    """A query line, either literal or ``@<path>`` pointing at a file."""

    line: str

    @property
    def is_file_reference(self) -> bool:
        return self.line.startswith(FILE_QUERY_PREFIX)


ConsoleInput = EmptyInput | ExitCommand | ClearCommand | HelpCommand | ConfigCommand | QueryInput


def classify(raw: str) -> ConsoleInput:
    """Decide what *raw* asks the console to do."""
    line = raw.strip()
    if not line:
        return EmptyInput()
    if line in EXIT_KEYWORDS:
        return ExitCommand()
    if line in CLEAR_KEYWORDS:
        return ClearCommand()
    if line in HELP_KEYWORDS:
        return HelpCommand()

    first_word = line.split(maxsplit=1)[0]
    verb = CONFIG_VERBS.get(first_word)
    if verb is not None:
        _, sep, argument = line.partition(" ")
        return ConfigCommand(verb=verb, argument=argument if sep and argument else None)

    return QueryInput(line)


class QueryFileError(Exception):
    """A ``@<path>`` query couldn't be loaded."""


def read_query_file(reference: str) -> str:
    """Load the query text for an ``@<path>`` line.

    Raises:
        QueryFileError: If the path is empty, unreadable, or the file holds
            only whitespace.
    """
    path_text = reference.removeprefix(FILE_QUERY_PREFIX).strip()
    if not path_text:
        raise QueryFileError(f"no file path provided after {FILE_QUERY_PREFIX}")

    path = Path(path_text).expanduser()
    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise QueryFileError(f"couldn't read query file: {path}") from exc

    query = contents.strip()
    if not query:
        raise QueryFileError(f"file is empty: {path}")
    return query
