"""GrafqError — fatal errors that end a grafq invocation.

Raised before the console loop starts (or by the one-shot query command)
and rendered by Click as ``Error: <message>``, optionally followed by a
hint on how to fix the problem.
"""

from __future__ import annotations

from typing import IO, Any

import click

UNEXPECTED_NOTE = """
---
This error is unexpected.
Let the grafq maintainers know about this via https://github.com/dhth/grafq/issues.
"""


class GrafqError(click.ClickException):
    """A fatal, user-facing error.

    Attributes:
        follow_up: Optional multi-line hint printed after the message.
        unexpected: Whether the error is not attributable to user input.
    """

    def __init__(
        self,
        message: str,
        *,
        follow_up: str | None = None,
        unexpected: bool = False,
    ) -> None:
        super().__init__(message)
        self.follow_up = follow_up
        self.unexpected = unexpected

    def format_message(self) -> str:
        """Return the message with the causal chain appended."""
        if self.__cause__ is None:
            return self.message
        return describe_error(self)

    def show(self, file: IO[Any] | None = None) -> None:
        super().show(file)
        if self.follow_up:
            click.echo(f"\n{self.follow_up.strip()}", err=True)
        if self.unexpected:
            click.echo(UNEXPECTED_NOTE, err=True, nl=False)


def describe_error(exc: BaseException) -> str:
    """Render *exc* and its causes as ``outer: inner: root``."""
    parts: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        if not parts or text != parts[-1]:
            parts.append(text)
        current = current.__cause__
    return ": ".join(parts)
