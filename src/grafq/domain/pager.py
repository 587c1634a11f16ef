"""External pager used to scroll through written results.

The default pager is ``less -+F``.  ``GRAFQ_PAGER`` overrides it with a
command string (a binary plus optional arguments, shell-lexed).
"""

from __future__ import annotations

import logging
import shlex
import shutil
import signal
import subprocess
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PAGER_BINARY = "less"
DEFAULT_PAGER_ARGS = ("-+F",)


class PagerError(Exception):
    """The pager could not be built or launched."""


@dataclass(frozen=True)
class Pager:
    """A resolved pager command.

    Attributes:
        binary: Executable name or path.
        args: Arguments passed before the file path.
    """

    binary: str
    args: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def default(cls) -> Pager:
        """Build the default pager, checking the binary is on ``PATH``."""
        pager = cls(DEFAULT_PAGER_BINARY, DEFAULT_PAGER_ARGS)
        if shutil.which(pager.binary) is None:
            msg = f'couldn\'t find executable for grafq\'s default pager "{pager.binary}"'
            raise PagerError(msg)
        return pager

    @classmethod
    def custom(cls, command: str) -> Pager:
        """Build a pager from a user-supplied command string."""
        try:
            pager = cls.parse(command)
        except PagerError as exc:
            msg = f'couldn\'t build a pager from the command "{command}"'
            raise PagerError(msg) from exc
        if shutil.which(pager.binary) is None:
            raise PagerError(f'couldn\'t find pager executable "{pager.binary}"')
        return pager

    @classmethod
    def parse(cls, command: str) -> Pager:
        """Split *command* into binary and arguments without touching ``PATH``."""
        if not command.strip():
            raise PagerError("command is empty")
        try:
            parts = shlex.split(command)
        except ValueError as exc:
            raise PagerError("couldn't parse command") from exc
        if not parts:
            raise PagerError("command is empty")
        return cls(parts[0], tuple(parts[1:]))

    def command(self, path: Path) -> list[str]:
        """Return the argv that pages *path*."""
        return [self.binary, *self.args, str(path)]

    def launch(self, path: Path) -> None:
        """Run the pager on *path*, blocking until the user quits it.

        Raises:
            PagerError: If the pager can't be spawned or exits non-zero.
        """
        argv = self.command(path)
        logger.debug("Launching pager: %s", argv)
        with _sigint_ignored():
            try:
                completed = subprocess.run(argv, check=False)
            except OSError as exc:
                raise PagerError(f'couldn\'t run pager "{self.binary}"') from exc
        if completed.returncode != 0:
            msg = f'pager "{self.binary}" exited with status {completed.returncode}'
            raise PagerError(msg)


def get_pager(command: str | None) -> Pager:
    """Resolve the pager from an optional override command."""
    if command is None:
        return Pager.default()
    return Pager.custom(command)


@contextmanager
def _sigint_ignored() -> Iterator[None]:
    """Leave Ctrl+C to the pager while it owns the terminal."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)
