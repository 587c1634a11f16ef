"""Line editing and persisted query history.

:class:`QueryHistory` keeps prompt_toolkit's file format but only records
lines the console explicitly submits, and defers disk writes until
:meth:`QueryHistory.flush`.  :class:`LineEditor` owns the prompt session;
its :meth:`LineEditor.history_scope` flushes history on every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from prompt_toolkit.shortcuts import clear

logger = logging.getLogger(__name__)


class QueryHistory(FileHistory):
    """File-backed history with explicit recording and deferred writes."""

    def __init__(self, filename: Path) -> None:
        super().__init__(filename)
        self.path = filename
        self._pending: list[str] = []

    def append_string(self, string: str) -> None:
        """Ignore the prompt buffer's automatic append; see :meth:`record`."""

    def record(self, string: str) -> None:
        """Add *string* to the in-memory history and queue it for saving."""
        super().append_string(string)

    def store_string(self, string: str) -> None:
        self._pending.append(string)

    def load_history_strings(self) -> Iterable[str]:
        yield from reversed(self._pending)
        yield from super().load_history_strings()

    def flush(self) -> None:
        """Append queued entries to the history file.

        Raises:
            OSError: If the file can't be written.
        """
        pending, self._pending = self._pending, []
        for string in pending:
            super().store_string(string)


class LineEditor:
    """Reads console input with history, search, and editing keys."""

    def __init__(self, history_file: Path, *, session: PromptSession[str] | None = None) -> None:
        self.history = QueryHistory(history_file)
        self._session: PromptSession[str] = session or PromptSession(history=self.history)

    async def read_line(self, prompt: str) -> str:
        """Read one line.

        Raises:
            KeyboardInterrupt: On Ctrl+C.
            EOFError: On Ctrl+D with an empty line.
        """
        return await self._session.prompt_async(prompt)

    def clear_screen(self) -> None:
        clear()

    def record(self, line: str) -> None:
        self.history.record(line)

    @contextmanager
    def history_scope(self) -> Iterator[None]:
        """Save history when the block exits, however it exits."""
        try:
            yield
        finally:
            self.save_history()

    def save_history(self) -> None:
        try:
            self.history.flush()
        except OSError:
            logger.debug("Couldn't save history to %s", self.history.path, exc_info=True)
