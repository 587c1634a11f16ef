"""Interrupt sources raced against in-flight queries.

While a query runs the terminal is not in raw mode, so Ctrl+C arrives as
SIGINT.  :class:`SigintListener` swaps in a handler for the duration of one
wait and restores the previous handler afterwards.  Outside that wait, a
query being handled runs under :func:`sigint_ignored`, so a late Ctrl+C
has no effect.
"""

from __future__ import annotations

import asyncio
import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol


class InterruptSource(Protocol):
    async def wait(self) -> None:
        """Return once the user has asked to interrupt."""
        ...


class SigintListener:
    """Completes :meth:`wait` on the next SIGINT."""

    async def wait(self) -> None:
        loop = asyncio.get_running_loop()
        fired = asyncio.Event()

        def _on_sigint(_signum: int, _frame: object) -> None:
            loop.call_soon_threadsafe(fired.set)

        previous = signal.signal(signal.SIGINT, _on_sigint)
        try:
            await fired.wait()
        finally:
            signal.signal(signal.SIGINT, previous)


@contextmanager
def sigint_ignored() -> Iterator[None]:
    """Ignore SIGINT inside the block; handlers only exist on the main thread."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)
