"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Configures logging, and provides the terminal console
and lazy access to the database client and pager so ``--help`` and
``--debug`` never touch the network.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from grafq.errors import GrafqError

if TYPE_CHECKING:
    from rich.console import Console

    from grafq.config.paths import AppPaths
    from grafq.config.settings import GrafqSettings
    from grafq.domain.pager import Pager
    from grafq.infrastructure.neo4j_client import Neo4jClient
    from grafq.infrastructure.neptune_client import NeptuneClient


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: GrafqSettings, paths: AppPaths) -> None:
        self.settings = settings
        self.paths = paths
        self._out: Console | None = None

        from grafq.config.logging import configure_logging

        try:
            configure_logging(
                verbose=settings.verbose,
                log_json=settings.log_json,
                level=settings.log,
                log_file=paths.log_file if settings.log else None,
            )
        except (ValueError, OSError) as exc:
            raise GrafqError("couldn't set up logging") from exc

    @property
    def out(self) -> Console:
        """Rich console bound to stdout (created lazily)."""
        if self._out is None:
            from grafq.output.console import create_terminal_console

            self._out = create_terminal_console()
        return self._out

    async def connect(self) -> Neo4jClient | NeptuneClient:
        """Build the database client selected by ``DB_URI``."""
        from grafq.config.settings import DbSettings
        from grafq.infrastructure.client import get_db_client

        return await get_db_client(DbSettings())

    def get_pager(self) -> Pager:
        """Resolve the pager, honouring ``GRAFQ_PAGER``.

        Raises:
            PagerError: If the pager command is invalid or not installed.
        """
        from grafq.domain.pager import get_pager

        return get_pager(self.settings.pager)

    def require_pager(self) -> Pager:
        """Like :meth:`get_pager`, but failures are fatal."""
        from grafq.domain.pager import PagerError

        try:
            return self.get_pager()
        except PagerError as exc:
            raise GrafqError("couldn't set up pager") from exc

    def emit_debug(
        self,
        command: str,
        fields: list[tuple[str, object]],
        query: str | None = None,
    ) -> None:
        """Print the resolved invocation for ``--debug`` and do nothing else."""
        lines = ["DEBUG INFO", "", f"{'command:':<28}{command}"]
        for label, value in fields:
            if isinstance(value, bool):
                value = str(value).lower()
            lines.append(f"{label + ':':<28}{value}")
        if query is not None:
            if query == "-":
                lines.append(f"{'query:':<28}-")
            else:
                lines.extend(["query:", "---", query, "---"])
        click.echo("\n".join(lines))
