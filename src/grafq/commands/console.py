"""console — open grafq's interactive console."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import click

from grafq.commands._base import GrafqCommand
from grafq.commands._options import debug_option, explicit_output_options, output_options
from grafq.console.session import SessionConfig
from grafq.errors import GrafqError

if TYPE_CHECKING:
    from grafq.commands._context import AppContext


@click.command(
    cls=GrafqCommand,
    examples="""\
  # Neo4j
  DB_URI=bolt://127.0.0.1:7687 NEO4J_USER=neo4j NEO4J_PASSWORD=secret NEO4J_DB=neo4j \\
    grafq console

  # AWS Neptune, writing results as JSON
  DB_URI=https://abc.xyz.us-east-1.neptune.amazonaws.com:8182 \\
    grafq console --write-results --results-format json

  # Page results with a custom pager
  GRAFQ_PAGER="bat -p --paging always" grafq console -p""",
)
@output_options
@debug_option
@click.pass_context
def console(ctx: click.Context, debug: bool, **params: Any) -> None:
    """Open grafq's console."""
    app: AppContext = ctx.obj
    config = SessionConfig.from_defaults(
        app.settings.console,
        history_file_path=app.paths.history_file,
        **explicit_output_options(ctx, params),
    )

    if debug or app.settings.debug:
        app.emit_debug(
            "console",
            [
                ("page results", config.page_results),
                ("write results", config.write_results),
                ("results directory", config.results_directory),
                ("results format", config.results_format),
                ("history file", config.history_file_path),
            ],
        )
        return

    asyncio.run(run_console(app, config))


async def run_console(app: AppContext, config: SessionConfig) -> None:
    """Connect, prepare the history and pager, and run the console loop."""
    from grafq.console.editor import LineEditor
    from grafq.console.engine import QueryConsole

    db_client = await app.connect()
    try:
        history_dir = config.history_file_path.parent
        try:
            history_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"couldn't create directory for grafq's history: {history_dir}"
            raise GrafqError(msg) from exc

        pager = app.require_pager() if config.page_results else None

        engine = QueryConsole(
            db_client,
            config,
            editor=LineEditor(config.history_file_path),
            out=app.out,
            pager=pager,
            pager_factory=app.get_pager,
        )
        await engine.run_loop()
    finally:
        await db_client.close()
