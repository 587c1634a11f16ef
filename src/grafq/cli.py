"""Root CLI group for grafq with global flags and command registration."""

from __future__ import annotations

import click

from grafq import __version__
from grafq.commands import register_commands
from grafq.commands._base import GrafqGroup
from grafq.commands._context import AppContext
from grafq.config.paths import AppPaths
from grafq.config.settings import GrafqSettings


@click.group(
    cls=GrafqGroup,
    invoke_without_command=True,
    examples="""\
  grafq console
  grafq console --page-results --results-format json
  grafq query 'MATCH (n) RETURN n LIMIT 5'
  grafq query --bench 'MATCH (n) RETURN count(n)'
  grafq --debug console""",
)
@click.version_option(version=__version__, prog_name="grafq")
@click.option("--debug", is_flag=True, help="Output debug information without doing anything.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed log output.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """grafq lets you query Neo4j/AWS Neptune databases via an interactive console."""
    paths = AppPaths.resolve()
    settings = GrafqSettings.from_cli(
        config_path=config_path,
        paths=paths,
        debug=debug,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings, paths)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
