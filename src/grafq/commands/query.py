"""query — execute a one-off query, optionally benchmarking it."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import click
from rich.text import Text

from grafq.commands._base import GrafqCommand
from grafq.commands._options import debug_option, explicit_output_options, output_options
from grafq.services.query import OutputOptions

if TYPE_CHECKING:
    from grafq.commands._context import AppContext


@click.command(
    cls=GrafqCommand,
    examples="""\
  grafq query 'MATCH (n) RETURN n.id LIMIT 5'
  grafq query -P 'MATCH (n:Person) RETURN count(n) AS people'
  echo 'MATCH (n) RETURN n LIMIT 10' | grafq query -
  grafq query -w -f json 'MATCH (n) RETURN n LIMIT 100'
  grafq query --bench -n 10 -W 2 'MATCH (n) RETURN count(n)'""",
)
@click.argument("query_text", metavar="QUERY")
@output_options
@click.option("-b", "--bench", "benchmark", is_flag=True, help="Whether to benchmark the query.")
@click.option(
    "-n",
    "--bench-num-runs",
    type=click.IntRange(min=1),
    default=5,
    show_default=True,
    metavar="NUMBER",
    help="Number of benchmark runs.",
)
@click.option(
    "-W",
    "--bench-num-warmup-runs",
    type=click.IntRange(min=0),
    default=3,
    show_default=True,
    metavar="NUMBER",
    help="Number of benchmark warmup runs.",
)
@click.option("-P", "--print-query", is_flag=True, help="Print the query before running it.")
@debug_option
@click.pass_context
def query(
    ctx: click.Context,
    query_text: str,
    benchmark: bool,
    bench_num_runs: int,
    bench_num_warmup_runs: int,
    print_query: bool,
    debug: bool,
    **params: Any,
) -> None:
    """Execute a one-off query (use - to read it from stdin)."""
    app: AppContext = ctx.obj
    defaults = app.settings.console
    explicit = explicit_output_options(ctx, params)
    options = OutputOptions(
        page_results=explicit.get("page_results", defaults.page_results),
        write_results=explicit.get("write_results", defaults.write_results),
        results_directory=explicit.get("results_directory") or defaults.results_directory,
        results_format=explicit.get("results_format") or defaults.results_format,
    )

    if benchmark and options.write_results:
        raise click.UsageError("cannot benchmark and write results at the same time")

    if debug or app.settings.debug:
        fields: list[tuple[str, object]] = [("benchmark", benchmark)]
        if benchmark:
            fields += [
                ("benchmark num runs", bench_num_runs),
                ("benchmark num warmup runs", bench_num_warmup_runs),
            ]
        fields.append(("print query", print_query))
        app.emit_debug("query", fields, query=query_text)
        return

    text = _resolve_query(query_text)
    if print_query:
        app.out.print(Text(text, style="grafq.query"))
        app.out.print()

    asyncio.run(
        run_query(
            app,
            text,
            options,
            benchmark=benchmark,
            num_runs=bench_num_runs,
            num_warmup_runs=bench_num_warmup_runs,
        )
    )


def _resolve_query(query_text: str) -> str:
    """Return the query, reading it from stdin when given as ``-``."""
    text = query_text
    if query_text == "-":
        with click.open_file("-") as stream:
            text = stream.read()
    text = text.strip()
    if not text:
        raise click.UsageError("query is empty")
    return text


async def run_query(
    app: AppContext,
    text: str,
    options: OutputOptions,
    *,
    benchmark: bool,
    num_runs: int,
    num_warmup_runs: int,
) -> None:
    from grafq.services.query import benchmark_query, execute_query

    pager = app.require_pager() if options.page_results and not benchmark else None
    db_client = await app.connect()
    try:
        if benchmark:
            await benchmark_query(
                db_client, text, app.out, num_runs=num_runs, num_warmup_runs=num_warmup_runs
            )
        else:
            await execute_query(db_client, text, options, app.out, pager=pager)
    finally:
        await db_client.close()
