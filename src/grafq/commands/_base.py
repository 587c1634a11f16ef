"""Click base classes that add an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints worked invocations (DB_URI
setups, pager overrides, benchmark runs) and exits before the command
callback runs, so no database connection is attempted.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Stores ``examples`` text and registers the eager flag that shows it."""

    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        assert isinstance(self, click.Command)
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._print_examples,
                help="Show usage examples.",
            )
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class GrafqCommand(_ExamplesMixin, click.Command):
    """A command accepting ``examples=`` in its decorator."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class GrafqGroup(_ExamplesMixin, click.Group):
    """A group accepting ``examples=``; its subcommands default to :class:`GrafqCommand`."""

    command_class = GrafqCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
