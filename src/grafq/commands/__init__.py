"""Subcommand modules for grafq.

Provides register_commands() which uses deferred imports so the database
drivers are only loaded when a command actually runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from grafq.commands.console import console
    from grafq.commands.query import query

    cli.add_command(console)
    cli.add_command(query)
