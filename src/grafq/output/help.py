"""Banner and help screen for the interactive console."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

if TYPE_CHECKING:
    from rich.console import Console

    from grafq.console.session import SessionConfig

BANNER = r"""
                     ___
   __ _ _ __ __ _   / __| __ _
  / _` | '__/ _` | | |_  / _` |
 | (_| | | | (_| | |  _|| (_| |
  \__, |_|  \__,_| |_|   \__, |
  |___/                     |_|
""".strip("\n")

COMMANDS = """\
 commands
   help / :h                      show help
   clear                          clear screen
   quit / exit / bye / :q         quit
   page on/off                    toggle paging results
   format <csv/json>              set output format
   dir / output <PATH>            set output directory
   dir / output reset             reset output directory to the default
   write on/off                   toggle writing results to the filesystem
   @<PATH>                        execute the query stored in a file"""

KEYMAPS = """\
 keymaps
   <c-c> <c-c>                    quit (while waiting for input)
   <c-c>                          cancel the running query
   <c-d>                          quit
   <up> / <down>                  scroll through history
   <c-r>                          search history
   <c-l>                          clear screen"""


def on_off(flag: bool) -> str:
    return "ON" if flag else "OFF"


def config_summary(config: SessionConfig) -> str:
    """Describe the current session configuration."""
    return "\n".join(
        [
            " config",
            f"   page results                   {on_off(config.page_results)}",
            f"   write results to filesystem    {on_off(config.write_results)}",
            f"   output format                  {config.results_format}",
            f"   output path                    {config.results_directory}",
        ]
    )


def print_banner(console: Console) -> None:
    console.print(Text(BANNER, style="grafq.info"))
    console.print()


def print_help(console: Console, db_uri: str, config: SessionConfig) -> None:
    """Print the connection, current config, commands, and keymaps."""
    console.print(Text(" connected to: "), Text(db_uri, style="grafq.uri"), sep="")
    console.print()
    console.print(Text(config_summary(config), style="grafq.config"))
    console.print()
    console.print(Text(COMMANDS, style="grafq.commands"))
    console.print(Text(KEYMAPS, style="grafq.keymaps"))
    console.print()
