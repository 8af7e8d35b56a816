"""Subcommand modules for roverctl.

register_commands() defers the command imports to call time so importing
``roverctl.commands`` stays cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from roverctl.commands.grid import grid
    from roverctl.commands.run import run
    from roverctl.commands.serve import serve
    from roverctl.commands.shell import shell

    cli.add_command(run)
    cli.add_command(shell)
    cli.add_command(grid)
    cli.add_command(serve)
