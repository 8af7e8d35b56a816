"""Command: show the configured grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from roverctl.commands._base import RoverCommand

if TYPE_CHECKING:
    from roverctl.commands._context import AppContext


@click.command(
    cls=RoverCommand,
    examples="""\
  roverctl grid
  roverctl --width 20 --height 8 --obstacle 3,3 --obstacle 4,3 grid
  roverctl --json grid""",
)
@click.pass_obj
def grid(app: AppContext) -> None:
    """Show grid size, obstacles, and a map (north at the top)."""
    from roverctl.services.grid import GridService

    app.emit(GridService(app.store).describe())
