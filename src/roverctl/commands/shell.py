"""Command: interactive shell over a single in-memory grid."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from roverctl.commands._base import RoverCommand

if TYPE_CHECKING:
    from roverctl.commands._context import AppContext

PROMPT = "rover> "

SHELL_HELP = """\
Commands:
  deploy ROVER_ID X Y HEADING   place a rover (HEADING: NORTH, EAST, SOUTH, WEST)
  move ROVER_ID F|B             step forward or backward
  rotate ROVER_ID L|R           turn left or right
  get ROVER_ID                  show one rover
  list                          show all rovers
  grid                          draw the grid
  help                          this text
  quit                          leave the shell"""


@click.command(
    cls=RoverCommand,
    examples="""\
  roverctl shell
  roverctl --obstacle 5,5 shell
  printf 'deploy r1 5 4 NORTH\\nmove r1 F\\n' | roverctl -q shell""",
)
@click.pass_obj
def shell(app: AppContext) -> None:
    """Read commands from stdin and run them one at a time.

    Rovers live until the shell exits. When stdin is not a terminal the
    exit code is 1 if any command failed.
    """
    from roverctl.services.script import ScriptService

    interactive = sys.stdin.isatty()
    service = ScriptService(app.store)
    failures = 0

    if interactive and not app.settings.quiet:
        grid = app.store.grid
        click.echo(f"Grid {grid.width}x{grid.height}, {len(grid.obstacles)} obstacle(s).")
        click.echo("Type 'help' for commands, 'quit' to leave.")

    while True:
        if interactive:
            click.echo(PROMPT, nl=False)
        line = sys.stdin.readline()
        if not line:
            break
        word = line.strip().lower()
        if word in ("quit", "exit"):
            break
        if word in ("help", "?"):
            click.echo(SHELL_HELP)
            continue

        result = service.execute_line(line)
        if result is None:
            continue
        app.show(result)
        if not result.ok:
            failures += 1

    if failures and not interactive:
        raise SystemExit(1)
