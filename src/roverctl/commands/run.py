"""Command: run a script of rover commands against a fresh grid."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TextIO

import click

from roverctl.commands._base import RoverCommand

if TYPE_CHECKING:
    from roverctl.commands._context import AppContext


def load_script(text: str) -> list[Any]:
    """Split script text into items.

    A JSON array is used as-is; anything else is read as one command per
    line. Raises ValueError for JSON that is not an array.
    """
    if text.lstrip().startswith("["):
        items = json.loads(text)
        if not isinstance(items, list):
            msg = "Script JSON must be an array of steps"
            raise ValueError(msg)
        return items
    return text.splitlines()


@click.command(
    cls=RoverCommand,
    examples="""\
  roverctl run mission.txt
  roverctl run mission.json --partial
  roverctl --width 5 --height 5 --obstacle 2,2 run mission.txt
  echo "deploy r1 3 5 NORTH" | roverctl --json run -""",
)
@click.argument("script", type=click.File("r", encoding="utf-8"))
@click.option("--partial", is_flag=True, help="Keep going after a failed step.")
@click.pass_obj
def run(app: AppContext, script: TextIO, partial: bool) -> None:
    """Run the commands in SCRIPT (a file path, or - for stdin).

    SCRIPT is either a JSON array of step objects or plain text with one
    command per line (deploy ROVER_ID X Y HEADING, move ROVER_ID F|B,
    rotate ROVER_ID L|R, get ROVER_ID, list, grid). Without --partial the
    run stops at the first failed step.
    """
    from roverctl.services.result import ServiceResult
    from roverctl.services.script import ScriptService

    try:
        items = load_script(script.read())
    except (ValueError, OSError) as exc:
        app.emit(
            ServiceResult.failed(
                "run_script",
                "INVALID_FILE",
                f"Error reading {script.name}: {exc}",
            )
        )
        return

    app.emit(ScriptService(app.store).run(items, partial=partial))
