"""Root CLI group for roverctl with global flags and command registration."""

from __future__ import annotations

from typing import Any

import click
from pydantic import ValidationError
from pydantic_settings import SettingsError

from roverctl import __version__
from roverctl.commands import register_commands
from roverctl.commands._base import RoverGroup
from roverctl.commands._context import AppContext
from roverctl.config.models import parse_cell
from roverctl.config.settings import RoverSettings


def _parse_obstacles(
    _ctx: click.Context, _param: click.Parameter, value: tuple[str, ...]
) -> list[tuple[int, int]]:
    try:
        return [parse_cell(v) for v in value]
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.group(
    cls=RoverGroup,
    invoke_without_command=True,
    examples="""\
  roverctl grid
  roverctl --obstacle 5,5 run mission.txt
  roverctl --json --width 20 --height 20 shell
  roverctl serve --transport streamable-http""",
)
@click.version_option(version=__version__, prog_name="roverctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--width", type=int, default=None, help="Grid width (overrides config).")
@click.option("--height", type=int, default=None, help="Grid height (overrides config).")
@click.option(
    "--obstacle",
    "obstacles",
    multiple=True,
    callback=_parse_obstacles,
    metavar="X,Y",
    help="Obstacle cell (repeatable, replaces configured obstacles).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    width: int | None,
    height: int | None,
    obstacles: list[tuple[int, int]],
) -> None:
    """roverctl — drive rovers on a bounded grid with obstacles."""
    ctx.ensure_object(dict)

    grid: dict[str, Any] = {}
    if width is not None:
        grid["width"] = width
    if height is not None:
        grid["height"] = height
    if obstacles:
        grid["obstacles"] = obstacles

    try:
        settings = RoverSettings.from_cli(
            config_path=config_path,
            grid=grid,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except (ValidationError, SettingsError) as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc

    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
