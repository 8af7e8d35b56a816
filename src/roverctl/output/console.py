"""Rich Console factory and theme for roverctl output.

Consoles render into a StringIO buffer so renderers keep the
``format_result() -> str`` contract. Outside a terminal (tests, pipes)
Rich drops the color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ROVER_THEME = Theme(
    {
        "rover.ok": "bold green",
        "rover.error": "bold red",
        "rover.warning": "bold yellow",
        "rover.op": "bold cyan",
        "rover.key": "dim",
        "rover.id": "bold blue",
        "rover.heading": "magenta",
        "rover.cell.free": "dim",
        "rover.cell.obstacle": "bold red",
        "rover.cell.rover": "bold green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=ROVER_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
