"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from roverctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from roverctl.services.result import ServiceResult

# Grids wider or taller than this are summarized instead of drawn.
MAX_MAP_SIZE = 60

HEADING_GLYPHS: dict[str, str] = {
    "NORTH": "^",
    "EAST": ">",
    "SOUTH": "v",
    "WEST": "<",
}
FREE_GLYPH = "."
OBSTACLE_GLYPH = "#"
SHARED_GLYPH = "*"


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: one line per rover, or the error."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    for key in ("items", "rovers"):
        if key in result.data:
            return "\n".join(_position_line(item) for item in result.data[key])
    if "rover_id" in result.data:
        return _position_line(result.data)
    return f"OK: {result.op}"


def render_map(
    width: int,
    height: int,
    obstacles: list[list[int]],
    rovers: list[dict[str, Any]],
) -> Text:
    """Draw the grid with north at the top.

    ``.`` is a free cell, ``#`` an obstacle, and a rover shows as an
    arrow for its heading (``^ > v <``). Two or more rovers on one cell
    show as ``*``.
    """
    blocked = {(x, y) for x, y in obstacles}
    occupied: dict[tuple[int, int], list[str]] = {}
    for r in rovers:
        occupied.setdefault((r["x"], r["y"]), []).append(str(r["heading"]))

    text = Text()
    for y in range(height - 1, -1, -1):
        text.append(f"{y:>3} ", style="rover.key")
        for x in range(width):
            headings = occupied.get((x, y))
            if headings and len(headings) > 1:
                text.append(SHARED_GLYPH, style="rover.cell.rover")
            elif headings:
                text.append(HEADING_GLYPHS.get(headings[0], "?"), style="rover.cell.rover")
            elif (x, y) in blocked:
                text.append(OBSTACLE_GLYPH, style="rover.cell.obstacle")
            else:
                text.append(FREE_GLYPH, style="rover.cell.free")
        text.append("\n")
    text.append("    ")
    text.append("".join(str(x % 10) for x in range(width)), style="rover.key")
    return text


# ── Helpers ───────────────────────────────────────────────────────────


def _position_line(item: dict[str, Any]) -> str:
    fields = (item.get(key, "") for key in ("rover_id", "x", "y", "heading"))
    return " ".join(str(f) for f in fields)


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="rover.ok")
    op = Text(f"  {result.op}", style="rover.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="rover.key")
    if key == "rover_id":
        v = Text(str(value), style="rover.id")
    elif key == "heading":
        v = Text(str(value), style="rover.heading")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = Text(prefix)
    line.append(f"{duration:>8.3f}ms", style=style)
    line.append(f"  {name}")

    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append(f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _rover_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rover", style="rover.id", no_wrap=True)
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Heading", style="rover.heading")
    for item in items:
        table.add_row(
            str(item.get("rover_id", "")),
            str(item.get("x", "")),
            str(item.get("y", "")),
            str(item.get("heading", "")),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rover.error")
    op = Text(f"  {result.op}", style="rover.op")
    code = Text(f" [{err.code}]" if err else "", style="rover.key")
    console.print(label, op, code, Text(" — "), Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")
    if verbose:
        _render_meta(console, result)


# ── Rover renderers ───────────────────────────────────────────────────


def _render_position(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render deploy/move/rotate/get results."""
    _status_line(console, result)
    for key in ("rover_id", "x", "y", "heading", "command"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_rover_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("No rovers deployed.", style="dim"))
    else:
        console.print(_rover_table(items))
    if verbose:
        _render_meta(console, result)


# ── Grid renderers ────────────────────────────────────────────────────


def _render_grid(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render describe_grid / replace_grid results with a map."""
    d = result.data
    width, height = d.get("width", 0), d.get("height", 0)
    obstacles = d.get("obstacles", [])
    rovers = d.get("rovers", [])

    _status_line(console, result)
    _field(console, "size", f"{width}x{height}")
    _field(console, "obstacles", len(obstacles))
    if "rovers" in d:
        _field(console, "rovers", len(rovers))

    console.print()
    if width <= MAX_MAP_SIZE and height <= MAX_MAP_SIZE:
        console.print(render_map(width, height, obstacles, rovers))
    else:
        console.print(Text(f"  (map omitted: larger than {MAX_MAP_SIZE} cells)", style="dim"))

    if rovers:
        console.print()
        console.print(_rover_table(rovers))
    if verbose:
        _render_meta(console, result)


# ── Script renderer ───────────────────────────────────────────────────


def _render_script(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "executed", d.get("executed", 0))
    _field(console, "failed", len(d.get("errors", [])))

    for err in d.get("errors", []):
        line = Text("  ")
        line.append("error", style="rover.error")
        line.append(f" step={err.get('index')} {err.get('op')} ")
        line.append(f"[{err.get('code')}]: {err.get('error')}")
        console.print(line)

    rovers = d.get("rovers", [])
    if rovers:
        console.print()
        console.print(_rover_table(rovers))
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "deploy": _render_position,
    "move": _render_position,
    "rotate": _render_position,
    "get": _render_position,
    "list_rovers": _render_rover_list,
    "describe_grid": _render_grid,
    "replace_grid": _render_grid,
    "run_script": _render_script,
}
