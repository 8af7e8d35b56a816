"""MCP tool definitions — rover commands, rover queries, and the grid.

Each tool has a ``<name>_impl`` function testable without the mcp
package. ``register_tools()`` wraps them with FastMCP decorators.

Failure kinds map to HTTP-style statuses in the response so clients
can tell "not found" from "bad input" from "conflict".
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from roverctl.services.grid import GridService
from roverctl.services.result import INVALID_INPUT, ServiceResult
from roverctl.services.rover import RoverService

if TYPE_CHECKING:
    from roverctl.infrastructure.store import MissionStore

ERROR_STATUS: dict[str, int] = {
    "NOT_FOUND": 404,
    "OUT_OF_BOUNDS": 400,
    "INVALID_INPUT": 400,
    "OBSTACLE_BLOCKED": 409,
}


def _to_mcp_response(result: ServiceResult) -> dict[str, Any]:
    """Convert a ServiceResult to an MCP-friendly dict."""
    response: dict[str, Any] = {
        "ok": result.ok,
        "op": result.op,
        "data": result.data,
    }
    if result.warnings:
        response["warnings"] = result.warnings
    if result.error is not None:
        response["error"] = {
            "code": result.error.code,
            "message": result.error.message,
            "status": ERROR_STATUS.get(result.error.code, 500),
        }
        if result.error.code == "OBSTACLE_BLOCKED":
            response["error"]["obstacle_detected"] = True
    return response


# ---------------------------------------------------------------------------
# Rover commands
# ---------------------------------------------------------------------------


def deploy_rover_impl(
    store: MissionStore, rover_id: str, x: int, y: int, heading: str
) -> dict[str, Any]:
    """Deploy a rover at (x, y) facing heading."""
    return _to_mcp_response(RoverService(store).deploy(rover_id, x, y, heading))


def move_rover_impl(store: MissionStore, rover_id: str, command: str) -> dict[str, Any]:
    """Move a rover one cell forward (F) or backward (B)."""
    return _to_mcp_response(RoverService(store).move(rover_id, command))


def rotate_rover_impl(store: MissionStore, rover_id: str, command: str) -> dict[str, Any]:
    """Rotate a rover left (L) or right (R)."""
    return _to_mcp_response(RoverService(store).rotate(rover_id, command))


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_rover_impl(store: MissionStore, rover_id: str) -> dict[str, Any]:
    return _to_mcp_response(RoverService(store).get(rover_id))


def list_rovers_impl(store: MissionStore) -> dict[str, Any]:
    return _to_mcp_response(RoverService(store).list_rovers())


def describe_grid_impl(store: MissionStore) -> dict[str, Any]:
    return _to_mcp_response(GridService(store).describe())


def replace_grid_impl(
    store: MissionStore,
    width: int,
    height: int,
    obstacles: list[list[int]] | None = None,
) -> dict[str, Any]:
    """Replace the grid; deployed rovers keep their positions."""
    cells = obstacles or []
    malformed = [cell for cell in cells if len(cell) != 2]
    if malformed:
        return _to_mcp_response(
            ServiceResult.failed(
                "replace_grid",
                INVALID_INPUT,
                f"Obstacles must be [x, y] pairs, got {malformed}",
            )
        )
    return _to_mcp_response(GridService(store).replace(width, height, [(x, y) for x, y in cells]))


def register_tools(server: Any, store: MissionStore) -> None:
    """Register all rover and grid tools on the FastMCP server."""

    @server.tool()  # type: ignore[untyped-decorator]
    def deploy_rover(rover_id: str, x: int, y: int, heading: str) -> dict[str, Any]:
        """Deploy a rover at (x, y) facing NORTH, EAST, SOUTH, or WEST.

        Fails with OUT_OF_BOUNDS outside the grid or OBSTACLE_BLOCKED on an
        obstacle. Deploying an existing id replaces that rover.
        """
        return deploy_rover_impl(store, rover_id, x, y, heading)

    @server.tool()  # type: ignore[untyped-decorator]
    def move_rover(rover_id: str, command: str) -> dict[str, Any]:
        """Move a rover one cell: F (forward) or B (backward).

        A rejected move leaves the rover where it was.
        """
        return move_rover_impl(store, rover_id, command)

    @server.tool()  # type: ignore[untyped-decorator]
    def rotate_rover(rover_id: str, command: str) -> dict[str, Any]:
        """Rotate a rover in place: L (left) or R (right)."""
        return rotate_rover_impl(store, rover_id, command)

    @server.tool()  # type: ignore[untyped-decorator]
    def get_rover(rover_id: str) -> dict[str, Any]:
        """Current position and heading of a rover."""
        return get_rover_impl(store, rover_id)

    @server.tool()  # type: ignore[untyped-decorator]
    def list_rovers() -> dict[str, Any]:
        """All deployed rovers."""
        return list_rovers_impl(store)

    @server.tool()  # type: ignore[untyped-decorator]
    def describe_grid() -> dict[str, Any]:
        """Grid size, obstacles, and rover positions."""
        return describe_grid_impl(store)

    @server.tool()  # type: ignore[untyped-decorator]
    def replace_grid(
        width: int,
        height: int,
        obstacles: list[list[int]] | None = None,
    ) -> dict[str, Any]:
        """Replace the grid with a new size and obstacle list of [x, y] pairs."""
        return replace_grid_impl(store, width, height, obstacles)
