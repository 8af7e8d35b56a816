"""Rover entity — the command interpreter.

A rover is the only mutable object in the domain. Its position is
replaced wholesale on every committed command and never edited in place.
Commands that the grid rejects leave the position exactly as it was.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from roverctl.domain.types import MovementCommand, RotationCommand

if TYPE_CHECKING:
    from roverctl.domain.errors import Failure
    from roverctl.domain.grid import Grid
    from roverctl.domain.position import Position


class Rover:
    """A rover identified by *rover_id* holding its current Position."""

    __slots__ = ("_id", "_position")

    def __init__(self, rover_id: str, position: Position) -> None:
        self._id = rover_id
        self._position = position

    @classmethod
    def deploy(cls, rover_id: str, initial_position: Position) -> Rover:
        """Create a rover. Placement must already be validated by the grid."""
        return cls(rover_id, initial_position)

    @property
    def id(self) -> str:
        return self._id

    @property
    def position(self) -> Position:
        return self._position

    def move(self, command: MovementCommand, grid: Grid) -> Failure | None:
        """Step one cell forward or backward along the current heading.

        Returns the grid's failure (position untouched) or None on success.
        """
        dx, dy = self._position.heading.movement_delta(command.forward)
        target = self._position.coordinates.translated(dx, dy)
        failure = grid.validate_movement(target)
        if failure is not None:
            return failure
        self._position = self._position.with_coordinates(target)
        return None

    def rotate(self, command: RotationCommand) -> None:
        """Quarter turn in place. Never blocked."""
        heading = self._position.heading
        if command is RotationCommand.LEFT:
            heading = heading.rotate_left()
        else:
            heading = heading.rotate_right()
        self._position = self._position.with_heading(heading)

    def apply(self, command: MovementCommand | RotationCommand, grid: Grid) -> Failure | None:
        """Dispatch a movement or rotation command."""
        if isinstance(command, MovementCommand):
            return self.move(command, grid)
        self.rotate(command)
        return None

    def __repr__(self) -> str:
        return f"Rover(id={self._id!r}, position={self._position!s})"
