"""Heading and command enums.

Headings are the four cardinal directions a rover can face. Commands are
the relative instructions a rover interprets: movement (forward/backward)
and rotation (left/right).
"""

from __future__ import annotations

from enum import StrEnum


class Heading(StrEnum):
    """Cardinal direction a rover faces."""

    NORTH = "NORTH"
    EAST = "EAST"
    SOUTH = "SOUTH"
    WEST = "WEST"

    def rotate_left(self) -> Heading:
        """Counter-clockwise quarter turn: NORTH -> WEST -> SOUTH -> EAST."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) - 1) % len(_CLOCKWISE)]

    def rotate_right(self) -> Heading:
        """Clockwise quarter turn: NORTH -> EAST -> SOUTH -> WEST."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 1) % len(_CLOCKWISE)]

    def movement_delta(self, forward: bool = True) -> tuple[int, int]:
        """Unit vector ``(dx, dy)`` for one step, negated when moving backward."""
        dx, dy = _DELTAS[self]
        if forward:
            return dx, dy
        return -dx, -dy

    @classmethod
    def parse(cls, value: str) -> Heading:
        """Parse a heading name or its initial letter, case-insensitively.

        Raises ValueError for anything else.
        """
        key = value.strip().upper()
        for heading in cls:
            if key in (heading.value, heading.value[0]):
                return heading
        msg = f"Unknown heading: {value!r}. Expected one of NORTH, EAST, SOUTH, WEST"
        raise ValueError(msg)


_CLOCKWISE: tuple[Heading, ...] = (Heading.NORTH, Heading.EAST, Heading.SOUTH, Heading.WEST)

_DELTAS: dict[Heading, tuple[int, int]] = {
    Heading.NORTH: (0, 1),
    Heading.EAST: (1, 0),
    Heading.SOUTH: (0, -1),
    Heading.WEST: (-1, 0),
}


class MovementCommand(StrEnum):
    """Translate one cell along (or against) the current heading."""

    FORWARD = "F"
    BACKWARD = "B"

    @property
    def forward(self) -> bool:
        return self is MovementCommand.FORWARD


class RotationCommand(StrEnum):
    """Quarter turn in place."""

    LEFT = "L"
    RIGHT = "R"


_COMMAND_ALIASES: dict[str, MovementCommand | RotationCommand] = {
    "F": MovementCommand.FORWARD,
    "FORWARD": MovementCommand.FORWARD,
    "B": MovementCommand.BACKWARD,
    "BACKWARD": MovementCommand.BACKWARD,
    "L": RotationCommand.LEFT,
    "LEFT": RotationCommand.LEFT,
    "R": RotationCommand.RIGHT,
    "RIGHT": RotationCommand.RIGHT,
}


def parse_command(value: str) -> MovementCommand | RotationCommand:
    """Parse a command letter (``F``, ``B``, ``L``, ``R``) or its full word.

    Raises ValueError for anything else.
    """
    command = _COMMAND_ALIASES.get(value.strip().upper())
    if command is None:
        msg = f"Unknown command: {value!r}. Expected one of F, B, L, R"
        raise ValueError(msg)
    return command
