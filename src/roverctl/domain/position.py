"""Coordinates and Position value objects.

Both are frozen pydantic models: equality is by value and every
"change" produces a new instance.

INVARIANT: A Position always holds the last validated placement of a
rover. Callers only build one from coordinates the grid has accepted.
"""

from __future__ import annotations

from pydantic import BaseModel

from roverctl.domain.types import Heading


class Coordinates(BaseModel):
    """An integer cell address on the grid."""

    model_config = {"frozen": True}

    x: int
    y: int

    def translated(self, dx: int, dy: int) -> Coordinates:
        return Coordinates(x=self.x + dx, y=self.y + dy)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Position(BaseModel):
    """Where a rover is and which way it faces."""

    model_config = {"frozen": True}

    coordinates: Coordinates
    heading: Heading

    @classmethod
    def at(cls, x: int, y: int, heading: Heading) -> Position:
        return cls(coordinates=Coordinates(x=x, y=y), heading=heading)

    def with_coordinates(self, coordinates: Coordinates) -> Position:
        """Same heading, new cell."""
        return Position(coordinates=coordinates, heading=self.heading)

    def with_heading(self, heading: Heading) -> Position:
        """Same cell, new heading."""
        return Position(coordinates=self.coordinates, heading=heading)

    def to_dict(self) -> dict[str, int | str]:
        return {"x": self.coordinates.x, "y": self.coordinates.y, "heading": str(self.heading)}

    def __str__(self) -> str:
        return f"{self.coordinates} facing {self.heading}"
