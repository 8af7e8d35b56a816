"""Failure taxonomy for rover commands.

Failures are returned as values, never raised. Every failure is terminal
for the command that produced it: no retry, no partial application.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from roverctl.domain.position import Coordinates


class FailureKind(StrEnum):
    """The three ways a rover command can be rejected."""

    NOT_FOUND = "NOT_FOUND"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    OBSTACLE_BLOCKED = "OBSTACLE_BLOCKED"


class Failure(BaseModel):
    """A rejected command: what went wrong and where."""

    model_config = {"frozen": True}

    kind: FailureKind
    message: str
    coordinates: Coordinates | None = None

    @classmethod
    def not_found(cls, rover_id: str) -> Failure:
        return cls(kind=FailureKind.NOT_FOUND, message=f"Rover with id {rover_id} not found")

    @classmethod
    def out_of_bounds(cls, coordinates: Coordinates, width: int, height: int) -> Failure:
        return cls(
            kind=FailureKind.OUT_OF_BOUNDS,
            message=f"Coordinates {coordinates} are out of grid bounds ({width}x{height})",
            coordinates=coordinates,
        )

    @classmethod
    def obstacle_blocked(cls, coordinates: Coordinates) -> Failure:
        return cls(
            kind=FailureKind.OBSTACLE_BLOCKED,
            message=f"Cannot occupy {coordinates}: obstacle detected",
            coordinates=coordinates,
        )
