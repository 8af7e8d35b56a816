"""RoverService — deploy, move, rotate, and inspect rovers.

Pipeline per command: PARSE → LOOKUP → APPLY → SAVE → RESPOND

Raw strings from the hosting layer are parsed here; anything that does
not parse is an INVALID_INPUT error. Domain failures (NOT_FOUND,
OUT_OF_BOUNDS, OBSTACLE_BLOCKED) come back as ``ok=False`` results with
the failure kind as the error code. A failed command never changes the
stored rover.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from roverctl.domain.errors import Failure
from roverctl.domain.position import Coordinates
from roverctl.domain.types import Heading, MovementCommand, RotationCommand, parse_command
from roverctl.services.base import BaseService
from roverctl.services.result import INVALID_INPUT, ServiceError, ServiceResult
from roverctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from roverctl.domain.rover import Rover

logger = logging.getLogger(__name__)


def rover_payload(rover: Rover) -> dict[str, Any]:
    """Flat JSON-friendly view of a rover."""
    return {"rover_id": rover.id, **rover.position.to_dict()}


def _failed(op: str, failure: Failure, rover_id: str) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        data={"rover_id": rover_id},
        error=ServiceError.from_failure(failure),
    )


class RoverService(BaseService):
    """Applies rover commands against the store's current grid."""

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @traced
    def deploy(self, rover_id: str, x: int, y: int, heading: str | Heading) -> ServiceResult:
        """Place a rover at (x, y) facing *heading*.

        An existing rover with the same id is replaced.
        """
        op = "deploy"
        if not rover_id:
            return ServiceResult.failed(op, INVALID_INPUT, "Rover id must not be empty")
        try:
            parsed = heading if isinstance(heading, Heading) else Heading.parse(heading)
        except ValueError as exc:
            return ServiceResult.failed(op, INVALID_INPUT, str(exc), data={"rover_id": rover_id})
        try:
            target = Coordinates(x=x, y=y)
        except ValidationError:
            return ServiceResult.failed(
                op,
                INVALID_INPUT,
                f"Coordinates must be integers, got ({x!r}, {y!r})",
                data={"rover_id": rover_id},
            )

        with self._store.locked(rover_id):
            with trace_span("validate"):
                outcome = self._store.grid.deploy_rover(rover_id, target, parsed)
            if isinstance(outcome, Failure):
                logger.info("Deploy of %s rejected: %s", rover_id, outcome.message)
                return _failed(op, outcome, rover_id)

            warnings: list[str] = []
            if self._store.get(rover_id) is not None:
                warnings.append(f"Rover {rover_id} was already deployed and has been replaced")
            self._store.save(outcome)

        logger.debug("Deployed %r", outcome)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **rover_payload(outcome),
                "message": (
                    f"Rover {rover_id} deployed at ({target.x},{target.y}) facing {outcome.position.heading}"
                ),
            },
            warnings=warnings,
        )

    @traced
    def move(self, rover_id: str, command: str | MovementCommand) -> ServiceResult:
        """Step the rover forward (``F``) or backward (``B``)."""
        op = "move"
        try:
            parsed = command if isinstance(command, MovementCommand) else parse_command(command)
        except ValueError as exc:
            return ServiceResult.failed(op, INVALID_INPUT, str(exc), data={"rover_id": rover_id})
        if not isinstance(parsed, MovementCommand):
            return ServiceResult.failed(
                op,
                INVALID_INPUT,
                f"Not a movement command: {command!r}. Expected F or B",
                data={"rover_id": rover_id},
            )

        with self._store.locked(rover_id):
            rover = self._store.get(rover_id)
            if rover is None:
                return _failed(op, Failure.not_found(rover_id), rover_id)

            with trace_span("validate"):
                failure = rover.move(parsed, self._store.grid)
            if failure is not None:
                logger.info("Move of %s rejected: %s", rover_id, failure.message)
                return _failed(op, failure, rover_id)
            self._store.save(rover)

        return ServiceResult(ok=True, op=op, data={**rover_payload(rover), "command": str(parsed)})

    @traced
    def rotate(self, rover_id: str, command: str | RotationCommand) -> ServiceResult:
        """Turn the rover left (``L``) or right (``R``). Never blocked."""
        op = "rotate"
        try:
            parsed = command if isinstance(command, RotationCommand) else parse_command(command)
        except ValueError as exc:
            return ServiceResult.failed(op, INVALID_INPUT, str(exc), data={"rover_id": rover_id})
        if not isinstance(parsed, RotationCommand):
            return ServiceResult.failed(
                op,
                INVALID_INPUT,
                f"Not a rotation command: {command!r}. Expected L or R",
                data={"rover_id": rover_id},
            )

        with self._store.locked(rover_id):
            rover = self._store.get(rover_id)
            if rover is None:
                return _failed(op, Failure.not_found(rover_id), rover_id)
            rover.rotate(parsed)
            self._store.save(rover)

        return ServiceResult(ok=True, op=op, data={**rover_payload(rover), "command": str(parsed)})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @traced
    def get(self, rover_id: str) -> ServiceResult:
        """Current position of one rover."""
        rover = self._store.get(rover_id)
        if rover is None:
            return _failed("get", Failure.not_found(rover_id), rover_id)
        return ServiceResult(ok=True, op="get", data=rover_payload(rover))

    @traced
    def list_rovers(self) -> ServiceResult:
        """All deployed rovers, ordered by id."""
        items = [rover_payload(r) for r in self._store.all()]
        return ServiceResult(ok=True, op="list_rovers", data={"items": items, "count": len(items)})
