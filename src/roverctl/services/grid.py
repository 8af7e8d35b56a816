"""GridService — describe and replace the current grid."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import ValidationError

from roverctl.domain.grid import Grid
from roverctl.services.base import BaseService
from roverctl.services.result import INVALID_INPUT, ServiceResult
from roverctl.services.rover import rover_payload
from roverctl.services.telemetry import traced

logger = logging.getLogger(__name__)


class GridService(BaseService):
    """Read access to the grid plus wholesale replacement."""

    @traced
    def describe(self) -> ServiceResult:
        """Dimensions, obstacles, and every rover's position."""
        grid = self._store.grid
        return ServiceResult(
            ok=True,
            op="describe_grid",
            data={
                "width": grid.width,
                "height": grid.height,
                "obstacles": [[c.x, c.y] for c in grid.sorted_obstacles()],
                "rovers": [rover_payload(r) for r in self._store.all()],
            },
        )

    @traced
    def replace(
        self,
        width: int,
        height: int,
        obstacles: Iterable[tuple[int, int]] = (),
    ) -> ServiceResult:
        """Swap in a new grid. Deployed rovers are kept where they are."""
        op = "replace_grid"
        try:
            grid = Grid.create(width, height, obstacles)
        except ValidationError as exc:
            message = str(exc)
            if _is_dimension_error(exc):
                message = f"Invalid grid {width}x{height}: width and height must be positive"
            return ServiceResult.failed(op, INVALID_INPUT, message)

        warnings: list[str] = []
        for rover in self._store.all():
            if not grid.is_free(rover.position.coordinates):
                warnings.append(
                    f"Rover {rover.id} at {rover.position.coordinates} is not on a free cell "
                    "of the new grid"
                )
        self._store.replace_grid(grid)
        logger.info("Grid replaced: %dx%d, %d obstacle(s)", width, height, len(grid.obstacles))

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "width": grid.width,
                "height": grid.height,
                "obstacles": [[c.x, c.y] for c in grid.sorted_obstacles()],
            },
            warnings=warnings,
        )


def _is_dimension_error(exc: ValidationError) -> bool:
    return any(err.get("loc", ())[-1:] in (("width",), ("height",)) for err in exc.errors())
