"""Grid dimensions, obstacles, and placement validation.

The Grid is the sole authority on whether a cell may be occupied.
Validation order is fixed: bounds first, then obstacles. When a cell is
both outside the grid and listed as an obstacle, OUT_OF_BOUNDS wins.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from roverctl.domain.errors import Failure
from roverctl.domain.position import Coordinates, Position
from roverctl.domain.rover import Rover
from roverctl.domain.types import Heading

DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 10


class GridDimensions(BaseModel):
    """Width and height of the grid, both strictly positive."""

    model_config = {"frozen": True}

    width: int = Field(gt=0)
    height: int = Field(gt=0)

    def contains(self, coordinates: Coordinates) -> bool:
        return 0 <= coordinates.x < self.width and 0 <= coordinates.y < self.height


class Obstacle(BaseModel):
    """A single blocked cell."""

    model_config = {"frozen": True}

    at: Coordinates

    @classmethod
    def of(cls, x: int, y: int) -> Obstacle:
        return cls(at=Coordinates(x=x, y=y))

    def blocks(self, coordinates: Coordinates) -> bool:
        return self.at == coordinates


class Grid(BaseModel):
    """Bounded plane with a fixed set of obstacles. Owns no rovers."""

    model_config = {"frozen": True}

    dimensions: GridDimensions
    obstacles: frozenset[Obstacle] = frozenset()

    @classmethod
    def create(
        cls,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        obstacles: Iterable[tuple[int, int]] = (),
    ) -> Grid:
        """Build a grid from plain numbers.

        Raises pydantic.ValidationError when either dimension is not positive.
        """
        return cls(
            dimensions=GridDimensions(width=width, height=height),
            obstacles=frozenset(Obstacle.of(x, y) for x, y in obstacles),
        )

    @property
    def width(self) -> int:
        return self.dimensions.width

    @property
    def height(self) -> int:
        return self.dimensions.height

    def is_blocked(self, coordinates: Coordinates) -> bool:
        return any(obstacle.blocks(coordinates) for obstacle in self.obstacles)

    def is_free(self, coordinates: Coordinates) -> bool:
        return self.validate_movement(coordinates) is None

    def validate_movement(self, coordinates: Coordinates) -> Failure | None:
        """Check that *coordinates* may be occupied. Returns None when legal."""
        if not self.dimensions.contains(coordinates):
            return Failure.out_of_bounds(coordinates, self.width, self.height)
        if self.is_blocked(coordinates):
            return Failure.obstacle_blocked(coordinates)
        return None

    def deploy_rover(
        self, rover_id: str, coordinates: Coordinates, heading: Heading
    ) -> Rover | Failure:
        """Place a new rover, or return why the cell is not deployable."""
        failure = self.validate_movement(coordinates)
        if failure is not None:
            return failure
        return Rover.deploy(rover_id, Position(coordinates=coordinates, heading=heading))

    def sorted_obstacles(self) -> list[Coordinates]:
        """Obstacle cells ordered by (y, x) for stable output."""
        return sorted((o.at for o in self.obstacles), key=lambda c: (c.y, c.x))
