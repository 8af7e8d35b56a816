"""MissionStore — in-memory repository for the current grid and rovers.

The store is the single dependency injected into every service. It owns
one current Grid and a mapping from rover id to Rover. State lives only
as long as the process.

Per-rover serialization: :meth:`locked` hands out a lock per rover id so
two commands against the same rover never interleave. Commands against
different rovers do not contend. A lock lives only while some caller
holds or waits on it, so lookups of unknown ids leave nothing behind.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from roverctl.domain.grid import Grid

if TYPE_CHECKING:
    from collections.abc import Iterator

    from roverctl.config.settings import RoverSettings
    from roverctl.domain.rover import Rover

logger = logging.getLogger(__name__)


class _RoverLock:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class MissionStore:
    """Grid + rovers, with single-writer-per-rover discipline."""

    def __init__(self, grid: Grid | None = None) -> None:
        self._grid = grid if grid is not None else Grid.create()
        self._rovers: dict[str, Rover] = {}
        self._locks: dict[str, _RoverLock] = {}
        self._guard = threading.RLock()

    @classmethod
    def from_settings(cls, settings: RoverSettings) -> MissionStore:
        """Build a store whose grid comes from the ``[grid]`` config section."""
        cfg = settings.grid
        grid = Grid.create(cfg.width, cfg.height, [tuple(cell) for cell in cfg.obstacles])
        logger.debug(
            "Grid configured: %dx%d with %d obstacle(s)",
            grid.width,
            grid.height,
            len(grid.obstacles),
        )
        return cls(grid)

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------

    @property
    def grid(self) -> Grid:
        with self._guard:
            return self._grid

    def replace_grid(self, grid: Grid) -> None:
        """Swap in a new grid. Rovers already deployed keep their positions."""
        with self._guard:
            self._grid = grid

    # ------------------------------------------------------------------
    # Rovers
    # ------------------------------------------------------------------

    def get(self, rover_id: str) -> Rover | None:
        with self._guard:
            return self._rovers.get(rover_id)

    def save(self, rover: Rover) -> None:
        """Store *rover*, replacing any rover with the same id."""
        with self._guard:
            self._rovers[rover.id] = rover

    def all(self) -> list[Rover]:
        """All rovers, ordered by id."""
        with self._guard:
            return [self._rovers[k] for k in sorted(self._rovers)]

    def __len__(self) -> int:
        with self._guard:
            return len(self._rovers)

    @contextmanager
    def locked(self, rover_id: str) -> Iterator[None]:
        """Hold the lock for *rover_id* for the duration of the block."""
        with self._guard:
            entry = self._locks.get(rover_id)
            if entry is None:
                entry = self._locks[rover_id] = _RoverLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[rover_id]
