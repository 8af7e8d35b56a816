"""BaseService — foundation for all roverctl services.

Every service receives a :class:`MissionStore` at construction time. The
store holds the current grid and the deployed rovers; services own the
per-rover locking via ``self._store.locked(rover_id)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roverctl.infrastructure.store import MissionStore


class BaseService:
    """Base for service-layer classes.

    Usage::

        class RoverService(BaseService):
            def move(self, rover_id: str, command: str) -> ServiceResult:
                with self._store.locked(rover_id):
                    ...
    """

    def __init__(self, store: MissionStore) -> None:
        self._store = store
