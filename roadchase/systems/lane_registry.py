import logging
from typing import List, Optional
from roadchase.domain.models import TrafficEntity, PursuerVehicle

logger = logging.getLogger(__name__)

class LaneOccupancySet:
    """Traffic cars currently registered in one lane, in registration order."""

    def __init__(self):
        self.entities: List[TrafficEntity] = []

    def __len__(self) -> int:
        return len(self.entities)

    def add(self, entity: TrafficEntity):
        self.entities.append(entity)

    def remove(self, entity: TrafficEntity) -> bool:
        for i, existing in enumerate(self.entities):
            if existing is entity:
                del self.entities[i]
                return True
        return False

    def purge(self) -> int:
        """Drop entries whose entity is no longer active."""
        before = len(self.entities)
        self.entities = [e for e in self.entities if e.active]
        return before - len(self.entities)

    def frontmost(self) -> Optional[TrafficEntity]:
        if not self.entities:
            return None
        return max(self.entities, key=lambda e: e.position)

class LaneOccupancyRegistry:
    def __init__(self, lane_count: int):
        self.lanes: List[LaneOccupancySet] = [LaneOccupancySet() for _ in range(lane_count)]
        self._pursuer: Optional[PursuerVehicle] = None

    @property
    def lane_count(self) -> int:
        return len(self.lanes)

    def _valid(self, lane: int) -> bool:
        return 0 <= lane < len(self.lanes)

    def register(self, entity: TrafficEntity, lane: int) -> bool:
        if not self._valid(lane):
            logger.debug("Ignoring registration of %s in unknown lane %s", entity.id, lane)
            return False
        self.lanes[lane].add(entity)
        return True

    def unregister(self, entity: TrafficEntity, lane: int) -> bool:
        # Idempotent: retirement and collision cleanup may both unregister the same car
        if not self._valid(lane):
            return False
        return self.lanes[lane].remove(entity)

    def frontmost(self, lane: int) -> Optional[TrafficEntity]:
        if not self._valid(lane):
            return None
        purged = self.lanes[lane].purge()
        if purged:
            logger.debug("Purged %d stale entries from lane %d", purged, lane)
        return self.lanes[lane].frontmost()

    def count(self, lane: int) -> int:
        if not self._valid(lane):
            return 0
        return len(self.lanes[lane])

    # Reserved chase slot, kept apart from the lane sets

    @property
    def pursuer(self) -> Optional[PursuerVehicle]:
        return self._pursuer

    def attach_pursuer(self, vehicle: PursuerVehicle):
        self._pursuer = vehicle

    def release_pursuer(self) -> Optional[PursuerVehicle]:
        vehicle = self._pursuer
        self._pursuer = None
        return vehicle
