import logging
from typing import List, Optional
from roadchase.domain.models import TrafficEntity
from roadchase.domain.settings import TrafficSettings
from roadchase.events.bus import EventBus
from roadchase.events.types import TrafficRetired
from roadchase.systems.lane_registry import LaneOccupancyRegistry

logger = logging.getLogger(__name__)

class TrafficSystem:
    """Moves traffic forward and retires cars that fall behind the player."""

    def __init__(self, registry: LaneOccupancyRegistry, settings: TrafficSettings, bus: Optional[EventBus] = None):
        self.registry = registry
        self.settings = settings
        self.bus = bus

    def update(self, traffic: List[TrafficEntity], player_position: float, dt: float,
               tick: int = 0, time: float = 0.0) -> List[TrafficEntity]:
        """Advance every active car, retire stragglers and drop them from the list in place."""
        retired = []
        cutoff = player_position - self.settings.destroy_behind
        for entity in traffic:
            if not entity.active:
                retired.append(entity)
                continue
            entity.position += entity.speed * dt
            if entity.position < cutoff:
                self.retire(entity, tick, time)
                retired.append(entity)

        if retired:
            traffic[:] = [e for e in traffic if e.active]
        return retired

    def retire(self, entity: TrafficEntity, tick: int = 0, time: float = 0.0) -> bool:
        """Retire and unregister in one step so no later query sees the car as frontmost."""
        first_time = entity.retire()
        self.registry.unregister(entity, entity.lane)
        if first_time and self.bus is not None:
            self.bus.emit(TrafficRetired(tick=tick, time=time, entity_id=entity.id, lane=entity.lane))
        return first_time
