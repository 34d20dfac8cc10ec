from typing import Callable, List
from pydantic import BaseModel
from roadchase.domain.settings import SafetySettings
from roadchase.systems.lane_registry import LaneOccupancyRegistry

class SpawnClearance(BaseModel):
    lane: int
    can_spawn: bool
    max_safe_speed: float

class SpeedSafetyCalculator:
    """
    Decides whether a car may spawn behind the frontmost car of a lane.

    A faster newcomer needs a bigger cushion, proportional to its closing
    speed, and is then capped below the speed of the car ahead by the speed
    buffer so it never closes the gap. The check happens only at spawn time;
    gaps between cars already on the road are not re-validated.
    """

    def __init__(self, registry: LaneOccupancyRegistry, settings: SafetySettings):
        self.registry = registry
        self.settings = settings

    def evaluate(self, lane: int, spawn_position: float, desired_speed: float) -> SpawnClearance:
        if lane < 0 or lane >= self.registry.lane_count:
            return SpawnClearance(lane=lane, can_spawn=False, max_safe_speed=desired_speed)

        front = self.registry.frontmost(lane)
        if front is None:
            return SpawnClearance(lane=lane, can_spawn=True, max_safe_speed=desired_speed)

        speed_delta = max(0.0, desired_speed - front.speed)
        required_gap = self.settings.minimum_gap + speed_delta * self.settings.gap_per_speed_unit
        actual_gap = front.position - spawn_position
        if actual_gap < required_gap:
            return SpawnClearance(lane=lane, can_spawn=False, max_safe_speed=desired_speed)

        max_safe_speed = min(desired_speed, front.speed - self.settings.speed_buffer)
        return SpawnClearance(lane=lane, can_spawn=max_safe_speed > 0, max_safe_speed=max_safe_speed)

    def opportunities(self, spawn_position: float, roll_speed: Callable[[], float]) -> List[SpawnClearance]:
        """Evaluate every lane, each with a freshly rolled desired speed, and keep the clear ones."""
        clear = []
        for lane in range(self.registry.lane_count):
            result = self.evaluate(lane, spawn_position, roll_speed())
            if result.can_spawn:
                clear.append(result)
        return clear
