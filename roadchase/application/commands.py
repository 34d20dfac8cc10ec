from abc import ABC, abstractmethod
from typing import Any, Optional
from roadchase.domain.models import UpgradeType

class Command(ABC):
    @abstractmethod
    def execute(self, kernel: Any):
        pass

class SetThrottleCommand(Command):
    def __init__(self, throttle: int):
        self.throttle = throttle

    def execute(self, kernel: Any):
        kernel.set_throttle(self.throttle)

class ChangeLaneCommand(Command):
    def __init__(self, direction: int):
        self.direction = direction

    def execute(self, kernel: Any):
        return kernel.change_lane(self.direction)

class PitStopReachedCommand(Command):
    def execute(self, kernel: Any):
        return kernel.reach_pit_stop()

class ContinueFromPitStopCommand(Command):
    def execute(self, kernel: Any):
        kernel.continue_from_pit_stop()

class PurchaseUpgradeCommand(Command):
    def __init__(self, upgrade: UpgradeType):
        self.upgrade = upgrade
        self.succeeded: Optional[bool] = None

    def execute(self, kernel: Any):
        self.succeeded = kernel.purchase_upgrade(self.upgrade)
        return self.succeeded

class TrafficCollisionCommand(Command):
    """A collision the physics layer already resolved between the player and a traffic car."""

    def __init__(self, entity_id: Optional[str] = None):
        self.entity_id = entity_id

    def execute(self, kernel: Any):
        return kernel.traffic_collision(self.entity_id)

class CollectPickupCommand(Command):
    def __init__(self, pickup_id: str):
        self.pickup_id = pickup_id

    def execute(self, kernel: Any):
        return kernel.collect_pickup(self.pickup_id)
