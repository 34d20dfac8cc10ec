import logging
import random
from typing import List, Optional
from roadchase.domain.difficulty import DifficultyCurve
from roadchase.domain.graph import RoadLayout
from roadchase.domain.models import (
    TrafficEntity, Pickup, PitStop, SpawnCommand, SpawnKind, LifecycleState
)
from roadchase.domain.settings import TrafficSettings, PickupSettings, PickupCategorySettings
from roadchase.domain.state import SimulationState
from roadchase.systems.lane_registry import LaneOccupancyRegistry
from roadchase.systems.speed_safety import SpeedSafetyCalculator

logger = logging.getLogger(__name__)

class SpawnTimer:
    """Countdown for one spawn category."""

    def __init__(self, name: str, remaining: float):
        self.name = name
        self.remaining = remaining

    def tick(self, dt: float) -> bool:
        self.remaining -= dt
        return self.expired

    @property
    def expired(self) -> bool:
        return self.remaining <= 0

    def reset(self, interval: float):
        self.remaining = max(0.0, interval)

class TrafficSpawnCoordinator:
    """
    Turns the difficulty curve into spawn decisions.

    Traffic, fuel, coins and power-ups each run their own timer. Traffic
    batches go through the speed safety calculator so a new car can never
    be placed inside the following gap of the car ahead in its lane; the
    other categories drop into a random lane.
    """

    def __init__(self, registry: LaneOccupancyRegistry, safety: SpeedSafetyCalculator,
                 curve: DifficultyCurve, layout: RoadLayout,
                 traffic: TrafficSettings, pickups: PickupSettings, rng: random.Random):
        self.registry = registry
        self.safety = safety
        self.curve = curve
        self.layout = layout
        self.traffic = traffic
        self.pickups = pickups
        self.rng = rng

        self.traffic_enabled = bool(traffic.variants)
        if not self.traffic_enabled:
            logger.error("No traffic variants configured; traffic spawning disabled")

        self.traffic_timer = SpawnTimer("traffic", traffic.base_interval)
        self.fuel_timer = SpawnTimer("fuel", rng.uniform(0, pickups.fuel.base_interval))
        self.coin_timer = SpawnTimer("coin", rng.uniform(0, pickups.coin.base_interval))
        self.powerup_timer = SpawnTimer("powerup", rng.uniform(0, pickups.powerup.base_interval))

        self.powerup_counter = 0
        self._next_id = 0

    def _new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}-{self._next_id}"

    def update(self, state: SimulationState, dt: float, chasing: bool = False,
               fuel_fraction: float = 1.0) -> List[SpawnCommand]:
        """Run every spawn timer once; returns the spawn commands issued this tick."""
        commands: List[SpawnCommand] = []
        position = state.player.position

        self._age_pickups(state.pickups, dt)

        if self.traffic_timer.tick(dt):
            if self.traffic_enabled:
                commands.extend(self.spawn_traffic_batch(state, state.pit_stop))
            self.traffic_timer.reset(self.traffic_interval(position, chasing))

        if self.fuel_timer.tick(dt):
            commands.append(self._spawn_pickup(state, SpawnKind.FUEL, self.pickups.fuel))
            self.fuel_timer.reset(self.fuel_interval(position, fuel_fraction))

        if self.coin_timer.tick(dt) and self.active_coins(state.pickups) < self.pickups.max_active_coins:
            commands.append(self._spawn_pickup(state, SpawnKind.COIN, self.pickups.coin))
            self.coin_timer.reset(self._jittered(position, self.pickups.coin))

        if self.powerup_timer.tick(dt):
            self.powerup_counter += 1
            every = self.pickups.shield_every
            kind = SpawnKind.SHIELD if every > 0 and self.powerup_counter % every == 0 else SpawnKind.SPEED_BOOST
            commands.append(self._spawn_pickup(state, kind, self.pickups.powerup))
            self.powerup_timer.reset(self._jittered(position, self.pickups.powerup))

        return commands

    # Intervals

    def traffic_interval(self, position: float, chasing: bool) -> float:
        interval = self.curve.scaled(position, self.traffic.base_interval, self.traffic.difficulty)
        interval += self.rng.uniform(-self.traffic.jitter, self.traffic.jitter)
        if chasing:
            interval *= 1.0 + self.traffic.chase_penalty
        return interval

    def fuel_interval(self, position: float, fuel_fraction: float) -> float:
        interval = self._jittered(position, self.pickups.fuel)
        if fuel_fraction <= self.pickups.low_fuel_threshold:
            interval *= self.pickups.low_fuel_multiplier
        return interval

    def _jittered(self, position: float, category: PickupCategorySettings) -> float:
        interval = self.curve.scaled(position, category.base_interval, category.difficulty)
        if category.jitter:
            interval += self.rng.uniform(-category.jitter, category.jitter)
        return interval

    # Traffic

    def spawn_traffic_batch(self, state: SimulationState, pit_stop: Optional[PitStop] = None) -> List[SpawnCommand]:
        spawn_position = state.player.position + self.traffic.lead_distance
        roll = lambda: self.rng.uniform(self.traffic.min_speed, self.traffic.max_speed)
        candidates = self.safety.opportunities(spawn_position, roll)

        if pit_stop is not None and pit_stop.active:
            if abs(spawn_position - pit_stop.position) < self.traffic.pit_stop_safe_zone:
                candidates = [c for c in candidates if c.lane != pit_stop.lane]

        if not candidates:
            logger.debug("No safe lanes available for spawning at %.1f", spawn_position)
            return []

        wanted = self.rng.randint(1, max(1, self.traffic.max_per_spawn))
        chosen = self.rng.sample(candidates, min(wanted, len(candidates)))

        commands = []
        for clearance in chosen:
            # Never above the cap, even when the cap sits below the speed floor
            floor = min(self.traffic.min_speed, clearance.max_safe_speed)
            speed = self.rng.uniform(floor, clearance.max_safe_speed)
            entity = TrafficEntity(
                id=self._new_id("t"),
                lane=clearance.lane,
                variant=self.rng.choice(self.traffic.variants),
                position=spawn_position,
                speed=speed,
            )
            self.registry.register(entity, entity.lane)
            state.traffic.append(entity)
            commands.append(SpawnCommand(
                kind=SpawnKind.TRAFFIC,
                entity_id=entity.id,
                lane=entity.lane,
                x=self.layout.lane_x(entity.lane),
                position=entity.position,
                speed=entity.speed,
                variant=entity.variant,
            ))
            logger.debug("Spawned %s in lane %d at speed %.1f (max allowed %.1f)",
                         entity.variant, entity.lane, speed, clearance.max_safe_speed)

        if len(commands) > 1:
            logger.info("Spawned %d cars in traffic burst at %.0f", len(commands), spawn_position)
        return commands

    # Pickups

    def _spawn_pickup(self, state: SimulationState, kind: SpawnKind, category: PickupCategorySettings) -> SpawnCommand:
        lane = self.rng.randrange(self.layout.lane_count)
        pickup = Pickup(
            id=self._new_id(kind.value.lower()),
            kind=kind,
            lane=lane,
            position=state.player.position + category.lead_distance,
            lifetime=category.lifetime,
        )
        state.pickups.append(pickup)
        return SpawnCommand(kind=kind, entity_id=pickup.id, lane=lane,
                            x=self.layout.lane_x(lane), position=pickup.position)

    def _age_pickups(self, pickups: List[Pickup], dt: float):
        for pickup in pickups:
            pickup.lifetime -= dt
            if pickup.lifetime <= 0:
                pickup.state = LifecycleState.RETIRED
        pickups[:] = [p for p in pickups if p.state == LifecycleState.ACTIVE]

    def active_coins(self, pickups: List[Pickup]) -> int:
        return sum(1 for p in pickups if p.kind == SpawnKind.COIN and p.state == LifecycleState.ACTIVE)

    def take_pickup(self, pickups: List[Pickup], pickup_id: str) -> Optional[Pickup]:
        """Remove a collected pickup; returns None if it already expired or was taken."""
        for i, pickup in enumerate(pickups):
            if pickup.id == pickup_id and pickup.state == LifecycleState.ACTIVE:
                pickup.state = LifecycleState.RETIRED
                del pickups[i]
                return pickup
        return None
