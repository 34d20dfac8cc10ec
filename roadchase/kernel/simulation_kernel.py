import logging
import random
from typing import List, Optional
from roadchase.application.commands import Command
from roadchase.application.upgrades import UpgradeLedger
from roadchase.domain import config
from roadchase.domain.difficulty import DifficultyCurve
from roadchase.domain.graph import RoadLayout
from roadchase.domain.models import (
    Pickup, RunOutcome, RunState, SpawnCommand, SpawnKind, UpgradeType, ChaseEndReason
)
from roadchase.domain.settings import SimulationSettings
from roadchase.domain.state import SimulationState
from roadchase.events.bus import EventBus
from roadchase.events.types import RunEnded
from roadchase.kernel.command_queue import CommandQueue
from roadchase.systems.fuel_system import FuelSystem
from roadchase.systems.lane_registry import LaneOccupancyRegistry
from roadchase.systems.pit_stop import PitStopSystem
from roadchase.systems.player_system import PlayerSystem
from roadchase.systems.powerup_system import PowerUpSystem
from roadchase.systems.pursuit import PursuitStateMachine
from roadchase.systems.spawn_coordinator import TrafficSpawnCoordinator
from roadchase.systems.speed_safety import SpeedSafetyCalculator
from roadchase.systems.traffic_system import TrafficSystem

logger = logging.getLogger(__name__)

class SimulationKernel:
    """
    Central scheduler. Every collaborator is built once in initialize() and
    handed its dependencies; run_tick() advances each of them exactly once:

    1. queued commands
    2. power-up timers, player car (distance), coins, fuel
    3. traffic advancement and retirement
    4. pit-stop waypoint
    5. spawn timers (registry-dependent decisions)
    6. heat / chase
    """

    def __init__(self, settings: Optional[SimulationSettings] = None, bus: Optional[EventBus] = None):
        self.settings = settings or SimulationSettings()
        self.bus = bus or EventBus()
        self.dt = self.settings.dt
        self.command_queue = CommandQueue()
        self.state = SimulationState()
        self.initialized = False
        self.last_spawns: List[SpawnCommand] = []

    def initialize(self, seed: int = config.DEFAULT_SEED):
        s = self.settings
        self.seed = seed
        self.rng = random.Random(seed)
        self.state = SimulationState()
        self.command_queue.clear()
        self.last_spawns = []

        self.layout = RoadLayout(s.lanes.x_positions)
        self.registry = LaneOccupancyRegistry(self.layout.lane_count)
        self.safety = SpeedSafetyCalculator(self.registry, s.safety)
        self.curve = DifficultyCurve(start_position=0.0)
        self.ledger = UpgradeLedger()
        self.fuel = FuelSystem(s.player, self.ledger.max_fuel)
        self.powerups = PowerUpSystem()
        self.player_system = PlayerSystem(s.player, self.layout)
        self.traffic_system = TrafficSystem(self.registry, s.traffic, self.bus)
        self.coordinator = TrafficSpawnCoordinator(
            self.registry, self.safety, self.curve, self.layout, s.traffic, s.pickups, self.rng
        )
        self.pursuit = PursuitStateMachine(
            s.pursuit, self.registry, self.layout, self.rng, self.bus,
            same_lane_threshold=s.lanes.same_lane_threshold,
        )
        self.pit_stops = PitStopSystem(s.pit_stops, self.layout, self.rng)

        self.player_system.place(self.state.player, 0.0)
        self.state.player.max_speed = self.ledger.max_speed
        self.state.start_position = self.state.player.position
        self.state.coin_accrual_position = self.state.player.position
        self.curve.start_position = self.state.start_position
        self.pursuit.game_start_time = self.state.time
        self.state.pit_stop = self.pit_stops.place_next(self.state.player.position)

        self.initialized = True
        logger.info("Kernel initialized (seed %s, %d lanes)", seed, self.layout.lane_count)

    def queue_command(self, command: Command):
        self.command_queue.add(command)

    def run_tick(self) -> List[SpawnCommand]:
        if not self.initialized:
            self.initialize()

        # 1. Consume commands
        commands = self.command_queue.pop_all()
        while commands:
            cmd = commands.popleft()
            cmd.execute(self)

        self.last_spawns = []
        if not self.state.running or self.state.shop_open:
            return self.last_spawns

        dt = self.dt
        state = self.state
        player = state.player
        # Systems see the clock as it stands at the end of this tick
        now = state.time + dt

        # 2. Player advances (distance tracker)
        self.powerups.update(dt)
        self.player_system.update(
            player, dt,
            max_speed=self.ledger.max_speed,
            lane_change_speed=self.ledger.lane_change_speed,
            handling_retain=self.ledger.handling_retain,
            boost_multiplier=self.powerups.boost_multiplier,
        )
        self._accrue_coins()
        if self.fuel.burn(player.speed, dt):
            self.end_run(RunOutcome.OUT_OF_FUEL)
            return self.last_spawns

        # 3. Traffic self-advancement and retirement before any registry query
        self.traffic_system.update(state.traffic, player.position, dt, state.tick_id, now)

        # 4. Scripted waypoint
        state.pit_stop = self.pit_stops.update(state.pit_stop, player.position)

        # 5. Spawning
        self.last_spawns = self.coordinator.update(
            state, dt, chasing=self.pursuit.chasing, fuel_fraction=self.fuel.fraction
        )

        # 6. Pursuit
        reason = self.pursuit.update(
            player, self.ledger.max_speed, now, dt,
            upgrade_count=self.ledger.total_upgrade_level, tick=state.tick_id,
        )
        state.pursuer = self.pursuit.pursuer

        # 7. Advance time
        state.time = now
        state.tick_id += 1

        if reason == ChaseEndReason.CAPTURED:
            self.end_run(RunOutcome.CAPTURED)
        elif state.distance >= self.settings.journey_distance:
            self.end_run(RunOutcome.VICTORY)

        return self.last_spawns

    def _accrue_coins(self):
        # Only new ground pays; reversing and driving back over it does not
        position = self.state.player.position
        if position > self.state.coin_accrual_position:
            gained = position - self.state.coin_accrual_position
            self.ledger.add_coins(gained * self.settings.coins_per_distance)
            self.state.coin_accrual_position = position

    def end_run(self, outcome: RunOutcome):
        if not self.state.running:
            return
        self.state.outcome = outcome
        logger.info("Run ended: %s after %.0f distance", outcome.value, self.state.distance)
        self.bus.emit(RunEnded(tick=self.state.tick_id, time=self.state.time, outcome=outcome))

    @property
    def world_active(self) -> bool:
        """False once the run is over or while the pit-stop shop has the world frozen."""
        return self.state.running and not self.state.shop_open

    # Command handlers

    def set_throttle(self, throttle: int):
        self.player_system.set_throttle(self.state.player, throttle)

    def change_lane(self, direction: int) -> bool:
        if not self.world_active:
            return False
        started = self.player_system.request_lane_change(self.state.player, direction)
        if started:
            self.fuel.charge_lane_change()
        return started

    def reach_pit_stop(self) -> bool:
        if not self.state.running or not self.pit_stops.reach(self.state.pit_stop):
            return False
        self.pursuit.pit_stop_reached(self.state.tick_id, self.state.time)
        self.state.pursuer = None
        self.state.shop_open = True
        logger.info("Pit stop reached; heat reset, shop open")
        return True

    def continue_from_pit_stop(self):
        if not self.state.shop_open:
            return
        self.state.shop_open = False
        self.state.pit_stop = self.pit_stops.place_next(self.state.player.position)

    def purchase_upgrade(self, upgrade: UpgradeType) -> bool:
        if not self.ledger.purchase(upgrade):
            return False
        if upgrade == UpgradeType.FUEL_TANK:
            self.fuel.resize(self.ledger.max_fuel)
        self.state.player.max_speed = self.ledger.max_speed * self.powerups.boost_multiplier
        return True

    def traffic_collision(self, entity_id: Optional[str] = None) -> bool:
        """Returns True if the hit was absorbed by a shield."""
        if not self.world_active:
            return False
        if self.powerups.absorb_collision():
            logger.info("Shield absorbed collision with %s", entity_id)
            return True
        self.end_run(RunOutcome.CRASHED)
        return False

    def collect_pickup(self, pickup_id: str) -> Optional[Pickup]:
        if not self.world_active:
            return None
        pickup = self.coordinator.take_pickup(self.state.pickups, pickup_id)
        if pickup is None:
            return None
        p = self.settings.pickups
        if pickup.kind == SpawnKind.FUEL:
            self.fuel.refuel(p.fuel_amount)
        elif pickup.kind == SpawnKind.COIN:
            self.ledger.add_coins(p.coin_value)
        elif pickup.kind == SpawnKind.SHIELD:
            self.powerups.activate_shield(p.shield_duration)
        elif pickup.kind == SpawnKind.SPEED_BOOST:
            self.powerups.activate_boost(p.speed_boost_multiplier, p.speed_boost_duration)
        return pickup

    # Queries

    def difficulty_level(self) -> float:
        return self.curve.level(self.state.player.position, self.settings.traffic.difficulty)

    def get_state(self) -> RunState:
        return RunState(
            tick=self.state.tick_id,
            time=self.state.time,
            outcome=self.state.outcome,
            paused=self.state.shop_open,
            difficultyLevel=self.difficulty_level(),
            distance=self.state.distance,
            lanes=self.layout.lanes(),
            fuel=self.fuel.fuel,
            maxFuel=self.fuel.max_fuel,
            player=self.state.player,
            traffic=self.state.traffic,
            pickups=self.state.pickups,
            pitStop=self.state.pit_stop,
            pursuit=self.pursuit.status(),
            economy=self.ledger.status(),
        )
