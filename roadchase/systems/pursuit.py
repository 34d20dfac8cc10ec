import logging
import random
from typing import Optional
from roadchase.domain import config
from roadchase.domain.graph import RoadLayout
from roadchase.domain.models import (
    PursuitPhase, ChaseEndReason, PursuerVehicle, PlayerVehicle, PursuitStatus
)
from roadchase.domain.settings import PursuitSettings
from roadchase.events.bus import EventBus
from roadchase.events.types import (
    ChaseStarted, ChaseEnded, Captured, HeatChanged, BustProgressChanged
)
from roadchase.systems.lane_registry import LaneOccupancyRegistry
from roadchase.systems.pursuit_agent import PursuitAgent

logger = logging.getLogger(__name__)

# Float accumulation tolerance for a saturated heat meter
HEAT_EPSILON = 1e-9

class PursuitStateMachine:
    """
    Heat accumulation, chase and bust-or-escape resolution.

    IDLE accumulates heat at a fixed rate until it saturates, which starts a
    chase. Heat is frozen while CHASING and only a pit stop resets it. A chase
    ends when the pursuer falls too far behind (escape), when the player
    reaches a pit stop, or when the bust meter fills (capture).
    """

    def __init__(self, settings: PursuitSettings, registry: LaneOccupancyRegistry,
                 layout: RoadLayout, rng: random.Random, bus: Optional[EventBus] = None,
                 same_lane_threshold: float = config.SAME_LANE_THRESHOLD):
        self.settings = settings
        self.registry = registry
        self.layout = layout
        self.rng = rng
        self.bus = bus
        self.same_lane_threshold = same_lane_threshold

        self.phase = PursuitPhase.IDLE
        self.heat = 0.0
        self.bust_progress = 0.0
        self.agent: Optional[PursuitAgent] = None
        self.game_start_time = 0.0
        self.captured = False
        self.last_end_reason: Optional[ChaseEndReason] = None
        self._chase_count = 0
        self._tick = 0
        self._time = 0.0

    @property
    def chasing(self) -> bool:
        return self.phase == PursuitPhase.CHASING

    @property
    def pursuer(self) -> Optional[PursuerVehicle]:
        return self.agent.vehicle if self.agent is not None else None

    def _emit(self, event):
        if self.bus is not None:
            event.tick = self._tick
            event.time = self._time
            self.bus.emit(event)

    def update(self, player: PlayerVehicle, player_max_speed: float, time: float, dt: float,
               upgrade_count: int = 0, tick: int = 0) -> Optional[ChaseEndReason]:
        """Advance heat or drive the chase; returns the end reason if a chase ended this tick."""
        self._tick = tick
        self._time = time
        if self.captured:
            return None

        if self.phase == PursuitPhase.IDLE:
            self._accumulate_heat(dt)
            if self.heat >= self.settings.max_heat:
                self.start_chase(player, player_max_speed, time, upgrade_count)
            return None

        return self._drive_chase(player, dt, upgrade_count)

    def _accumulate_heat(self, dt: float):
        previous = self.heat
        heat = self.heat + self.settings.heat_rate * dt
        if heat >= self.settings.max_heat - HEAT_EPSILON:
            heat = self.settings.max_heat
        self.heat = max(0.0, min(heat, self.settings.max_heat))
        if self.heat != previous:
            self._emit(HeatChanged(value=self.heat))

    def speed_advantage(self, time: float, upgrade_count: int) -> float:
        s = self.settings
        minutes = (time - self.game_start_time) / 60.0
        steps = upgrade_count // s.upgrades_per_step if s.upgrades_per_step > 0 else 0
        advantage = s.base_advantage + minutes * s.advantage_per_minute + steps * s.advantage_per_upgrade
        return min(advantage, s.max_advantage)

    def start_chase(self, player: PlayerVehicle, player_max_speed: float, time: float,
                    upgrade_count: int = 0):
        if self.chasing:
            return
        advantage = self.speed_advantage(time, upgrade_count)
        pursuer_speed = player_max_speed + advantage
        lane = self.layout.centre_lane

        self._chase_count += 1
        vehicle = PursuerVehicle(
            id=f"pursuer-{self._chase_count}",
            lane=lane,
            x=self.layout.lane_x(lane),
            position=player.position - self.settings.start_distance,
            speed=pursuer_speed,
            max_speed=pursuer_speed,
        )
        self.agent = PursuitAgent(vehicle, self.settings, self.layout, self.rng,
                                  same_lane_threshold=self.same_lane_threshold)
        self.registry.attach_pursuer(vehicle)
        self.phase = PursuitPhase.CHASING
        self.bust_progress = 0.0

        logger.info("Chase started: pursuer speed %.1f (player %.1f + advantage %.1f)",
                    pursuer_speed, player_max_speed, advantage)
        self._emit(ChaseStarted(pursuer_id=vehicle.id, pursuer_max_speed=pursuer_speed,
                                speed_advantage=advantage))

    def _drive_chase(self, player: PlayerVehicle, dt: float, upgrade_count: int) -> Optional[ChaseEndReason]:
        previous = self.bust_progress
        captured = self.agent.update(player, dt, upgrade_count)
        self.bust_progress = self.agent.bust_progress
        if self.bust_progress != previous:
            self._emit(BustProgressChanged(value=self.bust_progress))

        if captured:
            self.captured = True
            self._emit(Captured(pursuer_id=self.agent.vehicle.id))
            self.end_chase(ChaseEndReason.CAPTURED)
            return ChaseEndReason.CAPTURED

        gap = player.position - self.agent.vehicle.position
        if gap > self.settings.escape_distance:
            logger.info("Player escaped the pursuer by distance (gap %.1f)", gap)
            self.end_chase(ChaseEndReason.ESCAPED)
            return ChaseEndReason.ESCAPED
        return None

    def end_chase(self, reason: ChaseEndReason):
        if not self.chasing:
            return
        self.phase = PursuitPhase.IDLE
        self.last_end_reason = reason
        self.agent = None
        self.registry.release_pursuer()
        if reason != ChaseEndReason.CAPTURED and self.bust_progress != 0.0:
            self.bust_progress = 0.0
            self._emit(BustProgressChanged(value=0.0))
        logger.info("Chase ended: %s", reason.value)
        self._emit(ChaseEnded(reason=reason))

    def pit_stop_reached(self, tick: int = 0, time: float = 0.0) -> bool:
        """Reset heat and call off any chase. Returns True if a chase was ended."""
        self._tick = tick
        self._time = time
        if self.captured:
            return False
        if self.heat != 0.0:
            self.heat = 0.0
            self._emit(HeatChanged(value=0.0))
        if self.chasing:
            self.end_chase(ChaseEndReason.PIT_STOP)
            return True
        return False

    def status(self) -> PursuitStatus:
        return PursuitStatus(
            phase=self.phase,
            heat=self.heat,
            maxHeat=self.settings.max_heat,
            bustProgress=self.bust_progress,
            pursuer=self.pursuer,
        )
