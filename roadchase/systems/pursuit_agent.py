import math
import random
from roadchase.domain import config
from roadchase.domain.graph import RoadLayout
from roadchase.domain.models import PursuerVehicle, PlayerVehicle
from roadchase.domain.settings import PursuitSettings

# Float accumulation tolerance for a full bust meter
BUST_EPSILON = 1e-9

class PursuitAgent:
    """
    Per-tick driving and bust logic for the one active pursuer.

    The pursuer keeps itself inside a distance band behind the player,
    drifts one lane at a time toward the player's lane and fills the bust
    meter while it sits close behind in the same lane.
    """

    def __init__(self, vehicle: PursuerVehicle, settings: PursuitSettings,
                 layout: RoadLayout, rng: random.Random,
                 same_lane_threshold: float = config.SAME_LANE_THRESHOLD):
        self.vehicle = vehicle
        self.same_lane_threshold = same_lane_threshold
        self.settings = settings
        self.layout = layout
        self.rng = rng

    @property
    def bust_progress(self) -> float:
        return self.vehicle.bust_progress

    @property
    def captured(self) -> bool:
        return self.vehicle.bust_progress >= 1.0

    def update(self, player: PlayerVehicle, dt: float, upgrade_count: int = 0) -> bool:
        """Advance one tick; returns True when the bust meter is full."""
        self.vehicle.chase_time += dt
        self._regulate_speed(player, dt)
        self._follow_lane(player, dt, upgrade_count)
        return self._accumulate_bust(player, dt)

    def target_speed(self, player: PlayerVehicle) -> float:
        s = self.settings
        gap = player.position - self.vehicle.position
        if gap < s.min_follow:
            return max(player.speed * s.backoff_factor, s.backoff_floor)
        if gap > s.max_follow:
            return self.vehicle.max_speed
        return min(player.speed + s.catchup_bias, self.vehicle.max_speed)

    def _regulate_speed(self, player: PlayerVehicle, dt: float):
        v = self.vehicle
        v.speed = self.target_speed(player)
        v.position += v.speed * dt
        # Never pass the player
        v.position = min(v.position, player.position - self.settings.min_follow)

    def lane_change_speed(self, upgrade_count: int) -> float:
        s = self.settings
        chase_minutes = self.vehicle.chase_time / 60.0
        factor = chase_minutes * s.lane_per_minute + upgrade_count * s.lane_per_upgrade
        scaled = s.base_lane_speed + factor * s.lane_scale_rate
        return max(s.base_lane_speed, min(scaled, s.max_lane_speed))

    def _follow_lane(self, player: PlayerVehicle, dt: float, upgrade_count: int):
        v = self.vehicle
        if self.rng.random() < self.settings.lane_change_chance:
            step = self.layout.next_lane_toward(v.lane, self.layout.lane_at(player.x))
            if step is not None:
                v.lane = step

        target_x = self.layout.lane_x(v.lane)
        max_step = self.lane_change_speed(upgrade_count) * dt
        delta = target_x - v.x
        if abs(delta) <= max_step:
            v.x = target_x
        else:
            v.x += math.copysign(max_step, delta)

    def in_bust_range(self, player: PlayerVehicle) -> bool:
        v = self.vehicle
        distance = math.hypot(player.x - v.x, player.position - v.position)
        same_lane = abs(player.x - v.x) < self.same_lane_threshold
        behind = v.position < player.position
        return distance <= self.settings.bust_distance and same_lane and behind

    def _accumulate_bust(self, player: PlayerVehicle, dt: float) -> bool:
        s = self.settings
        step = dt / s.bust_duration
        if self.in_bust_range(player):
            progress = self.vehicle.bust_progress + step
        else:
            progress = self.vehicle.bust_progress - step * s.bust_decay_factor
        if progress >= 1.0 - BUST_EPSILON:
            progress = 1.0
        self.vehicle.bust_progress = max(0.0, min(progress, 1.0))
        return self.captured
