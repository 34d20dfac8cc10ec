from pathlib import Path
from typing import List, Optional, Union
from pydantic import BaseModel, Field
from roadchase.domain import config


class DifficultyProfile(BaseModel):
    distance_per_level: float
    max_level: float
    per_level_delta: float
    minimum: float


class LaneSettings(BaseModel):
    x_positions: List[float] = Field(default_factory=lambda: list(config.LANE_X_POSITIONS), min_length=1)
    same_lane_threshold: float = config.SAME_LANE_THRESHOLD


class SafetySettings(BaseModel):
    minimum_gap: float = config.MIN_GAP
    gap_per_speed_unit: float = config.GAP_PER_SPEED_UNIT
    speed_buffer: float = config.SPEED_BUFFER


class TrafficSettings(BaseModel):
    variants: List[str] = Field(default_factory=lambda: list(config.TRAFFIC_VARIANTS))
    base_interval: float = config.TRAFFIC_BASE_INTERVAL
    jitter: float = config.TRAFFIC_JITTER
    max_per_spawn: int = config.TRAFFIC_MAX_PER_SPAWN
    lead_distance: float = config.TRAFFIC_LEAD_DISTANCE
    min_speed: float = config.TRAFFIC_MIN_SPEED
    max_speed: float = config.TRAFFIC_MAX_SPEED
    destroy_behind: float = config.DESTROY_BEHIND_DISTANCE
    pit_stop_safe_zone: float = config.PIT_STOP_SAFE_ZONE
    chase_penalty: float = config.CHASE_TRAFFIC_PENALTY
    difficulty: DifficultyProfile = DifficultyProfile(
        distance_per_level=config.TRAFFIC_LEVEL_DISTANCE,
        max_level=config.TRAFFIC_MAX_LEVEL,
        per_level_delta=config.TRAFFIC_INTERVAL_PER_LEVEL,
        minimum=config.TRAFFIC_MIN_INTERVAL,
    )


class PickupCategorySettings(BaseModel):
    base_interval: float
    jitter: float = 0.0
    lead_distance: float
    lifetime: float
    difficulty: DifficultyProfile


class PickupSettings(BaseModel):
    fuel: PickupCategorySettings = PickupCategorySettings(
        base_interval=config.FUEL_BASE_INTERVAL,
        lead_distance=config.FUEL_LEAD_DISTANCE,
        lifetime=config.FUEL_LIFETIME,
        difficulty=DifficultyProfile(
            distance_per_level=config.FUEL_LEVEL_DISTANCE,
            max_level=config.FUEL_MAX_LEVEL,
            per_level_delta=config.FUEL_INTERVAL_PER_LEVEL,
            minimum=config.FUEL_MIN_INTERVAL,
        ),
    )
    coin: PickupCategorySettings = PickupCategorySettings(
        base_interval=config.COIN_BASE_INTERVAL,
        jitter=config.COIN_JITTER,
        lead_distance=config.COIN_LEAD_DISTANCE,
        lifetime=config.COIN_LIFETIME,
        difficulty=DifficultyProfile(
            distance_per_level=config.COIN_LEVEL_DISTANCE,
            max_level=config.COIN_MAX_LEVEL,
            per_level_delta=config.COIN_INTERVAL_PER_LEVEL,
            minimum=config.COIN_MIN_INTERVAL,
        ),
    )
    powerup: PickupCategorySettings = PickupCategorySettings(
        base_interval=config.POWERUP_BASE_INTERVAL,
        lead_distance=config.POWERUP_LEAD_DISTANCE,
        lifetime=config.POWERUP_LIFETIME,
        difficulty=DifficultyProfile(
            distance_per_level=config.POWERUP_LEVEL_DISTANCE,
            max_level=config.POWERUP_MAX_LEVEL,
            per_level_delta=config.POWERUP_INTERVAL_PER_LEVEL,
            minimum=config.POWERUP_MIN_INTERVAL,
        ),
    )
    low_fuel_threshold: float = config.FUEL_LOW_THRESHOLD
    low_fuel_multiplier: float = config.FUEL_LOW_MULTIPLIER
    fuel_amount: float = config.FUEL_PICKUP_AMOUNT
    coin_value: int = config.COIN_VALUE
    max_active_coins: int = config.COIN_MAX_ACTIVE
    shield_every: int = config.SHIELD_EVERY
    shield_duration: float = config.SHIELD_DURATION
    speed_boost_duration: float = config.SPEED_BOOST_DURATION
    speed_boost_multiplier: float = config.SPEED_BOOST_MULTIPLIER


class PursuitSettings(BaseModel):
    max_heat: float = config.MAX_HEAT
    heat_rate: float = config.HEAT_RATE
    base_advantage: float = config.PURSUIT_BASE_ADVANTAGE
    advantage_per_minute: float = config.PURSUIT_ADVANTAGE_PER_MINUTE
    advantage_per_upgrade: float = config.PURSUIT_ADVANTAGE_PER_UPGRADE
    max_advantage: float = config.PURSUIT_MAX_ADVANTAGE
    upgrades_per_step: int = config.PURSUIT_UPGRADES_PER_STEP
    start_distance: float = config.CHASE_START_DISTANCE
    escape_distance: float = config.ESCAPE_DISTANCE

    min_follow: float = config.PURSUER_MIN_FOLLOW
    max_follow: float = config.PURSUER_MAX_FOLLOW
    backoff_factor: float = config.PURSUER_BACKOFF_FACTOR
    backoff_floor: float = config.PURSUER_BACKOFF_FLOOR
    catchup_bias: float = config.PURSUER_CATCHUP_BIAS
    lane_change_chance: float = config.PURSUER_LANE_CHANGE_CHANCE
    base_lane_speed: float = config.PURSUER_BASE_LANE_SPEED
    max_lane_speed: float = config.PURSUER_MAX_LANE_SPEED
    lane_scale_rate: float = config.PURSUER_LANE_SCALE_RATE
    lane_per_minute: float = config.PURSUER_LANE_PER_MINUTE
    lane_per_upgrade: float = config.PURSUER_LANE_PER_UPGRADE
    bust_distance: float = config.BUST_DISTANCE
    bust_duration: float = config.BUST_DURATION
    bust_decay_factor: float = config.BUST_DECAY_FACTOR


class PlayerSettings(BaseModel):
    acceleration: float = config.PLAYER_ACCELERATION
    deceleration: float = config.PLAYER_DECELERATION
    max_reverse: float = config.PLAYER_MAX_REVERSE
    lane_snap_distance: float = config.LANE_SNAP_DISTANCE
    start_lane: Optional[int] = None  # None -> centre lane
    fuel_base_burn: float = config.FUEL_BASE_BURN
    fuel_speed_burn: float = config.FUEL_SPEED_BURN
    lane_change_fuel_cost: float = config.LANE_CHANGE_FUEL_COST


class PitStopSettings(BaseModel):
    spacing: float = config.PIT_STOP_SPACING
    skip_threshold: float = config.PIT_STOP_SKIP_THRESHOLD


class SimulationSettings(BaseModel):
    dt: float = config.TICK_DT
    journey_distance: float = config.JOURNEY_DISTANCE
    coins_per_distance: float = config.COINS_PER_DISTANCE
    lanes: LaneSettings = LaneSettings()
    safety: SafetySettings = SafetySettings()
    traffic: TrafficSettings = TrafficSettings()
    pickups: PickupSettings = PickupSettings()
    pursuit: PursuitSettings = PursuitSettings()
    player: PlayerSettings = PlayerSettings()
    pit_stops: PitStopSettings = PitStopSettings()


def load_settings(path: Optional[Union[str, Path]] = None) -> SimulationSettings:
    """Load settings from a JSON file, falling back to the built-in defaults."""
    if path is None:
        return SimulationSettings()
    return SimulationSettings.model_validate_json(Path(path).read_text())
