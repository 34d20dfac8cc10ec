from enum import Enum
from typing import List, Optional
from pydantic import BaseModel

class LifecycleState(str, Enum):
    ACTIVE = "ACTIVE"
    RETIRED = "RETIRED"

class SpawnKind(str, Enum):
    TRAFFIC = "TRAFFIC"
    FUEL = "FUEL"
    COIN = "COIN"
    SPEED_BOOST = "SPEED_BOOST"
    SHIELD = "SHIELD"

class PursuitPhase(str, Enum):
    IDLE = "IDLE"
    CHASING = "CHASING"

class ChaseEndReason(str, Enum):
    ESCAPED = "ESCAPED"
    PIT_STOP = "PIT_STOP"
    CAPTURED = "CAPTURED"

class RunOutcome(str, Enum):
    RUNNING = "RUNNING"
    CAPTURED = "CAPTURED"
    CRASHED = "CRASHED"
    OUT_OF_FUEL = "OUT_OF_FUEL"
    VICTORY = "VICTORY"

class UpgradeType(str, Enum):
    ENGINE = "ENGINE"
    FUEL_TANK = "FUEL_TANK"
    HANDLING = "HANDLING"

class Lane(BaseModel):
    index: int
    x: float

class TrafficEntity(BaseModel):
    id: str
    lane: int
    variant: str
    position: float
    speed: float  # Fixed at spawn
    state: LifecycleState = LifecycleState.ACTIVE

    @property
    def active(self) -> bool:
        return self.state == LifecycleState.ACTIVE

    def retire(self) -> bool:
        """Mark the entity retired. Returns False if it already was."""
        if self.state == LifecycleState.RETIRED:
            return False
        self.state = LifecycleState.RETIRED
        return True

class Pickup(BaseModel):
    id: str
    kind: SpawnKind
    lane: int
    position: float
    lifetime: float  # Seconds until auto-despawn
    state: LifecycleState = LifecycleState.ACTIVE

class PursuerVehicle(BaseModel):
    id: str
    lane: int
    x: float
    position: float
    speed: float = 0.0
    max_speed: float
    bust_progress: float = 0.0
    chase_time: float = 0.0

class PlayerVehicle(BaseModel):
    position: float = 0.0
    speed: float = 0.0
    effective_speed: float = 0.0  # Speed after lane-change penalty
    max_speed: float = 0.0
    lane: int = 1
    x: float = 0.0
    throttle: int = 0  # -1 brake/reverse, 0 coast, 1 accelerate
    changing_lanes: bool = False

class PitStop(BaseModel):
    lane: int
    position: float
    active: bool = True

class SpawnCommand(BaseModel):
    kind: SpawnKind
    entity_id: str
    lane: int
    x: float
    position: float
    speed: float = 0.0
    variant: Optional[str] = None

class UpgradeTrack(BaseModel):
    values: List[float]
    costs: List[int]
    retain: List[float] = []  # Handling only: fraction of speed kept while changing lanes

# API/Response Models

class PursuitStatus(BaseModel):
    phase: PursuitPhase
    heat: float
    maxHeat: float
    bustProgress: float
    pursuer: Optional[PursuerVehicle] = None

class EconomyStatus(BaseModel):
    coins: float
    levels: dict
    totalUpgradeLevel: int
    upgradesAvailable: bool = False

class RunState(BaseModel):
    tick: int
    time: float
    outcome: RunOutcome
    paused: bool
    difficultyLevel: float
    distance: float
    lanes: List[Lane] = []
    fuel: float
    maxFuel: float
    player: PlayerVehicle
    traffic: List[TrafficEntity]
    pickups: List[Pickup]
    pitStop: Optional[PitStop] = None
    pursuit: PursuitStatus
    economy: EconomyStatus

class ThrottleInput(BaseModel):
    throttle: int

class LaneInput(BaseModel):
    direction: int  # -1 left, 1 right

class UpgradeRequest(BaseModel):
    upgrade: UpgradeType

class PurchaseResult(BaseModel):
    upgrade: UpgradeType
    cost: Optional[int]
    status: str
