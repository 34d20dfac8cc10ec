from typing import List, Optional
from pydantic import BaseModel, Field
from roadchase.domain.models import (
    PlayerVehicle, TrafficEntity, Pickup, PursuerVehicle, PitStop, RunOutcome
)

class SimulationState(BaseModel):
    tick_id: int = 0
    time: float = 0.0
    start_position: float = 0.0
    outcome: RunOutcome = RunOutcome.RUNNING
    shop_open: bool = False

    player: PlayerVehicle = Field(default_factory=PlayerVehicle)
    traffic: List[TrafficEntity] = []
    pickups: List[Pickup] = []
    pursuer: Optional[PursuerVehicle] = None
    pit_stop: Optional[PitStop] = None

    coin_accrual_position: float = 0.0

    @property
    def distance(self) -> float:
        return self.player.position - self.start_position

    @property
    def running(self) -> bool:
        return self.outcome == RunOutcome.RUNNING
