"""Lifecycle events published by the simulation kernel."""

from dataclasses import dataclass

from roadchase.domain.models import ChaseEndReason, RunOutcome


@dataclass
class SimulationEvent:
    """Base class for all simulation events."""

    tick: int = 0
    time: float = 0.0


@dataclass
class TrafficRetired(SimulationEvent):
    """A traffic car fell behind the player and left the road."""

    entity_id: str = ""
    lane: int = 0


@dataclass
class ChaseStarted(SimulationEvent):
    pursuer_id: str = ""
    pursuer_max_speed: float = 0.0
    speed_advantage: float = 0.0


@dataclass
class ChaseEnded(SimulationEvent):
    reason: ChaseEndReason = ChaseEndReason.ESCAPED


@dataclass
class Captured(SimulationEvent):
    """Bust progress filled up; the run is over."""

    pursuer_id: str = ""


@dataclass
class HeatChanged(SimulationEvent):
    value: float = 0.0


@dataclass
class BustProgressChanged(SimulationEvent):
    value: float = 0.0


@dataclass
class RunEnded(SimulationEvent):
    outcome: RunOutcome = RunOutcome.RUNNING
