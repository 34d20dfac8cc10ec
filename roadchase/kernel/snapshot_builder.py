from typing import Any, Dict, List
from roadchase.domain.models import SpawnCommand
from roadchase.domain.state import SimulationState

class SnapshotBuilder:
    """Compact per-tick frame for renderers that only need positions."""

    def build(self, state: SimulationState, spawns: List[SpawnCommand] = None) -> Dict[str, Any]:
        pursuer = state.pursuer
        return {
            "tick": state.tick_id,
            "time": state.time,
            "outcome": state.outcome.value,
            "player": {
                "pos": state.player.position,
                "x": state.player.x,
                "speed": state.player.effective_speed,
            },
            "traffic": [
                {"id": t.id, "lane": t.lane, "pos": t.position, "variant": t.variant}
                for t in state.traffic
            ],
            "pickups": [
                {"id": p.id, "kind": p.kind.value, "lane": p.lane, "pos": p.position}
                for p in state.pickups
            ],
            "pursuer": None if pursuer is None else {
                "id": pursuer.id,
                "x": pursuer.x,
                "pos": pursuer.position,
                "bust": pursuer.bust_progress,
            },
            "spawned": [s.entity_id for s in (spawns or [])],
        }
