import json
import logging
import time
from typing import Optional
from roadchase.application.commands import (
    SetThrottleCommand, ChangeLaneCommand, CollectPickupCommand, ContinueFromPitStopCommand
)
from roadchase.domain.models import SpawnKind
from roadchase.domain.settings import load_settings
from roadchase.kernel.simulation_kernel import SimulationKernel


def autopilot(kernel: SimulationKernel):
    """Full throttle, dodge the nearest car ahead, grab fuel when low."""
    state = kernel.state
    player = state.player
    if player.throttle != 1:
        kernel.queue_command(SetThrottleCommand(1))

    ahead = [t for t in state.traffic if t.lane == player.lane and 0 < t.position - player.position < 30]
    if ahead and not player.changing_lanes:
        direction = 1 if player.lane < kernel.layout.lane_count - 1 else -1
        kernel.queue_command(ChangeLaneCommand(direction))

    for pickup in state.pickups:
        close = abs(pickup.position - player.position) < 2.0 and pickup.lane == player.lane
        if close and (pickup.kind != SpawnKind.FUEL or kernel.fuel.fraction < 0.9):
            kernel.queue_command(CollectPickupCommand(pickup.id))

    if state.shop_open:
        kernel.queue_command(ContinueFromPitStopCommand())


def run_headless_experiment(config_path: Optional[str], output_path: str,
                            seed: int = 42, duration_ticks: int = 2000):
    settings = load_settings(config_path)
    kernel = SimulationKernel(settings)
    kernel.initialize(seed=seed)

    results = []

    start_time = time.time()
    for i in range(duration_ticks):
        autopilot(kernel)
        spawns = kernel.run_tick()
        state = kernel.get_state()
        results.append({
            "tick": i,
            "distance": round(state.distance, 2),
            "traffic_count": len(state.traffic),
            "spawned": len(spawns),
            "heat": round(state.pursuit.heat, 2),
            "chasing": state.pursuit.phase.value,
            "bust": round(state.pursuit.bustProgress, 3),
            "outcome": state.outcome.value,
        })
        if not kernel.state.running:
            break

    end_time = time.time()
    print(f"Experiment finished in {end_time - start_time:.4f}s "
          f"({len(results)} ticks, outcome {kernel.state.outcome.value})")

    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2)
    return results

if __name__ == "__main__":
    import sys
    logging.basicConfig(level=logging.INFO)
    if len(sys.argv) > 2:
        config_arg = None if sys.argv[1] in ("-", "default") else sys.argv[1]
        run_headless_experiment(config_arg, sys.argv[2])
    else:
        print("Usage: python -m roadchase.experiments.run_experiment <config.json|-> <output.json>")
