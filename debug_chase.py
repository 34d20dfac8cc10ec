from roadchase.kernel.simulation_kernel import SimulationKernel
from roadchase.application.commands import SetThrottleCommand
from roadchase.events.types import ChaseStarted, ChaseEnded, TrafficRetired

print("Debugging heat and chase start...")

kernel = SimulationKernel()
kernel.initialize(seed=7)

retired = []
kernel.bus.subscribe(ChaseStarted, lambda e: print(f"[t={e.time:.2f}] Chase started: {e.pursuer_id} max speed {e.pursuer_max_speed:.1f}"))
kernel.bus.subscribe(ChaseEnded, lambda e: print(f"[t={e.time:.2f}] Chase ended: {e.reason.value}"))
kernel.bus.subscribe(TrafficRetired, lambda e: retired.append(e.entity_id))

kernel.queue_command(SetThrottleCommand(1))

# Heat 7/s to 100 -> chase at ~14.3s (286 ticks at 20Hz)
for i in range(400):
    kernel.run_tick()
    if i % 100 == 0:
        status = kernel.pursuit.status()
        print(f"Tick {i}: distance={kernel.state.distance:.0f} heat={status.heat:.1f} "
              f"phase={status.phase.value} traffic={len(kernel.state.traffic)}")
    if not kernel.state.running:
        break

print(f"Traffic retired so far: {len(retired)}")
for lane in range(kernel.registry.lane_count):
    front = kernel.registry.frontmost(lane)
    print(f"Lane {lane}: {kernel.registry.count(lane)} cars, frontmost={front.id if front else None}")

if kernel.pursuit.chasing or kernel.pursuit.last_end_reason is not None:
    print("SUCCESS: Chase triggered.")
else:
    print(f"FAILURE: No chase. Heat={kernel.pursuit.heat}")
