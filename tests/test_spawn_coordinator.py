import random
import unittest
from roadchase.domain.difficulty import DifficultyCurve
from roadchase.domain.graph import RoadLayout
from roadchase.domain.models import PitStop, Pickup, SpawnKind
from roadchase.domain.settings import SafetySettings, TrafficSettings, PickupSettings
from roadchase.domain.state import SimulationState
from roadchase.systems.lane_registry import LaneOccupancyRegistry
from roadchase.systems.speed_safety import SpeedSafetyCalculator
from roadchase.systems.spawn_coordinator import TrafficSpawnCoordinator


def build(seed=1, traffic=None, pickups=None):
    layout = RoadLayout([-3.3, 0.0, 3.3])
    registry = LaneOccupancyRegistry(layout.lane_count)
    coordinator = TrafficSpawnCoordinator(
        registry,
        SpeedSafetyCalculator(registry, SafetySettings()),
        DifficultyCurve(),
        layout,
        traffic or TrafficSettings(),
        pickups or PickupSettings(),
        random.Random(seed),
    )
    return coordinator, registry


class TestTrafficSpawnCoordinator(unittest.TestCase):
    def test_no_variants_disables_traffic(self):
        coordinator, registry = build(traffic=TrafficSettings(variants=[]))
        state = SimulationState()

        spawned = []
        for _ in range(400):
            spawned.extend(coordinator.update(state, 0.05))

        self.assertFalse(coordinator.traffic_enabled)
        self.assertEqual(state.traffic, [])
        self.assertFalse(any(s.kind == SpawnKind.TRAFFIC for s in spawned))
        self.assertEqual(sum(registry.count(lane) for lane in range(3)), 0)

    def test_batch_cars_are_registered_and_capped(self):
        for seed in range(20):
            coordinator, registry = build(seed=seed)
            state = SimulationState()
            commands = coordinator.spawn_traffic_batch(state)

            self.assertGreaterEqual(len(commands), 1)
            self.assertLessEqual(len(commands), 2)
            self.assertEqual(len(state.traffic), len(commands))
            self.assertEqual(len({c.lane for c in commands}), len(commands))
            for entity in state.traffic:
                self.assertIs(registry.frontmost(entity.lane), entity)
                self.assertEqual(entity.position, 150.0)
                self.assertGreaterEqual(entity.speed, 12.0)
                self.assertLessEqual(entity.speed, 25.0)

    def test_repeated_batches_never_stack_a_lane(self):
        # Same spawn point each time: an occupied lane has zero gap and must stay blocked
        coordinator, registry = build(seed=3)
        state = SimulationState()
        for _ in range(30):
            coordinator.spawn_traffic_batch(state)

        self.assertLessEqual(len(state.traffic), 3)
        for lane in range(3):
            self.assertLessEqual(registry.count(lane), 1)

    def test_spawned_car_never_closes_on_car_ahead(self):
        coordinator, registry = build(seed=11)
        state = SimulationState()
        checked = 0
        for step in range(200):
            for entity in state.traffic:
                entity.position += entity.speed * 0.5
            state.player.position = step * 5.0
            before = {lane: registry.frontmost(lane) for lane in range(3)}
            known = {e.id for e in state.traffic}
            coordinator.spawn_traffic_batch(state)
            for entity in state.traffic:
                ahead = before[entity.lane]
                if entity.id in known or ahead is None:
                    continue
                checked += 1
                self.assertGreaterEqual(ahead.position - entity.position, 8.0)
                self.assertLessEqual(entity.speed, ahead.speed - 2.0)
        self.assertGreater(checked, 0)

    def test_pit_stop_lane_kept_clear_near_waypoint(self):
        for seed in range(20):
            coordinator, _ = build(seed=seed)
            state = SimulationState()
            pit_stop = PitStop(lane=1, position=170.0)
            for command in coordinator.spawn_traffic_batch(state, pit_stop):
                self.assertNotEqual(command.lane, 1)

    def test_pit_stop_lane_open_away_from_waypoint(self):
        lanes = set()
        for seed in range(40):
            coordinator, _ = build(seed=seed)
            state = SimulationState()
            pit_stop = PitStop(lane=1, position=900.0)
            lanes.update(c.lane for c in coordinator.spawn_traffic_batch(state, pit_stop))
        self.assertIn(1, lanes)

    def test_chase_stretches_traffic_interval(self):
        calm, _ = build(seed=8)
        chase, _ = build(seed=8)
        normal = calm.traffic_interval(0.0, chasing=False)
        stretched = chase.traffic_interval(0.0, chasing=True)
        self.assertAlmostEqual(stretched, normal * 1.5)

    def test_low_fuel_shortens_fuel_interval(self):
        full, _ = build(seed=4)
        low, _ = build(seed=4)
        self.assertAlmostEqual(low.fuel_interval(0.0, 0.2), full.fuel_interval(0.0, 1.0) * 0.4)

    def test_coin_cap_holds_timer(self):
        coordinator, _ = build()
        state = SimulationState()
        for i in range(3):
            state.pickups.append(Pickup(id=f"c{i}", kind=SpawnKind.COIN, lane=0, position=50.0, lifetime=100.0))

        coordinator.coin_timer.remaining = 0.0
        commands = coordinator.update(state, 0.0)
        self.assertFalse(any(c.kind == SpawnKind.COIN for c in commands))
        self.assertTrue(coordinator.coin_timer.expired)

        coordinator.take_pickup(state.pickups, "c0")
        commands = coordinator.update(state, 0.0)
        self.assertEqual([c.kind for c in commands], [SpawnKind.COIN])
        self.assertEqual(coordinator.active_coins(state.pickups), 3)

    def test_every_third_powerup_is_a_shield(self):
        coordinator, _ = build()
        state = SimulationState()
        kinds = []
        for _ in range(6):
            coordinator.powerup_timer.remaining = 0.0
            kinds.extend(c.kind for c in coordinator.update(state, 0.0))

        self.assertEqual(kinds, [
            SpawnKind.SPEED_BOOST, SpawnKind.SPEED_BOOST, SpawnKind.SHIELD,
            SpawnKind.SPEED_BOOST, SpawnKind.SPEED_BOOST, SpawnKind.SHIELD,
        ])

    def test_pickups_expire(self):
        coordinator, _ = build()
        state = SimulationState()
        state.pickups.append(Pickup(id="f", kind=SpawnKind.FUEL, lane=0, position=80.0, lifetime=0.1))
        coordinator.update(state, 0.05)
        self.assertEqual(len([p for p in state.pickups if p.id == "f"]), 1)
        coordinator.update(state, 0.05)
        self.assertEqual(len([p for p in state.pickups if p.id == "f"]), 0)
        self.assertIsNone(coordinator.take_pickup(state.pickups, "f"))

if __name__ == '__main__':
    unittest.main()
