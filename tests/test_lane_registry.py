import unittest
from roadchase.domain.models import TrafficEntity, PursuerVehicle
from roadchase.systems.lane_registry import LaneOccupancyRegistry


def car(entity_id, lane, position, speed=15.0):
    return TrafficEntity(id=entity_id, lane=lane, variant="Sedan", position=position, speed=speed)


class TestLaneOccupancyRegistry(unittest.TestCase):
    def setUp(self):
        self.registry = LaneOccupancyRegistry(3)

    def test_frontmost_is_highest_position(self):
        a = car("a", 0, 10)
        b = car("b", 0, 40)
        c = car("c", 0, 25)
        for entity in (a, b, c):
            self.registry.register(entity, 0)

        self.assertIs(self.registry.frontmost(0), b)
        self.assertIsNone(self.registry.frontmost(1))

    def test_register_then_unregister_restores_lane(self):
        a = car("a", 2, 10)
        self.registry.register(a, 2)
        self.assertEqual(self.registry.count(2), 1)

        self.assertTrue(self.registry.unregister(a, 2))
        self.assertEqual(self.registry.count(2), 0)
        self.assertIsNone(self.registry.frontmost(2))

    def test_round_trip_keeps_existing_frontmost(self):
        front = car("front", 1, 80)
        self.registry.register(front, 1)

        newcomer = car("new", 1, 30)
        self.registry.register(newcomer, 1)
        self.assertIs(self.registry.frontmost(1), front)
        self.assertTrue(self.registry.unregister(newcomer, 1))

        self.assertIs(self.registry.frontmost(1), front)
        self.assertEqual(self.registry.count(1), 1)

    def test_unregister_is_idempotent(self):
        a = car("a", 1, 10)
        self.registry.register(a, 1)
        self.assertTrue(self.registry.unregister(a, 1))
        self.assertFalse(self.registry.unregister(a, 1))
        self.assertFalse(self.registry.unregister(car("never", 1, 0), 1))
        self.assertEqual(self.registry.count(1), 0)

    def test_retired_entities_are_purged_on_query(self):
        a = car("a", 1, 50)
        b = car("b", 1, 20)
        self.registry.register(a, 1)
        self.registry.register(b, 1)

        a.retire()
        self.assertIs(self.registry.frontmost(1), b)
        self.assertEqual(self.registry.count(1), 1)

    def test_invalid_lane_is_ignored(self):
        a = car("a", 5, 10)
        self.assertFalse(self.registry.register(a, 5))
        self.assertFalse(self.registry.register(a, -1))
        self.assertIsNone(self.registry.frontmost(5))
        self.assertEqual(self.registry.count(5), 0)
        self.assertFalse(self.registry.unregister(a, 5))

    def test_pursuer_slot_is_separate_from_lanes(self):
        pursuer = PursuerVehicle(id="p", lane=1, x=0.0, position=0.0, max_speed=33.0)
        self.registry.attach_pursuer(pursuer)

        self.assertIs(self.registry.pursuer, pursuer)
        self.assertIsNone(self.registry.frontmost(1))
        self.assertIs(self.registry.release_pursuer(), pursuer)
        self.assertIsNone(self.registry.pursuer)


if __name__ == '__main__':
    unittest.main()
