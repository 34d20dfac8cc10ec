import unittest
from roadchase.domain.difficulty import DifficultyCurve
from roadchase.domain.graph import RoadLayout
from roadchase.domain.settings import DifficultyProfile, TrafficSettings


class TestDifficultyCurve(unittest.TestCase):
    def setUp(self):
        self.curve = DifficultyCurve(start_position=0.0)
        self.profile = DifficultyProfile(distance_per_level=1000, max_level=10, per_level_delta=0.2, minimum=0.4)

    def test_level_is_capped(self):
        self.assertEqual(self.curve.level(0.0, self.profile), 0.0)
        self.assertAlmostEqual(self.curve.level(2500.0, self.profile), 2.5)
        self.assertEqual(self.curve.level(15000.0, self.profile), 10.0)

    def test_level_relative_to_start(self):
        curve = DifficultyCurve(start_position=500.0)
        self.assertEqual(curve.level(500.0, self.profile), 0.0)
        self.assertEqual(curve.level(100.0, self.profile), 0.0)
        self.assertAlmostEqual(curve.level(1500.0, self.profile), 1.0)

    def test_scaled_interval_floors_at_minimum(self):
        self.assertAlmostEqual(self.curve.scaled(0.0, 1.5, self.profile), 1.5)
        self.assertAlmostEqual(self.curve.scaled(2000.0, 1.5, self.profile), 1.1)
        self.assertEqual(self.curve.scaled(15000.0, 1.5, self.profile), 0.4)

    def test_scaled_interval_never_increases_with_distance(self):
        traffic = TrafficSettings()
        previous = None
        for position in range(0, 20000, 250):
            interval = self.curve.scaled(float(position), traffic.base_interval, traffic.difficulty)
            if previous is not None:
                self.assertLessEqual(interval, previous)
            previous = interval

    def test_zero_distance_per_level(self):
        flat = DifficultyProfile(distance_per_level=0, max_level=10, per_level_delta=0.2, minimum=0.4)
        self.assertEqual(self.curve.level(5000.0, flat), 0.0)


class TestRoadLayout(unittest.TestCase):
    def setUp(self):
        self.layout = RoadLayout([-3.3, 0.0, 3.3])

    def test_lanes(self):
        self.assertEqual(self.layout.lane_count, 3)
        self.assertEqual(self.layout.centre_lane, 1)
        self.assertEqual([lane.x for lane in self.layout.lanes()], [-3.3, 0.0, 3.3])

    def test_lane_at_picks_nearest_centre(self):
        self.assertEqual(self.layout.lane_at(-4.0), 0)
        self.assertEqual(self.layout.lane_at(1.6), 1)
        self.assertEqual(self.layout.lane_at(3.0), 2)

    def test_next_lane_moves_one_step(self):
        self.assertEqual(self.layout.next_lane_toward(0, 2), 1)
        self.assertEqual(self.layout.next_lane_toward(2, 0), 1)
        self.assertEqual(self.layout.next_lane_toward(1, 2), 2)
        self.assertIsNone(self.layout.next_lane_toward(1, 1))

    def test_clamp_and_validity(self):
        self.assertEqual(self.layout.clamp(-1), 0)
        self.assertEqual(self.layout.clamp(7), 2)
        self.assertTrue(self.layout.is_valid(2))
        self.assertFalse(self.layout.is_valid(3))

if __name__ == '__main__':
    unittest.main()
