import json
import os
import tempfile
import unittest
from pydantic import ValidationError
from roadchase.domain.settings import load_settings, SimulationSettings
from roadchase.kernel.simulation_kernel import SimulationKernel


class TestSettings(unittest.TestCase):
    def write(self, payload):
        handle, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(handle, "w") as f:
            f.write(payload)
        self.addCleanup(os.remove, path)
        return path

    def test_defaults(self):
        settings = load_settings()
        self.assertEqual(settings.dt, 0.05)
        self.assertEqual(settings.lanes.x_positions, [-3.3, 0.0, 3.3])
        self.assertEqual(settings.safety.minimum_gap, 8)
        self.assertEqual(settings.pursuit.heat_rate, 7)

    def test_partial_override(self):
        path = self.write(json.dumps({
            "lanes": {"x_positions": [-5.0, -2.5, 0.0, 2.5, 5.0]},
            "traffic": {"max_per_spawn": 3},
        }))
        settings = load_settings(path)
        self.assertEqual(len(settings.lanes.x_positions), 5)
        self.assertEqual(settings.traffic.max_per_spawn, 3)
        self.assertEqual(settings.traffic.base_interval, SimulationSettings().traffic.base_interval)

        kernel = SimulationKernel(settings)
        kernel.initialize(seed=1)
        self.assertEqual(kernel.layout.lane_count, 5)
        self.assertEqual(kernel.state.player.lane, 2)

    def test_invalid_file_raises(self):
        path = self.write(json.dumps({"lanes": {"x_positions": []}}))
        with self.assertRaises(ValidationError):
            load_settings(path)

if __name__ == '__main__':
    unittest.main()
