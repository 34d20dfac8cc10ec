import unittest
from roadchase.application.upgrades import UpgradeLedger
from roadchase.domain.models import UpgradeType


class TestUpgradeLedger(unittest.TestCase):
    def setUp(self):
        self.ledger = UpgradeLedger()

    def test_starting_stats(self):
        self.assertEqual(self.ledger.max_speed, 30)
        self.assertEqual(self.ledger.max_fuel, 60)
        self.assertEqual(self.ledger.lane_change_speed, 15)
        self.assertEqual(self.ledger.handling_retain, 0.5)
        self.assertEqual(self.ledger.total_upgrade_level, 0)

    def test_purchase_requires_coins(self):
        self.ledger.add_coins(199)
        self.assertFalse(self.ledger.purchase(UpgradeType.ENGINE))
        self.ledger.add_coins(1)
        self.assertTrue(self.ledger.purchase(UpgradeType.ENGINE))
        self.assertEqual(self.ledger.coins, 0)
        self.assertEqual(self.ledger.max_speed, 40)
        self.assertEqual(self.ledger.total_upgrade_level, 1)

    def test_max_level(self):
        self.ledger.add_coins(10000)
        for _ in range(4):
            self.assertTrue(self.ledger.purchase(UpgradeType.HANDLING))
        self.assertTrue(self.ledger.is_maxed(UpgradeType.HANDLING))
        self.assertIsNone(self.ledger.cost(UpgradeType.HANDLING))
        self.assertFalse(self.ledger.purchase(UpgradeType.HANDLING))
        self.assertEqual(self.ledger.lane_change_speed, 27)
        self.assertEqual(self.ledger.handling_retain, 1.0)
        self.assertEqual(self.ledger.coins, 10000 - (180 + 400 + 650 + 1000))

    def test_available_upgrades(self):
        self.assertFalse(self.ledger.has_available_upgrades())
        self.ledger.add_coins(150)
        self.assertTrue(self.ledger.has_available_upgrades())

    def test_status(self):
        self.ledger.add_coins(500)
        self.ledger.purchase(UpgradeType.FUEL_TANK)
        status = self.ledger.status()
        self.assertEqual(status.coins, 350)
        self.assertEqual(status.levels["FUEL_TANK"], 2)
        self.assertEqual(status.totalUpgradeLevel, 1)
        self.assertTrue(status.upgradesAvailable)

        self.ledger.purchase(UpgradeType.HANDLING)
        self.assertFalse(self.ledger.status().upgradesAvailable)

if __name__ == '__main__':
    unittest.main()
