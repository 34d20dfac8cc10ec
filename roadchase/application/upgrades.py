import logging
from typing import Dict, Optional
from roadchase.domain import config
from roadchase.domain.models import UpgradeType, UpgradeTrack, EconomyStatus

logger = logging.getLogger(__name__)

DEFAULT_TRACKS: Dict[UpgradeType, UpgradeTrack] = {
    UpgradeType.ENGINE: UpgradeTrack(
        values=config.ENGINE_SPEED_LEVELS,
        costs=config.ENGINE_UPGRADE_COSTS,
    ),
    UpgradeType.FUEL_TANK: UpgradeTrack(
        values=config.FUEL_TANK_LEVELS,
        costs=config.FUEL_TANK_UPGRADE_COSTS,
    ),
    UpgradeType.HANDLING: UpgradeTrack(
        values=config.HANDLING_LANE_SPEED_LEVELS,
        costs=config.HANDLING_UPGRADE_COSTS,
        retain=config.HANDLING_RETAIN_LEVELS,
    ),
}

class UpgradeLedger:
    """Session coins and upgrade levels. Levels start at 1 and reset with the run."""

    def __init__(self, tracks: Optional[Dict[UpgradeType, UpgradeTrack]] = None, coins: float = 0.0):
        self.tracks = tracks or DEFAULT_TRACKS
        self.coins = coins
        self.levels: Dict[UpgradeType, int] = {t: 1 for t in UpgradeType}

    def value(self, upgrade: UpgradeType) -> float:
        return self.tracks[upgrade].values[self.levels[upgrade] - 1]

    @property
    def max_speed(self) -> float:
        return self.value(UpgradeType.ENGINE)

    @property
    def max_fuel(self) -> float:
        return self.value(UpgradeType.FUEL_TANK)

    @property
    def lane_change_speed(self) -> float:
        return self.value(UpgradeType.HANDLING)

    @property
    def handling_retain(self) -> float:
        track = self.tracks[UpgradeType.HANDLING]
        if not track.retain:
            return 1.0
        return track.retain[self.levels[UpgradeType.HANDLING] - 1]

    @property
    def total_upgrade_level(self) -> int:
        return sum(level - 1 for level in self.levels.values())

    def is_maxed(self, upgrade: UpgradeType) -> bool:
        return self.levels[upgrade] >= len(self.tracks[upgrade].values)

    def cost(self, upgrade: UpgradeType) -> Optional[int]:
        """Price of the next level, or None at max level."""
        if self.is_maxed(upgrade):
            return None
        return self.tracks[upgrade].costs[self.levels[upgrade] - 1]

    def can_afford(self, amount: float) -> bool:
        return self.coins >= amount

    def add_coins(self, amount: float):
        self.coins += amount

    def purchase(self, upgrade: UpgradeType) -> bool:
        cost = self.cost(upgrade)
        if cost is None or not self.can_afford(cost):
            return False
        self.coins -= cost
        self.levels[upgrade] += 1
        logger.info("%s upgraded to level %d (value %.2f) for %d coins",
                    upgrade.value, self.levels[upgrade], self.value(upgrade), cost)
        return True

    def has_available_upgrades(self) -> bool:
        for upgrade in UpgradeType:
            cost = self.cost(upgrade)
            if cost is not None and self.can_afford(cost):
                return True
        return False

    def status(self) -> EconomyStatus:
        return EconomyStatus(
            coins=self.coins,
            levels={t.value: level for t, level in self.levels.items()},
            totalUpgradeLevel=self.total_upgrade_level,
            upgradesAvailable=self.has_available_upgrades(),
        )
