import logging
from roadchase.domain.settings import PlayerSettings

logger = logging.getLogger(__name__)

class FuelSystem:
    """Fuel tank: speed-dependent burn, lane-change cost and pickups. An empty tank ends the run."""

    def __init__(self, settings: PlayerSettings, max_fuel: float):
        self.settings = settings
        self.max_fuel = max_fuel
        self.fuel = max_fuel

    @property
    def fraction(self) -> float:
        if self.max_fuel <= 0:
            return 0.0
        return self.fuel / self.max_fuel

    @property
    def empty(self) -> bool:
        return self.fuel <= 0

    def burn(self, speed: float, dt: float) -> bool:
        """Consume fuel for one tick; returns True once the tank is empty."""
        rate = self.settings.fuel_base_burn + abs(speed) * self.settings.fuel_speed_burn
        self.fuel = max(0.0, min(self.fuel - rate * dt, self.max_fuel))
        return self.empty

    def charge_lane_change(self):
        self.fuel = max(0.0, self.fuel - self.settings.lane_change_fuel_cost)

    def refuel(self, amount: float):
        self.fuel = min(self.fuel + amount, self.max_fuel)
        logger.debug("Fuel added: %.1f, current fuel: %.1f", amount, self.fuel)

    def resize(self, max_fuel: float):
        """Apply a tank upgrade; extra capacity arrives full."""
        previous = self.max_fuel
        self.max_fuel = max_fuel
        if max_fuel > previous:
            self.fuel = min(self.fuel + (max_fuel - previous), max_fuel)
            logger.info("Fuel tank grew from %.0f to %.0f", previous, max_fuel)
        else:
            self.fuel = min(self.fuel, max_fuel)
