import logging

logger = logging.getLogger(__name__)

class PowerUpSystem:
    """Shield and speed boost countdowns."""

    def __init__(self):
        self.shield_timer = 0.0
        self.boost_timer = 0.0
        self.boost_multiplier = 1.0

    @property
    def shield_active(self) -> bool:
        return self.shield_timer > 0

    @property
    def boost_active(self) -> bool:
        return self.boost_timer > 0

    def activate_shield(self, duration: float):
        # Re-collecting keeps the longer of the two durations
        self.shield_timer = max(self.shield_timer, duration)
        logger.info("Shield active for %.1fs", self.shield_timer)

    def activate_boost(self, multiplier: float, duration: float):
        if self.boost_active:
            self.boost_timer = max(self.boost_timer, duration)
            self.boost_multiplier = max(self.boost_multiplier, multiplier)
        else:
            self.boost_timer = duration
            self.boost_multiplier = multiplier
        logger.info("Speed boost x%.1f for %.1fs", self.boost_multiplier, self.boost_timer)

    def absorb_collision(self) -> bool:
        """True if an active shield soaks up a traffic hit. The shield stays up."""
        return self.shield_active

    def update(self, dt: float):
        if self.shield_timer > 0:
            self.shield_timer = max(0.0, self.shield_timer - dt)
        if self.boost_timer > 0:
            self.boost_timer = max(0.0, self.boost_timer - dt)
            if self.boost_timer == 0:
                self.boost_multiplier = 1.0
