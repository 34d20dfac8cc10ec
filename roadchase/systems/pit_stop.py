import logging
import random
from typing import Optional
from roadchase.domain.graph import RoadLayout
from roadchase.domain.models import PitStop
from roadchase.domain.settings import PitStopSettings

logger = logging.getLogger(__name__)

class PitStopSystem:
    """Places the scripted pit-stop waypoint ahead of the player and re-places it when skipped."""

    def __init__(self, settings: PitStopSettings, layout: RoadLayout, rng: random.Random):
        self.settings = settings
        self.layout = layout
        self.rng = rng

    def place_next(self, player_position: float) -> PitStop:
        lane = self.rng.randrange(self.layout.lane_count)
        return PitStop(lane=lane, position=player_position + self.settings.spacing)

    def update(self, pit_stop: Optional[PitStop], player_position: float) -> Optional[PitStop]:
        """Returns the waypoint to keep; a new one when the current one was driven past."""
        if pit_stop is None or not pit_stop.active:
            return pit_stop
        remaining = pit_stop.position - player_position
        if remaining < -self.settings.skip_threshold:
            logger.info("Pit stop at %.0f skipped, placing the next one", pit_stop.position)
            return self.place_next(player_position)
        return pit_stop

    def reach(self, pit_stop: Optional[PitStop]) -> bool:
        if pit_stop is None or not pit_stop.active:
            return False
        pit_stop.active = False
        return True
