from roadchase.domain.settings import DifficultyProfile


class DifficultyCurve:
    """
    Maps forward distance to a capped difficulty level.

    The curve only remembers where the run started; every caller brings its
    own DifficultyProfile, so traffic, pickups and pursuit scale independently
    off the same distance.
    """

    def __init__(self, start_position: float = 0.0):
        self.start_position = start_position

    def distance(self, position: float) -> float:
        return position - self.start_position

    def level(self, position: float, profile: DifficultyProfile) -> float:
        if profile.distance_per_level <= 0:
            return 0.0
        raw = self.distance(position) / profile.distance_per_level
        return max(0.0, min(raw, profile.max_level))

    def scaled(self, position: float, base: float, profile: DifficultyProfile) -> float:
        """base - level * per_level_delta, floored at the profile minimum."""
        value = base - self.level(position, profile) * profile.per_level_delta
        return max(value, profile.minimum)
