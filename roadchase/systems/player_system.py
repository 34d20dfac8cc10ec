from roadchase.domain.graph import RoadLayout
from roadchase.domain.models import PlayerVehicle
from roadchase.domain.settings import PlayerSettings

class PlayerSystem:
    """Player car: throttle, lane changes and forward distance."""

    def __init__(self, settings: PlayerSettings, layout: RoadLayout):
        self.settings = settings
        self.layout = layout

    def place(self, player: PlayerVehicle, position: float = 0.0):
        lane = self.settings.start_lane
        if lane is None or not self.layout.is_valid(lane):
            lane = self.layout.centre_lane
        player.position = position
        player.speed = 0.0
        player.effective_speed = 0.0
        player.lane = lane
        player.x = self.layout.lane_x(lane)
        player.throttle = 0
        player.changing_lanes = False

    def set_throttle(self, player: PlayerVehicle, throttle: int):
        player.throttle = max(-1, min(1, int(throttle)))

    def request_lane_change(self, player: PlayerVehicle, direction: int) -> bool:
        """Start a one-lane move; ignored while a change is in progress or at the road edge."""
        if player.changing_lanes or direction == 0:
            return False
        target = self.layout.clamp(player.lane + (1 if direction > 0 else -1))
        if target == player.lane:
            return False
        player.lane = target
        player.changing_lanes = True
        return True

    def update(self, player: PlayerVehicle, dt: float, max_speed: float,
               lane_change_speed: float, handling_retain: float = 1.0,
               boost_multiplier: float = 1.0):
        s = self.settings
        player.max_speed = max_speed * boost_multiplier

        if player.changing_lanes:
            target_x = self.layout.lane_x(player.lane)
            step = lane_change_speed * dt
            delta = target_x - player.x
            player.x = target_x if abs(delta) <= step else player.x + (step if delta > 0 else -step)
            if abs(player.x - target_x) < s.lane_snap_distance:
                player.x = target_x
                player.changing_lanes = False

        if player.throttle > 0:
            player.speed += s.acceleration * dt
        elif player.throttle < 0:
            player.speed -= s.acceleration * dt
        elif player.speed > 0:
            player.speed = max(0.0, player.speed - s.deceleration * dt)
        elif player.speed < 0:
            player.speed = min(0.0, player.speed + s.deceleration * dt)

        player.speed = max(-s.max_reverse, min(player.speed, player.max_speed))
        multiplier = handling_retain if player.changing_lanes else 1.0
        player.effective_speed = player.speed * multiplier
        player.position += player.effective_speed * dt
