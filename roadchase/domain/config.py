# Simulation Configuration

# Tick
TICK_DT = 0.05           # Seconds per kernel tick (20Hz)
DEFAULT_SEED = 42

# Lane Settings
LANE_X_POSITIONS = [-3.3, 0.0, 3.3]
SAME_LANE_THRESHOLD = 1.5  # Lateral distance considered "same lane"

# Traffic Safety
MIN_GAP = 8.0                 # Minimum gap between cars regardless of speed
GAP_PER_SPEED_UNIT = 0.5      # Extra gap per unit of closing speed
SPEED_BUFFER = 2.0            # New cars spawn at least this much slower than the car ahead
DESTROY_BEHIND_DISTANCE = 20.0

# Traffic Spawning
TRAFFIC_VARIANTS = ["sedan", "hatchback", "van", "truck"]
TRAFFIC_BASE_INTERVAL = 1.5
TRAFFIC_JITTER = 0.8
TRAFFIC_MAX_PER_SPAWN = 2
TRAFFIC_LEAD_DISTANCE = 150.0
TRAFFIC_MIN_SPEED = 12.0
TRAFFIC_MAX_SPEED = 25.0
TRAFFIC_LEVEL_DISTANCE = 1000.0
TRAFFIC_MAX_LEVEL = 15.0
TRAFFIC_INTERVAL_PER_LEVEL = 0.2
TRAFFIC_MIN_INTERVAL = 0.4
PIT_STOP_SAFE_ZONE = 60.0
CHASE_TRAFFIC_PENALTY = 0.5   # Interval inflation while chased

# Fuel Pickups
FUEL_BASE_INTERVAL = 3.0
FUEL_LEAD_DISTANCE = 80.0
FUEL_LOW_THRESHOLD = 0.3
FUEL_LOW_MULTIPLIER = 0.4
FUEL_LEVEL_DISTANCE = 1000.0
FUEL_MAX_LEVEL = 10.0
FUEL_INTERVAL_PER_LEVEL = 0.4
FUEL_MIN_INTERVAL = 2.0
FUEL_LIFETIME = 30.0
FUEL_PICKUP_AMOUNT = 25.0

# Coin Pickups
COIN_BASE_INTERVAL = 8.0
COIN_JITTER = 2.0
COIN_LEAD_DISTANCE = 60.0
COIN_VALUE = 75
COIN_MAX_ACTIVE = 3
COIN_LEVEL_DISTANCE = 1500.0
COIN_MAX_LEVEL = 8.0
COIN_INTERVAL_PER_LEVEL = 0.4
COIN_MIN_INTERVAL = 4.0
COIN_LIFETIME = 20.0

# Power-ups
POWERUP_BASE_INTERVAL = 6.0
POWERUP_LEAD_DISTANCE = 60.0
POWERUP_LEVEL_DISTANCE = 1000.0
POWERUP_MAX_LEVEL = 10.0
POWERUP_INTERVAL_PER_LEVEL = 0.5
POWERUP_MIN_INTERVAL = 2.0
POWERUP_LIFETIME = 15.0
SHIELD_EVERY = 3              # Every Nth power-up is a shield
SHIELD_DURATION = 5.0
SPEED_BOOST_DURATION = 8.0
SPEED_BOOST_MULTIPLIER = 1.5

# Heat & Pursuit
MAX_HEAT = 100.0
HEAT_RATE = 7.0               # Heat per second while not chased
PURSUIT_BASE_ADVANTAGE = 3.0
PURSUIT_ADVANTAGE_PER_MINUTE = 0.1
PURSUIT_ADVANTAGE_PER_UPGRADE = 0.3
PURSUIT_MAX_ADVANTAGE = 6.0
PURSUIT_UPGRADES_PER_STEP = 1
CHASE_START_DISTANCE = 25.0
ESCAPE_DISTANCE = 200.0

# Pursuit Agent
PURSUER_MIN_FOLLOW = 2.0
PURSUER_MAX_FOLLOW = 15.0
PURSUER_BACKOFF_FACTOR = 0.7
PURSUER_BACKOFF_FLOOR = 2.0
PURSUER_CATCHUP_BIAS = 2.0
PURSUER_LANE_CHANGE_CHANCE = 0.015
PURSUER_BASE_LANE_SPEED = 4.0
PURSUER_MAX_LANE_SPEED = 10.0
PURSUER_LANE_SCALE_RATE = 0.5
PURSUER_LANE_PER_MINUTE = 0.3
PURSUER_LANE_PER_UPGRADE = 0.2
BUST_DISTANCE = 3.0
BUST_DURATION = 2.0
BUST_DECAY_FACTOR = 0.5

# Player Vehicle
PLAYER_ACCELERATION = 20.0
PLAYER_DECELERATION = 30.0
PLAYER_MAX_REVERSE = 10.0
LANE_SNAP_DISTANCE = 0.1
LANE_CHANGE_FUEL_COST = 1.0

# Fuel
FUEL_BASE_BURN = 2.0
FUEL_SPEED_BURN = 0.02

# Pit Stops
PIT_STOP_SPACING = 1000.0
PIT_STOP_SKIP_THRESHOLD = 20.0

# Run
JOURNEY_DISTANCE = 5000.0
COINS_PER_DISTANCE = 0.2

# Upgrade Tables (level 1 is index 0)
ENGINE_SPEED_LEVELS = [30.0, 40.0, 52.0, 66.0, 82.0]
ENGINE_UPGRADE_COSTS = [200, 450, 750, 1200]
FUEL_TANK_LEVELS = [60.0, 75.0, 92.0, 112.0, 135.0]
FUEL_TANK_UPGRADE_COSTS = [150, 350, 600, 950]
HANDLING_LANE_SPEED_LEVELS = [15.0, 18.0, 21.0, 24.0, 27.0]
HANDLING_RETAIN_LEVELS = [0.5, 0.65, 0.8, 0.9, 1.0]  # Fraction of speed kept while changing lanes
HANDLING_UPGRADE_COSTS = [180, 400, 650, 1000]
