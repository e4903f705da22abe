"""
Meowbrain - Constants
Timing, bounds and default rates shared by the decision engine and its host.
"""

# Value ranges
TRAIT_MIN = 0.0
TRAIT_MAX = 1.0
MOTIVATION_MIN = 0.0
MOTIVATION_MAX = 1.0

# Short-term memory
MAX_VISITED_POSITIONS = 10
MAX_PREVIOUS_BEHAVIORS = 5
MAX_BOUNDARY_HITS = 5.0
BOUNDARY_HIT_DECAY = 0.5  # per cycle without a collision
RECENT_BEHAVIOR_WINDOW = 3
RECENT_BEHAVIOR_PENALTY = 0.7

# Boundary stress
BOUNDARY_STRESS_THRESHOLD = 2.0

# Decision timing
DECISION_INTERVAL_MIN_S = 2.0
DECISION_INTERVAL_MAX_S = 5.0

# Motivation growth (per second)
DEFAULT_REST_DECAY = 0.001
DEFAULT_STIMULATION_DECAY = 0.002
DEFAULT_EXPLORATION_DECAY = 0.0015

# Baseline motivation for a new agent
DEFAULT_INITIAL_REST = 0.2
DEFAULT_INITIAL_STIMULATION = 0.3
DEFAULT_INITIAL_EXPLORATION = 0.4

# Interactions
INTEREST_THRESHOLD = 0.5
INTEREST_DISTANCE_FALLOFF_PX = 500.0

# Default world size used when boundaries are open
DEFAULT_WORLD_WIDTH = 1000.0
DEFAULT_WORLD_HEIGHT = 1000.0

DEFAULT_PERSONALITY_PRESET = "balanced"
