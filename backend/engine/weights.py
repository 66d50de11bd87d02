"""
Tunable constants for the heuristic scorer and lookahead.

Keep these in code, not env vars: changing a weight changes how the snake
plays, and that should go through review like any other logic change.
"""

# Survival / sentinels
LOSS_SCORE = -1_000_000.0     # Value of a state where the controlled snake is dead
LOSS_DEPTH_PENALTY = 1_000.0  # Earlier deaths are worse than later ones
ELIMINATION_BONUS = 500.0     # Per opponent eliminated during simulation

# Escape routes
ESCAPE_ROUTE_WEIGHT = 15.0    # Per immediately safe neighbour (0-4)
NO_ESCAPE_PENALTY = 150.0     # Position with zero safe neighbours

# Space control
SPACE_WEIGHT = 2.0            # Per reachable cell
SPACE_CAP_FACTOR = 4          # Reachable cells beyond length * factor add nothing
SPACE_COMFORT_BONUS = 60.0    # Area at least twice our length
SPACE_TRAPPED_PENALTY = 400.0  # Area smaller than our length
DEAD_END_PENALTY = 80.0       # Area below the dead-end threshold

# Food seeking (per FoodUrgency level)
FOOD_WEIGHTS = {
    "none": 0.0,
    "balanced": 1.5,
    "urgent": 4.0,
    "critical": 10.0,
}
CRITICAL_HEALTH = 25
LOW_HEALTH = 40
MID_HEALTH = 70
PREFERRED_LENGTH = 8
FOOD_SAFETY_RADIUS = 4        # Larger snake closer than this blocks food seeking
CONTESTED_FOOD_FACTOR = 0.5   # Multiplier when a bigger rival is closer to the food

# Trapping
TRAP_BONUS = 25.0             # Per opponent left with <= 1 safe move

# Deception
APPARENT_TRAP_BONUS = 5.0     # Hugging our own body / a wall while verified safe
BAIT_BONUS = 3.0              # Contesting a cell a shorter opponent can reach
HUG_SEGMENTS = 2              # Own-body neighbours needed to look risky

# Aggression
AGGRESSION_MIN_HEALTH = 40
AGGRESSION_RADIUS = 6
AGGRESSION_WEIGHT = 6.0       # Per step closer to a shorter opponent's head
AVOIDANCE_WEIGHT = 10.0       # Per step closer to a longer opponent's head

# Center control
CENTER_WEIGHT = 8.0           # Divided by (1 + distance to center)

# Lookahead
DEFAULT_SEARCH_DEPTH = 4      # Plies (self + opponent = 2 plies)
