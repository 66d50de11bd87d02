"""
Move-decision engine.

Safety filtering, reachable-space analysis, path finding, heuristic scoring
and adversarial lookahead, combined by the MoveSelector into one move per turn.
"""

from .safety import SafetyVerdict, is_safe, safe_moves, escape_routes, is_basically_safe
from .space import SpaceReport, reachable_area
from .space_cache import ReachableSpaceCache, shared_cache
from .pathfinding import shortest_path, path_length
from .food import FoodUrgency, assess_food_urgency
from .scoring import HeuristicScorer, ScoreBreakdown
from .lookahead import AdversarialSearch, Deadline
from .selector import MoveSelector, Decision, Phase, best_move

__all__ = [
    'SafetyVerdict', 'is_safe', 'safe_moves', 'escape_routes', 'is_basically_safe',
    'SpaceReport', 'reachable_area',
    'ReachableSpaceCache', 'shared_cache',
    'shortest_path', 'path_length',
    'FoodUrgency', 'assess_food_urgency',
    'HeuristicScorer', 'ScoreBreakdown',
    'AdversarialSearch', 'Deadline',
    'MoveSelector', 'Decision', 'Phase', 'best_move',
]
