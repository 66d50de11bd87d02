"""
Move selector - the engine's entry point.

One decision per turn moves through three phases:
  EVALUATING  enumerate the four moves, drop unsafe ones, rank the rest
  COMMITTED   the best ranked candidate was chosen
  EMERGENCY   nothing survived (or evaluation failed); fall back to a
              minimal bounds/body check, then to DEFAULT_MOVE

The selector keeps no state between turns; the only shared resource it
touches is the reachable-space memo behind the scorer.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from domain.constants import DEFAULT_MOVE, MOVE_PRIORITY, Move
from domain.game_state import GameState
from domain.geometry import Point

from . import weights
from .food import assess_food_urgency
from .lookahead import AdversarialSearch, Deadline
from .safety import SafetyVerdict, is_basically_safe, is_safe
from .scoring import HeuristicScorer

logger = logging.getLogger(__name__)

# Never plan for less than this, even when the game's timeout is tiny
MIN_BUDGET_MS = 10
DEFAULT_BUDGET_MS = 350
DEFAULT_LATENCY_BUFFER_MS = 150


class Phase(str, Enum):
    EVALUATING = "evaluating"
    COMMITTED = "committed"
    EMERGENCY = "emergency"


@dataclass
class Candidate:
    move: Move
    position: Point
    verdict: SafetyVerdict
    score: Optional[float] = None


@dataclass
class Decision:
    move: Move
    phase: Phase
    score: Optional[float] = None
    depth: int = 0
    candidates: List[Candidate] = field(default_factory=list)
    shout: str = ""

    @property
    def rejected(self) -> Dict[str, str]:
        return {c.move.value: c.verdict.reason for c in self.candidates if not c.verdict.safe}


class MoveSelector:
    """
    Picks one move per turn.

    Args:
        scorer: heuristic scorer (default: one backed by the shared space cache)
        max_depth: lookahead depth in plies; 0 disables lookahead
        budget_ms: upper bound on thinking time; None means depth-bounded only,
            which makes decisions fully deterministic
        latency_buffer_ms: time reserved out of the game's timeout for the network
    """

    def __init__(
        self,
        scorer: Optional[HeuristicScorer] = None,
        max_depth: int = weights.DEFAULT_SEARCH_DEPTH,
        budget_ms: Optional[float] = DEFAULT_BUDGET_MS,
        latency_buffer_ms: float = DEFAULT_LATENCY_BUFFER_MS,
    ):
        self.scorer = scorer or HeuristicScorer()
        self.search = AdversarialSearch(self.scorer, max_depth=max_depth)
        self.max_depth = max_depth
        self.budget_ms = budget_ms
        self.latency_buffer_ms = latency_buffer_ms

    def budget_for(self, state: GameState) -> Optional[float]:
        if self.budget_ms is None:
            return None
        return max(MIN_BUDGET_MS, min(self.budget_ms, state.timeout_ms - self.latency_buffer_ms))

    def decide(self, state: GameState) -> Decision:
        """Return a Decision; never raises for a state that parsed successfully."""
        try:
            decision = self._evaluate(state)
        except Exception:
            logger.exception(
                "Move evaluation failed for game %s turn %s; using emergency move",
                state.game_id, state.turn,
            )
            return self._emergency(state, reason="evaluation error")

        if decision is None:
            return self._emergency(state, reason="no safe moves")

        logger.info(
            "Game %s turn %s: %s (score=%.1f depth=%s rejected=%s)",
            state.game_id, state.turn, decision.move.value,
            decision.score, decision.depth, decision.rejected,
        )
        return decision

    # -- Evaluating -------------------------------------------------------

    def _evaluate(self, state: GameState) -> Optional[Decision]:
        deadline = Deadline(self.budget_for(state))
        you = state.you

        candidates = []
        for move in MOVE_PRIORITY:
            position = you.head.moved(move)
            candidates.append(Candidate(move, position, is_safe(position, state, you)))

        survivors = [c for c in candidates if c.verdict.safe]
        for c in candidates:
            if not c.verdict.safe:
                logger.debug("Rejected %s: %s", c.move.value, c.verdict.reason)
        if not survivors:
            return None

        urgency = assess_food_urgency(state)
        for c in survivors:
            c.score = self.scorer.score(c.position, state, urgency)

        depth = 0
        if self.max_depth > 0 and len(survivors) > 1:
            result = self.search.search(state, [c.move for c in survivors], deadline, urgency)
            if result.values:
                depth = result.depth
                for c in survivors:
                    c.score = result.values[c.move]

        # Highest score wins; MOVE_PRIORITY order breaks ties
        best = survivors[0]
        for c in survivors[1:]:
            if c.score > best.score:
                best = c

        return Decision(
            move=best.move,
            phase=Phase.COMMITTED,
            score=best.score,
            depth=depth,
            candidates=candidates,
            shout=self._shout(best.score, depth),
        )

    @staticmethod
    def _shout(score: float, depth: int) -> str:
        if score <= weights.LOSS_SCORE / 2:
            return "it was nice knowing you"
        if depth:
            return f"thought {depth} plies ahead"
        return "going with my gut"

    # -- Emergency --------------------------------------------------------

    def _emergency(self, state: GameState, reason: str) -> Decision:
        move = DEFAULT_MOVE
        try:
            head = state.you.head
            for candidate in MOVE_PRIORITY:
                if is_basically_safe(head.moved(candidate), state):
                    move = candidate
                    break
        except Exception:
            logger.exception("Emergency scan failed for game %s", state.game_id)

        logger.warning(
            "Game %s turn %s: emergency move %s (%s)",
            state.game_id, state.turn, move.value, reason,
        )
        return Decision(move=move, phase=Phase.EMERGENCY, score=-math.inf, shout=f"emergency: {reason}")


_default_selector = MoveSelector()


def default_selector() -> MoveSelector:
    return _default_selector


def configure_default_selector(
    max_depth: int = weights.DEFAULT_SEARCH_DEPTH,
    budget_ms: Optional[float] = DEFAULT_BUDGET_MS,
    latency_buffer_ms: float = DEFAULT_LATENCY_BUFFER_MS,
) -> MoveSelector:
    """Replace the module-level selector used by best_move (called once at startup)."""
    global _default_selector
    _default_selector = MoveSelector(
        max_depth=max_depth,
        budget_ms=budget_ms,
        latency_buffer_ms=latency_buffer_ms,
    )
    return _default_selector


def best_move(state: GameState) -> Move:
    """The engine's top-level entry point: one safe-as-possible move for `state`."""
    return _default_selector.decide(state).move
