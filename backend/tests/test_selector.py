"""
Tests for engine/selector.py - the per-turn move decision and its emergency fallback.
"""

import math
import pytest
import sys
import os
from unittest.mock import Mock

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import MOVE_PRIORITY, Move
from domain.exceptions import EngineInvariantError
from engine.safety import escape_routes, is_safe
from engine.scoring import HeuristicScorer
from engine.selector import MIN_BUDGET_MS, MoveSelector, Phase, best_move

from builders import enclosed_state, make_snake, make_state, scenario_state


def selector(max_depth: int = 3) -> MoveSelector:
    """Depth-bounded selector with a private cache, so decisions are reproducible."""
    return MoveSelector(HeuristicScorer(use_cache=False), max_depth=max_depth, budget_ms=None)


class TestDecide:
    """Tests for MoveSelector.decide."""

    def test_side_by_side_scenario_is_safe_and_keeps_escape_routes(self):
        state = scenario_state()
        decision = selector().decide(state)

        assert decision.phase is Phase.COMMITTED
        assert decision.move in (Move.UP, Move.LEFT)
        position = state.you.head.moved(decision.move)
        assert is_safe(position, state)
        assert escape_routes(position, state) >= 2

    def test_rejected_moves_are_reported(self):
        decision = selector().decide(scenario_state())
        assert decision.rejected == {"down": "self", "right": "head_to_head"}

    def test_deterministic(self):
        state = scenario_state()
        assert selector().decide(state).move == selector().decide(state).move

    def test_single_safe_move(self):
        # Top-left corner with the neck to the right: only down survives
        enemy = make_snake("enemy", [(8, 2), (8, 1), (8, 0)])
        state = make_state([(0, 10), (1, 10), (2, 10)], others=[enemy], food=[(5, 5)], health=60)
        decision = selector().decide(state)
        assert decision.move is Move.DOWN
        assert decision.depth == 0

    def test_hungry_snake_takes_adjacent_food(self):
        state = make_state([(5, 5), (5, 4), (5, 3)], food=[(4, 5)], health=10)
        assert selector(max_depth=0).decide(state).move is Move.LEFT

    def test_head_to_head_against_shorter_snake_is_allowed(self):
        prey = make_snake("prey", [(7, 5), (8, 5)])
        state = make_state([(5, 5), (5, 4), (5, 3)], others=[prey])
        decision = selector().decide(state)
        assert "right" not in decision.rejected

    def test_avoids_dead_end(self):
        left = make_snake("left", [(0, 0)], health=0)
        right = make_snake("right", [(2, 0)], health=0)
        state = make_state([(1, 1), (2, 1), (3, 1)], others=[left, right], width=5, height=5)
        assert selector().decide(state).move is not Move.DOWN

    @pytest.mark.parametrize("turn", [1, 2, 3])
    def test_every_decision_is_safe_along_a_game(self, turn):
        state = scenario_state()
        sel = selector(max_depth=2)
        for _ in range(turn):
            move = sel.decide(state).move
            assert is_safe(state.you.head.moved(move), state)
            state = state.move_snake("you", move).next_turn()


class TestEmergency:
    """Tests for the emergency fallback."""

    def test_enclosed_snake_still_answers(self):
        decision = selector().decide(enclosed_state())
        assert decision.phase is Phase.EMERGENCY
        assert decision.move in MOVE_PRIORITY
        assert decision.move is Move.UP
        assert decision.score == -math.inf

    def test_basic_check_picks_first_open_cell(self):
        # Every neighbour is a head-to-head risk, but (5, 6) is at least empty
        big = make_snake("big", [(5, 7), (5, 8), (5, 9), (5, 10)])
        left = make_snake("left", [(3, 5), (2, 5), (1, 5), (0, 5)])
        right = make_snake("right", [(7, 5), (8, 5), (9, 5), (10, 5)])
        state = make_state([(5, 5), (5, 4), (5, 3)], others=[big, left, right])
        decision = selector().decide(state)
        assert decision.phase is Phase.EMERGENCY
        assert decision.move is Move.UP

    def test_scorer_failure_falls_back(self):
        scorer = Mock(spec=HeuristicScorer)
        scorer.score.side_effect = EngineInvariantError("broken")
        decision = MoveSelector(scorer, budget_ms=None).decide(scenario_state())
        assert decision.phase is Phase.EMERGENCY
        assert decision.move is Move.UP

    def test_missing_controlled_snake_falls_back_to_default(self):
        state = scenario_state().eliminate(["you"])
        decision = selector().decide(state)
        assert decision.phase is Phase.EMERGENCY
        assert decision.move is Move.UP


class TestBudget:
    """Tests for the per-turn thinking budget."""

    def test_budget_capped_by_configured_value(self):
        sel = MoveSelector(budget_ms=350, latency_buffer_ms=150)
        assert sel.budget_for(make_state([(5, 5)], timeout_ms=1000)) == 350

    def test_budget_leaves_room_for_latency(self):
        sel = MoveSelector(budget_ms=350, latency_buffer_ms=150)
        assert sel.budget_for(make_state([(5, 5)], timeout_ms=300)) == 150

    def test_budget_floor(self):
        sel = MoveSelector(budget_ms=350, latency_buffer_ms=150)
        assert sel.budget_for(make_state([(5, 5)], timeout_ms=100)) == MIN_BUDGET_MS

    def test_no_budget(self):
        assert MoveSelector(budget_ms=None).budget_for(make_state([(5, 5)])) is None


class TestBestMove:
    """Tests for the module-level entry point."""

    def test_returns_a_safe_move(self):
        state = scenario_state(game_id="best-move")
        move = best_move(state)
        assert isinstance(move, Move)
        assert is_safe(state.you.head.moved(move), state)

    def test_enclosed_returns_a_move(self):
        assert best_move(enclosed_state()) in MOVE_PRIORITY