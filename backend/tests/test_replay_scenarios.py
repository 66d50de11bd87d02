"""
Tests for cli/replay_scenarios.py - the scenario replay harness.
"""

import json
import pytest
import sys
import os
from unittest.mock import MagicMock

import requests

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cli.replay_scenarios import (
    BUILTIN_SCENARIOS,
    classify,
    load_scenarios,
    main,
    offline_move,
    online_mover,
    replay,
    with_game_id,
)

from builders import move_payload, snake_payload


def scenario_payload():
    enemy = snake_payload("enemy", [(7, 5), (7, 4), (7, 3), (7, 2)])
    return move_payload(others=[enemy])


class TestClassify:
    """Tests for classify."""

    def test_safe(self):
        assert classify(scenario_payload(), "up") == "safe"

    def test_unsafe_when_alternative_existed(self):
        assert classify(scenario_payload(), "right") == "unsafe"

    def test_forced_when_enclosed(self):
        enclosed = next(s for s in BUILTIN_SCENARIOS if s["name"] == "fully enclosed")
        assert classify(enclosed["data"], "up") == "forced"


class TestReplay:
    """Tests for replay totals."""

    def test_each_repetition_gets_its_own_game_id(self):
        seen = []

        def mover(payload):
            seen.append(payload["game"]["id"])
            return "up"

        replay([{"name": "s", "data": scenario_payload()}], 3, mover)
        assert len(set(seen)) == 3

    def test_with_game_id_does_not_touch_the_template(self):
        payload = scenario_payload()
        copy = with_game_id(payload, "other")
        assert copy["game"]["id"] == "other"
        assert payload["game"]["id"] == "game-1"

    def test_counts_outcomes(self):
        moves = iter(["up", "right", "sideways"])
        totals = replay([{"name": "s", "data": scenario_payload()}], 3, lambda payload: next(moves))
        assert (totals.total, totals.safe, totals.unsafe, totals.errors) == (3, 1, 1, 1)
        assert not totals.ok
        assert len(totals.failures) == 2

    def test_request_errors_are_counted(self):
        def mover(payload):
            raise requests.ConnectionError("refused")

        totals = replay([{"name": "s", "data": scenario_payload()}], 2, mover)
        assert totals.errors == 2

    def test_builtin_scenarios_offline(self):
        totals = replay(BUILTIN_SCENARIOS, 1, offline_move)
        assert totals.ok
        assert totals.forced == 1
        assert totals.safe == len(BUILTIN_SCENARIOS) - 1


class TestOnlineMover:
    """Tests for the HTTP mover."""

    def test_posts_to_move_endpoint(self):
        session = MagicMock()
        session.post.return_value.json.return_value = {"move": "left", "shout": ""}
        mover = online_mover("http://localhost:8000/", session=session)

        assert mover({"turn": 1}) == "left"
        url = session.post.call_args[0][0]
        assert url == "http://localhost:8000/move"
        session.post.return_value.raise_for_status.assert_called_once()


class TestMain:
    """Tests for the command line entry point."""

    def test_offline_run_succeeds(self):
        assert main(["--offline", "--repeat", "1"]) == 0

    def test_scenario_file(self, tmp_path):
        path = tmp_path / "scenarios.json"
        path.write_text(json.dumps([{"name": "from file", "data": scenario_payload()}]))
        assert main(["--offline", "--repeat", "2", "--scenario", str(path)]) == 0

    def test_scenario_file_must_be_a_list(self, tmp_path):
        path = tmp_path / "scenarios.json"
        path.write_text(json.dumps({"name": "x"}))
        with pytest.raises(SystemExit):
            load_scenarios(path)
