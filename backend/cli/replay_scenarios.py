#!/usr/bin/env python3
"""Replay canned /move payloads against the snake and check every answer.

Each scenario is replayed `--repeat` times, each time under a fresh game id,
either against a running server (default) or in-process with `--offline`.
Every returned move is re-checked with the safety evaluator:

- safe:    the move's target cell passes the full safety check
- forced:  the move is unsafe but no safe move existed (emergency turns)
- unsafe:  the move is unsafe although a safe one existed
- error:   the request failed or returned something that is not a move

The exit status is 1 if any unsafe move or error was seen.

Usage:
    python backend/cli/replay_scenarios.py --offline --repeat 20
    python backend/cli/replay_scenarios.py --url http://localhost:8000 --scenario my_turns.json
"""

import argparse
import copy
import json
import logging
import os
import sys
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import Move
from domain.exceptions import InvalidGameStateError
from domain.parsing import parse_game_state
from engine.safety import is_safe, safe_moves
from engine.selector import best_move

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:8000"
REQUEST_TIMEOUT_SECONDS = 5


def snake_payload(snake_id: str, body: Sequence[Tuple[int, int]], health: int = 100) -> Dict[str, Any]:
    points = [{"x": x, "y": y} for x, y in body]
    return {
        "id": snake_id,
        "name": snake_id,
        "health": health,
        "body": points,
        "head": points[0],
        "length": len(points),
    }


def turn_payload(
    you: Dict[str, Any],
    others: Sequence[Dict[str, Any]] = (),
    food: Sequence[Tuple[int, int]] = (),
    width: int = 11,
    height: int = 11,
    turn: int = 1,
) -> Dict[str, Any]:
    return {
        "game": {"id": "replay", "timeout": 500},
        "turn": turn,
        "board": {
            "width": width,
            "height": height,
            "food": [{"x": x, "y": y} for x, y in food],
            "snakes": [you, *others],
        },
        "you": you,
    }


BUILTIN_SCENARIOS: List[Dict[str, Any]] = [
    {
        "name": "side by side with a longer enemy",
        "data": turn_payload(
            snake_payload("you", [(5, 5), (5, 4), (5, 3)]),
            [snake_payload("enemy", [(7, 5), (7, 4), (7, 3), (7, 2)])],
            food=[(9, 9)],
        ),
    },
    {
        "name": "wall corner",
        "data": turn_payload(
            snake_payload("you", [(0, 10), (1, 10), (2, 10)], health=60),
            [snake_payload("enemy", [(8, 2), (8, 1), (8, 0)])],
            food=[(5, 5)],
            turn=12,
        ),
    },
    {
        "name": "basic safety",
        "data": turn_payload(
            snake_payload("you", [(1, 1), (1, 2), (1, 3)]),
            [snake_payload("enemy", [(2, 1), (2, 2), (2, 3)])],
            food=[(5, 5)],
        ),
    },
    {
        "name": "fully enclosed",
        "data": turn_payload(
            snake_payload("you", [(0, 0), (0, 1), (0, 2)], health=30),
            [snake_payload("enemy", [(1, 0), (1, 1), (1, 2), (1, 3)])],
            food=[(6, 6)],
            turn=40,
        ),
    },
]


@dataclass
class ReplayTotals:
    total: int = 0
    safe: int = 0
    forced: int = 0
    unsafe: int = 0
    errors: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.unsafe == 0 and self.errors == 0


def load_scenarios(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON list of {"name", "data"} objects."""
    with path.open("r", encoding="utf-8") as f:
        scenarios = json.load(f)
    if not isinstance(scenarios, list):
        raise SystemExit(f"{path} must contain a JSON list of scenarios")
    for i, scenario in enumerate(scenarios):
        if not isinstance(scenario, dict) or "data" not in scenario:
            raise SystemExit(f"Scenario #{i} in {path} has no 'data' payload")
        scenario.setdefault("name", f"scenario {i}")
    return scenarios


def with_game_id(payload: Dict[str, Any], game_id: str) -> Dict[str, Any]:
    payload = copy.deepcopy(payload)
    payload.setdefault("game", {})["id"] = game_id
    return payload


def online_mover(base_url: str, session: Optional[requests.Session] = None) -> Callable[[Dict[str, Any]], str]:
    http = session or requests.Session()
    url = base_url.rstrip("/") + "/move"

    def request_move(payload: Dict[str, Any]) -> str:
        response = http.post(url, json=payload, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        return response.json()["move"]

    return request_move


def offline_move(payload: Dict[str, Any]) -> str:
    return best_move(parse_game_state(payload)).value


def classify(payload: Dict[str, Any], move_name: str) -> str:
    """Return 'safe', 'forced' or 'unsafe' for a move answered to `payload`."""
    state = parse_game_state(payload)
    move = Move(move_name)
    if is_safe(state.you.head.moved(move), state):
        return "safe"
    if not safe_moves(state):
        return "forced"
    return "unsafe"


def replay(
    scenarios: Sequence[Dict[str, Any]],
    repeat: int,
    mover: Callable[[Dict[str, Any]], str],
) -> ReplayTotals:
    totals = ReplayTotals()
    for round_index in range(repeat):
        for scenario in scenarios:
            totals.total += 1
            name = scenario["name"]
            game_id = f"replay-{round_index}-{uuid.uuid4().hex[:8]}"
            payload = with_game_id(scenario["data"], game_id)

            try:
                move_name = mover(payload)
                outcome = classify(payload, move_name)
            except (requests.RequestException, InvalidGameStateError, KeyError, ValueError) as exc:
                totals.errors += 1
                totals.failures.append(f"{name} [{game_id}]: error {exc}")
                logger.warning("%s [%s]: error %s", name, game_id, exc)
                continue

            if outcome == "safe":
                totals.safe += 1
            elif outcome == "forced":
                totals.forced += 1
            else:
                totals.unsafe += 1
                totals.failures.append(f"{name} [{game_id}]: unsafe move {move_name}")
            logger.debug("%s [%s]: %s (%s)", name, game_id, move_name, outcome)
    return totals


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Replay turn payloads against the snake and check every move for safety",
    )
    parser.add_argument("--url", default=DEFAULT_URL, help=f"Server base URL (default: {DEFAULT_URL})")
    parser.add_argument("--repeat", type=int, default=10, help="Times to replay each scenario (default: 10)")
    parser.add_argument("--offline", action="store_true", help="Decide in-process instead of over HTTP")
    parser.add_argument("--scenario", type=Path, help="JSON file with a list of {name, data} scenarios")
    parser.add_argument("--verbose", action="store_true", help="Log every move")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    scenarios = load_scenarios(args.scenario) if args.scenario else BUILTIN_SCENARIOS
    mover = offline_move if args.offline else online_mover(args.url)
    repeat = max(1, args.repeat)

    logger.info(
        "Replaying %d scenarios x %d (%s)",
        len(scenarios), repeat, "offline" if args.offline else args.url,
    )
    totals = replay(scenarios, repeat, mover)

    for failure in totals.failures:
        logger.info("  %s", failure)
    logger.info("")
    logger.info("Total:  %d", totals.total)
    logger.info("Safe:   %d", totals.safe)
    logger.info("Forced: %d", totals.forced)
    logger.info("Unsafe: %d", totals.unsafe)
    logger.info("Errors: %d", totals.errors)

    return 0 if totals.ok else 1


if __name__ == "__main__":
    sys.exit(main())
