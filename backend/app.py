import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

import config
from domain.exceptions import InvalidGameStateError
from domain.parsing import parse_game_state
from engine.selector import configure_default_selector, default_selector
from engine.space_cache import configure_shared_cache
from services.cache_sweeper import CacheSweeper

app = Flask(__name__)
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(message)s",
)

# Battlesnake's engine calls server-to-server; CORS only matters for browser tooling
CORS(app, resources={r"/*": {"origins": config.CORS_ALLOWED_ORIGINS}})

space_cache = configure_shared_cache(
    ttl_turns=config.SPACE_CACHE_TTL_TURNS,
    idle_seconds=config.SPACE_CACHE_IDLE_SECONDS,
    max_entries=config.SPACE_CACHE_MAX_ENTRIES,
)
cache_sweeper = CacheSweeper(space_cache, interval_seconds=config.SPACE_CACHE_SWEEP_SECONDS)
configure_default_selector(
    max_depth=config.SEARCH_MAX_DEPTH,
    budget_ms=config.MOVE_BUDGET_MS,
    latency_buffer_ms=config.LATENCY_BUFFER_MS,
)


@app.before_request
def log_and_start_services():
    logging.info(f"{request.method} {request.path}")
    cache_sweeper.start()


@app.route("/", methods=["GET"])
def handle_index():
    """Snake appearance and API version."""
    return jsonify({
        "apiversion": "1",
        "author": config.SNAKE_AUTHOR,
        "color": config.SNAKE_COLOR,
        "head": config.SNAKE_HEAD,
        "tail": config.SNAKE_TAIL,
        "version": config.SNAKE_VERSION,
    })


@app.route("/start", methods=["POST"])
def handle_start():
    payload = request.get_json(silent=True) or {}
    game_id = (payload.get("game") or {}).get("id")
    logging.info(f"GAME START {game_id}")
    return jsonify({})


@app.route("/move", methods=["POST"])
def handle_move():
    """
    Decide this turn's move.

    Returns:
    - 200 {"move": ..., "shout": ...}
    - 400 {"error": ...} when the turn description is malformed
    """
    payload = request.get_json(silent=True)
    try:
        state = parse_game_state(payload)
    except InvalidGameStateError as error:
        logging.warning(f"Rejected malformed move request: {error}")
        return jsonify({"error": str(error)}), 400

    decision = default_selector().decide(state)
    return jsonify({"move": decision.move.value, "shout": decision.shout})


@app.route("/end", methods=["POST"])
def handle_end():
    payload = request.get_json(silent=True) or {}
    game_id = (payload.get("game") or {}).get("id")
    logging.info(f"GAME OVER {game_id}")
    return jsonify({})


@app.errorhandler(Exception)
def handle_unexpected_error(error):
    if isinstance(error, HTTPException):
        return error
    logging.error(f"Unhandled error on {request.path}: {error}")
    return jsonify({"error": "Internal server error"}), 500


if __name__ == "__main__":
    cache_sweeper.start()
    app.run(host="0.0.0.0", port=config.PORT, threaded=True)
