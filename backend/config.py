"""
Process configuration, read once from the environment (and a local .env).

Heuristic weights are deliberately not here; see engine/weights.py.
"""

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _sanitize_env_value(value: Optional[str]) -> Optional[str]:
    """
    Clean up env-provided strings that may include surrounding quotes or whitespace.
    """
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) >= 2 and (
        (cleaned[0] == '"' and cleaned[-1] == '"') or (cleaned[0] == "'" and cleaned[-1] == "'")
    ):
        cleaned = cleaned[1:-1].strip()
    return cleaned


def env_str(name: str, default: str) -> str:
    value = _sanitize_env_value(os.getenv(name))
    return value if value else default


def env_int(name: str, default: int) -> int:
    raw = _sanitize_env_value(os.getenv(name))
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer; using default %s.", name, raw, default)
        return default


def env_list(name: str, default: List[str]) -> List[str]:
    raw = _sanitize_env_value(os.getenv(name))
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# Server
PORT = env_int("PORT", 8000)
LOG_LEVEL = env_str("LOG_LEVEL", "INFO").upper()
CORS_ALLOWED_ORIGINS = env_list(
    "CORS_ALLOWED_ORIGINS",
    ["http://localhost:3000", "http://127.0.0.1:3000", "https://play.battlesnake.com"],
)

# Appearance (GET /)
SNAKE_AUTHOR = env_str("SNAKE_AUTHOR", "")
SNAKE_COLOR = env_str("SNAKE_COLOR", "#FF0000")
SNAKE_HEAD = env_str("SNAKE_HEAD", "silly")
SNAKE_TAIL = env_str("SNAKE_TAIL", "bolt")
SNAKE_VERSION = env_str("SNAKE_VERSION", "0.1.0")

# Decision engine
MOVE_BUDGET_MS = env_int("MOVE_BUDGET_MS", 350)
LATENCY_BUFFER_MS = env_int("LATENCY_BUFFER_MS", 150)
SEARCH_MAX_DEPTH = env_int("SEARCH_MAX_DEPTH", 4)

# Reachable-space cache
SPACE_CACHE_TTL_TURNS = env_int("SPACE_CACHE_TTL_TURNS", 2)
SPACE_CACHE_IDLE_SECONDS = env_int("SPACE_CACHE_IDLE_SECONDS", 120)
SPACE_CACHE_MAX_ENTRIES = env_int("SPACE_CACHE_MAX_ENTRIES", 50_000)
SPACE_CACHE_SWEEP_SECONDS = env_int("SPACE_CACHE_SWEEP_SECONDS", 30)
