"""
Process-wide memo for reachable-space results.

Concurrent games share one cache, so every key carries the game id along
with the turn, the mover, the probed position and the board occupancy.
Entries are evicted by a turn-based TTL (relative to the newest turn seen
for the same game), by idle time for games that simply stop sending turns,
and by a hard size bound. Eviction is driven by `sweep()`, which the cache
sweeper service runs on its own schedule.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, NamedTuple, Optional, Tuple

from domain.geometry import Point

logger = logging.getLogger(__name__)

DEFAULT_TTL_TURNS = 2
DEFAULT_IDLE_SECONDS = 120.0
DEFAULT_MAX_ENTRIES = 50_000


class SpaceCacheKey(NamedTuple):
    game_id: str
    turn: int
    mover_id: str
    position: Point
    occupancy: Tuple[Tuple[Point, ...], ...]


@dataclass
class SpaceCacheEntry:
    area: int
    dead_end: bool
    computed_at: int
    stored_at: float


class ReachableSpaceCache:
    """Thread-safe TTL cache of (area, dead_end) answers."""

    def __init__(
        self,
        ttl_turns: int = DEFAULT_TTL_TURNS,
        idle_seconds: float = DEFAULT_IDLE_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_turns = ttl_turns
        self.idle_seconds = idle_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: "OrderedDict[SpaceCacheKey, SpaceCacheEntry]" = OrderedDict()
        self._latest_turn: Dict[str, int] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _is_stale(self, entry: SpaceCacheEntry, game_id: str, now: float) -> bool:
        latest = self._latest_turn.get(game_id, entry.computed_at)
        if latest - entry.computed_at > self.ttl_turns:
            return True
        return now - entry.stored_at > self.idle_seconds

    def get(self, key: SpaceCacheKey) -> Optional[SpaceCacheEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            if self._is_stale(entry, key.game_id, self._clock()):
                del self._entries[key]
                self.misses += 1
                return None
            self.hits += 1
            return entry

    def put(self, key: SpaceCacheKey, area: int, dead_end: bool) -> None:
        with self._lock:
            latest = self._latest_turn.get(key.game_id)
            if latest is None or key.turn > latest:
                self._latest_turn[key.game_id] = key.turn
            self._entries[key] = SpaceCacheEntry(
                area=area,
                dead_end=dead_end,
                computed_at=key.turn,
                stored_at=self._clock(),
            )
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def sweep(self) -> int:
        """Evict every stale entry. Returns the number of entries removed."""
        with self._lock:
            now = self._clock()
            stale = [
                key for key, entry in self._entries.items()
                if self._is_stale(entry, key.game_id, now)
            ]
            for key in stale:
                del self._entries[key]

            live_games = {key.game_id for key in self._entries}
            for game_id in list(self._latest_turn):
                if game_id not in live_games:
                    del self._latest_turn[game_id]

        if stale:
            logger.debug("Space cache sweep evicted %s entries", len(stale))
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._latest_turn.clear()
            self.hits = 0
            self.misses = 0


_shared_cache = ReachableSpaceCache()


def shared_cache() -> ReachableSpaceCache:
    """The process-wide cache used by default."""
    return _shared_cache


def configure_shared_cache(
    ttl_turns: int = DEFAULT_TTL_TURNS,
    idle_seconds: float = DEFAULT_IDLE_SECONDS,
    max_entries: int = DEFAULT_MAX_ENTRIES,
) -> ReachableSpaceCache:
    """Apply configured limits to the shared cache in place."""
    with _shared_cache._lock:
        _shared_cache.ttl_turns = ttl_turns
        _shared_cache.idle_seconds = idle_seconds
        _shared_cache.max_entries = max_entries
    return _shared_cache
