"""
Background TTL sweep for the reachable-space cache.

The cache is shared by every game the process serves, so its cleanup runs on
its own schedule and thread instead of piggy-backing on request handling or
on any one game's lifecycle.
"""

import logging
import threading
from typing import Optional

import schedule

from engine.space_cache import ReachableSpaceCache

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL_SECONDS = 30
SCHEDULER_LOOP_SLEEP_SECONDS = 1


class CacheSweeper:
    """Runs `cache.sweep()` every `interval_seconds` on a daemon thread."""

    def __init__(
        self,
        cache: ReachableSpaceCache,
        interval_seconds: int = DEFAULT_SWEEP_INTERVAL_SECONDS,
        loop_sleep_seconds: float = SCHEDULER_LOOP_SLEEP_SECONDS,
    ) -> None:
        self.cache = cache
        self.interval_seconds = self._validated_interval(interval_seconds)
        self.loop_sleep_seconds = loop_sleep_seconds
        self.scheduler = schedule.Scheduler()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @staticmethod
    def _validated_interval(interval_seconds: int) -> int:
        """Ensure we always use a positive sweep interval."""
        if interval_seconds <= 0:
            logger.warning(
                "Cache sweep interval %s is invalid; defaulting to %s seconds.",
                interval_seconds,
                DEFAULT_SWEEP_INTERVAL_SECONDS,
            )
            return DEFAULT_SWEEP_INTERVAL_SECONDS
        return interval_seconds

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sweep_once(self) -> int:
        try:
            evicted = self.cache.sweep()
        except Exception:
            logger.exception("Space cache sweep failed")
            return 0
        logger.info("Space cache sweep: evicted=%s remaining=%s", evicted, len(self.cache))
        return evicted

    def start(self) -> None:
        """Register the job and start the loop. Calling it again is a no-op."""
        with self._lock:
            if self.running:
                return
            self._stop_event.clear()
            self.scheduler.clear()
            self.scheduler.every(self.interval_seconds).seconds.do(self.sweep_once)
            self._thread = threading.Thread(
                target=self._run, name="space-cache-sweeper", daemon=True
            )
            self._thread.start()
        logger.info("Started space cache sweeper (every %s seconds).", self.interval_seconds)

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            thread = self._thread
            self._stop_event.set()
            self._thread = None
        if thread is not None:
            thread.join(timeout)
        self.scheduler.clear()

    def _run(self) -> None:
        while not self._stop_event.wait(self.loop_sleep_seconds):
            self.scheduler.run_pending()
