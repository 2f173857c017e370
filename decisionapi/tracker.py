"""Optional timing of the steps of a request."""

from __future__ import annotations

import logging
import os
import threading
import time
from dataclasses import dataclass, field

_log = logging.getLogger(__name__)


@dataclass
class Tracker:
    """Records the time elapsed since creation at named steps, when enabled."""

    enabled: bool = False
    start_time: float = field(default_factory=time.perf_counter)
    entries: list[tuple[str, float]] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def time_track(self, message: str) -> None:
        """Record the seconds elapsed so far under ``message``."""
        if not self.enabled:
            return
        elapsed = time.perf_counter() - self.start_time
        with self._lock:
            self.entries.append((message, elapsed))
        _log.info("%s: %.3f ms", message, elapsed * 1000)


def new_tracker() -> Tracker:
    """Create a tracker, enabled when TRACK_PERFORMANCE is "true"."""
    return Tracker(enabled=os.environ.get("TRACK_PERFORMANCE") == "true")