"""
Id sources for accounts and recipes.

Production ids come from the wall clock in milliseconds. Tests inject a
counter so ids are deterministic.
"""

import threading
import time
from datetime import datetime
from typing import Callable, Optional


class ClockIdSource:
    """Millisecond timestamp ids, bumped so each id is strictly greater than the last"""

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate


class CounterIdSource:
    """Sequential ids starting at a fixed value"""

    def __init__(self, start: int = 1000):
        self._next = start
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value


def system_now() -> datetime:
    """Default clock for created/added timestamps"""
    return datetime.now()
