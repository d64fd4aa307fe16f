"""Region timestamp sources.

Timestamps are milliseconds since the epoch shifted left by 12 bits, leaving
room for 4096 distinct values per millisecond.
"""

import logging
import threading
import time
from typing import Callable

from ..config.constants import TIMESTAMPS_NAMESPACE
from ..entities.namespace import CacheNamespace
from ..entities.protocols import CacheStoreAdapter
from .store_guard import store_operation

logger = logging.getLogger(__name__)

BIN_DIGITS = 12
ONE_MS = 1 << BIN_DIGITS
DEFAULT_TIMEOUT_MS = 60_000


def clock_timestamp(clock: Callable[[], float] = time.time) -> int:
    """Convert the current clock reading into timestamp units."""
    return int(clock() * 1000) << BIN_DIGITS


class SystemClockTimestamper:
    """In-process timestamper, strictly increasing per instance."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            candidate = clock_timestamp(self._clock)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate

    @property
    def timeout(self) -> int:
        return DEFAULT_TIMEOUT_MS * ONE_MS


class StoreCounterTimestamper:
    """Timestamper shared by every process talking to the same store.

    Uses the store's atomic counter so two processes never hand out the same
    timestamp. When the counter lags behind the clock (e.g. after a store
    restart) it is moved forward to the clock.
    """

    TIMESTAMP_KEY = "timestamp"

    def __init__(
        self,
        store: CacheStoreAdapter,
        clock: Callable[[], float] = time.time,
        expiry_seconds: int = 0
    ):
        self._store = store
        self._clock = clock
        self._expiry_seconds = expiry_seconds
        self._namespace = CacheNamespace(TIMESTAMPS_NAMESPACE)

    def next(self) -> int:
        now = clock_timestamp(self._clock)
        with store_operation("increase_counter", self._namespace, self.TIMESTAMP_KEY):
            counter = self._store.increase_counter(
                self._namespace, self.TIMESTAMP_KEY, 1, now, self._expiry_seconds
            )
            if counter < now:
                logger.debug(f"Timestamp counter {counter} behind clock {now}, moving forward")
                counter = self._store.increase_counter(
                    self._namespace, self.TIMESTAMP_KEY, now - counter, now, self._expiry_seconds
                )
        return counter

    @property
    def timeout(self) -> int:
        return DEFAULT_TIMEOUT_MS * ONE_MS
