"""In-memory store adapter.

Single-process stand-in for a memcached-like store. Values are pickled on
write and unpickled on read, so cached objects go through the same
serialization they would on the wire.
"""

import logging
import pickle
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from ..entities.namespace import CacheNamespace
from .base import NamespacedStoreAdapter

logger = logging.getLogger(__name__)


@dataclass
class MemoryStoreEntry:
    """Stored value with its absolute expiry time."""

    value: Any
    expires_at: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class MemoryStoreAdapter(NamespacedStoreAdapter):
    """Thread-safe dictionary store with expiry and namespace sequences."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        super().__init__()
        self._clock = clock
        self._entries: Dict[str, MemoryStoreEntry] = {}
        self._lock = threading.RLock()

    def _connect(self, properties: Mapping[str, str]) -> None:
        logger.info(f"Memory cache store initialized (key prefix: {self.key_prefix!r})")

    def destroy(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("Memory cache store destroyed")

    def get(self, namespace: CacheNamespace, key: str) -> Optional[Any]:
        store_key = self.namespaced_key(namespace, key)
        with self._lock:
            entry = self._live_entry(store_key)
        if entry is None:
            return None

        try:
            return pickle.loads(entry.value)
        except (pickle.UnpicklingError, AttributeError, ImportError, EOFError, TypeError) as e:
            logger.warning(f"Cannot deserialize cached value {store_key}, treating as miss: {e}")
            return None

    def set(self, namespace: CacheNamespace, key: str, value: Any, expiry_seconds: int) -> None:
        data = pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)
        store_key = self.namespaced_key(namespace, key)
        with self._lock:
            self._entries[store_key] = MemoryStoreEntry(data, self._expires_at(expiry_seconds))

    def delete(self, namespace: CacheNamespace, key: str) -> None:
        store_key = self.namespaced_key(namespace, key)
        with self._lock:
            self._entries.pop(store_key, None)

    def evict_all(self, namespace: CacheNamespace) -> None:
        with self._lock:
            if namespace.is_query_region:
                sequence = self._sequence(self.sequence_key(namespace)) + 1
                self._entries[self.sequence_key(namespace)] = MemoryStoreEntry(sequence)
                logger.info(f"Namespace [{namespace}] sequence increased to {sequence}")
                return

            prefix = self.namespace_prefix(namespace)
            stale_keys = [store_key for store_key in self._entries if store_key.startswith(prefix)]
            for store_key in stale_keys:
                del self._entries[store_key]
        logger.info(f"Namespace [{namespace}] evicted {len(stale_keys)} keys")

    def increase_counter(
        self,
        namespace: CacheNamespace,
        key: str,
        by: int,
        default: int,
        expiry_seconds: int
    ) -> int:
        store_key = self.namespaced_key(namespace, key)
        with self._lock:
            entry = self._live_entry(store_key)
            if entry is None:
                self._entries[store_key] = MemoryStoreEntry(default, self._expires_at(expiry_seconds))
                return default

            entry.value += by
            return entry.value

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for entry in self._entries.values() if not entry.is_expired(now))

    def _namespace_sequence(self, namespace: CacheNamespace) -> int:
        with self._lock:
            return self._sequence(self.sequence_key(namespace))

    def _sequence(self, store_key: str) -> int:
        entry = self._live_entry(store_key)
        if entry is None:
            entry = MemoryStoreEntry(1)
            self._entries[store_key] = entry
        return entry.value

    def _live_entry(self, store_key: str) -> Optional[MemoryStoreEntry]:
        entry = self._entries.get(store_key)
        if entry is not None and entry.is_expired(self._clock()):
            del self._entries[store_key]
            return None
        return entry

    def _expires_at(self, expiry_seconds: int) -> Optional[float]:
        # Zero means no expiry, as on memcached
        if expiry_seconds <= 0:
            return None
        return self._clock() + expiry_seconds
