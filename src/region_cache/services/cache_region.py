"""Cache region.

Orchestrates key refinement, entry versioning and expiry for one namespace on
top of a key-value store adapter. A region holds no mutable state of its own;
the namespace, expiry and collaborators are fixed at construction, so a
single instance can be shared between threads.
"""

import logging
from typing import Any, Mapping, Optional

from ..entities.cache_item import CacheItem
from ..entities.namespace import CacheNamespace
from ..entities.protocols import CacheStoreAdapter, CacheTimestamper
from .expiry_resolver import resolve_expiry_seconds
from .key_refiner import refine_key
from .store_guard import store_operation
from .timestamper import SystemClockTimestamper

logger = logging.getLogger(__name__)


class CacheRegion:
    """Cache region backed by a memcached-like store.

    Store failures raise StoreUnavailableError. Key refinement and entry
    versioning problems never raise; they cost a cache miss at most.
    """

    def __init__(
        self,
        namespace: CacheNamespace,
        properties: Mapping[str, str],
        store: CacheStoreAdapter,
        structured_entries_enabled: bool = False,
        timestamper: Optional[CacheTimestamper] = None
    ):
        """Initialize region and resolve its expiry.

        Args:
            namespace: Region namespace
            properties: Configuration properties holding the expiry keys
            store: Key-value store adapter
            structured_entries_enabled: Whether values are structured mappings
            timestamper: Timestamp source, system clock by default

        Raises:
            ConfigurationError: If the expiry cannot be resolved
        """
        if namespace is None:
            raise ValueError("Cache region requires a namespace")
        if store is None:
            raise ValueError("Cache region requires a store adapter")

        self._namespace = namespace
        self._store = store
        self._structured_entries_enabled = structured_entries_enabled
        self._timestamper = timestamper or SystemClockTimestamper()
        self._expiry_seconds = resolve_expiry_seconds(namespace, properties)

    @property
    def name(self) -> str:
        return self._namespace.name

    @property
    def namespace(self) -> CacheNamespace:
        return self._namespace

    @property
    def expiry_seconds(self) -> int:
        return self._expiry_seconds

    @property
    def structured_entries_enabled(self) -> bool:
        return self._structured_entries_enabled

    @property
    def timeout(self) -> int:
        """Lock timeout in timestamp units."""
        return self._timestamper.timeout

    def next_timestamp(self) -> int:
        return self._timestamper.next()

    def get(self, key: Any) -> Optional[Any]:
        """Get cached value, None on miss or stale entry."""
        refined_key = self._refine(key, "get")
        if refined_key is None:
            return None

        logger.debug(f"Cache get [{self._namespace}] : key[{refined_key}]")
        with store_operation("get", self._namespace, refined_key):
            cached_data = self._store.get(self._namespace, refined_key)

        if cached_data is None:
            return None

        if not isinstance(cached_data, CacheItem):
            logger.debug("get cachedData is not CacheItem.")
            return cached_data

        try:
            value, type_current = cached_data.unwrap()
        except Exception as e:
            logger.warning(f"Cannot validate cached entry [{self._namespace}] key[{refined_key}], treating as miss: {e}")
            return None

        logger.debug(f"cacheItem type current : {type_current} / {cached_data.target_type}")
        return value if type_current else None

    def put(self, key: Any, value: Any) -> None:
        """Store value, wrapping it with its type fingerprint when applicable."""
        if key is None:
            raise ValueError("Cache key must not be None")

        try:
            versioning_applicable = CacheItem.is_applicable(value, self._structured_entries_enabled)
            value_to_cache = (
                CacheItem.wrap(value, self._structured_entries_enabled)
                if versioning_applicable else value
            )
        except Exception as e:
            logger.warning(f"Cannot version value of type {type(value).__name__} for [{self._namespace}], skipping put: {e}")
            return

        refined_key = self._refine(key, "put")
        if refined_key is None:
            return

        logger.debug(
            f"Cache put [{self._namespace}] : key[{refined_key}], "
            f"versioning applicable : {versioning_applicable}"
        )
        with store_operation("set", self._namespace, refined_key):
            self._store.set(self._namespace, refined_key, value_to_cache, self._expiry_seconds)

    def evict(self, key: Any) -> None:
        """Remove a key; missing keys are ignored."""
        refined_key = self._refine(key, "evict")
        if refined_key is None:
            return

        logger.debug(f"Cache evict [{self._namespace}] : key[{refined_key}]")
        with store_operation("delete", self._namespace, refined_key):
            self._store.delete(self._namespace, refined_key)

    def evict_all(self) -> None:
        """Invalidate every entry of this region."""
        logger.debug(f"Cache evictAll [{self._namespace}].")
        with store_operation("evict_all", self._namespace):
            self._store.evict_all(self._namespace)

    def contains(self, key: Any) -> bool:
        return self.get(key) is not None

    def destroy(self) -> None:
        # Entries outlive the region; the store expires them.
        logger.debug(f"Cache region destroyed [{self._namespace}].")

    def _refine(self, key: Any, operation: str) -> Optional[str]:
        if key is None:
            raise ValueError("Cache key must not be None")

        try:
            return refine_key(key, self._namespace)
        except Exception as e:
            logger.warning(f"Cannot refine key of type {type(key).__name__} for cache {operation} [{self._namespace}]: {e}")
            return None

    def __repr__(self) -> str:
        return (
            f"CacheRegion(namespace={self._namespace.name!r}, "
            f"query_region={self._namespace.is_query_region}, "
            f"expiry_seconds={self._expiry_seconds})"
        )
