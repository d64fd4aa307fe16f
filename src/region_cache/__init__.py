"""region-cache - caching façade between a persistence layer and a
memcached-like key-value store.

Provides tenant-segmented bounded store keys, type-versioned cache entries
and per-region expiry configuration.
"""

from .__version__ import __version__

from .config import OverridableProperties, PropertyKeys, RegionCacheSettings, StoreBackend
from .entities import (
    CacheItem,
    CacheNamespace,
    CacheStoreAdapter,
    CacheTimestamper,
    EntityCacheKey,
    QueryResultsKey,
    TenantAwareKey,
)
from .exceptions import CacheError, ConfigurationError, RegionCacheError, StoreUnavailableError
from .adapters import MemoryStoreAdapter, RedisStoreAdapter, create_store_adapter
from .services import (
    CacheRegion,
    RegionFactory,
    StoreCounterTimestamper,
    SystemClockTimestamper,
    refine_key,
    resolve_expiry_seconds,
)

__all__ = [
    "__version__",
    # Configuration
    "OverridableProperties",
    "PropertyKeys",
    "RegionCacheSettings",
    "StoreBackend",
    # Entities
    "CacheItem",
    "CacheNamespace",
    "CacheStoreAdapter",
    "CacheTimestamper",
    "EntityCacheKey",
    "QueryResultsKey",
    "TenantAwareKey",
    # Exceptions
    "CacheError",
    "ConfigurationError",
    "RegionCacheError",
    "StoreUnavailableError",
    # Adapters
    "MemoryStoreAdapter",
    "RedisStoreAdapter",
    "create_store_adapter",
    # Services
    "CacheRegion",
    "RegionFactory",
    "StoreCounterTimestamper",
    "SystemClockTimestamper",
    "refine_key",
    "resolve_expiry_seconds",
]
