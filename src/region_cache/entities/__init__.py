"""Region cache entities.

- namespace: cache region identity
- keys: key shapes carrying tenant identifiers
- cache_item: versioned cache entry
- protocols: store adapter and timestamper contracts
"""

from .namespace import CacheNamespace
from .keys import EntityCacheKey, QueryResultsKey, TenantAwareKey
from .cache_item import STRUCTURED_TYPE_KEY, CacheItem
from .protocols import CacheStoreAdapter, CacheTimestamper

__all__ = [
    "CacheNamespace",
    "EntityCacheKey",
    "QueryResultsKey",
    "TenantAwareKey",
    "STRUCTURED_TYPE_KEY",
    "CacheItem",
    "CacheStoreAdapter",
    "CacheTimestamper",
]
