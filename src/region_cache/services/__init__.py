"""Region cache services.

- key_refiner: raw key to store key
- expiry_resolver: per-region expiry lookup
- cache_region: get/put/evict orchestration
- region_factory: region construction and adapter lifecycle
- timestamper: region timestamp sources
"""

from .key_refiner import extract_tenant, key_hash_code, refine_key
from .expiry_resolver import region_expiry_key, resolve_expiry_seconds
from .store_guard import store_operation
from .timestamper import SystemClockTimestamper, StoreCounterTimestamper
from .cache_region import CacheRegion
from .region_factory import RegionFactory

__all__ = [
    "extract_tenant",
    "key_hash_code",
    "refine_key",
    "region_expiry_key",
    "resolve_expiry_seconds",
    "store_operation",
    "SystemClockTimestamper",
    "StoreCounterTimestamper",
    "CacheRegion",
    "RegionFactory",
]
