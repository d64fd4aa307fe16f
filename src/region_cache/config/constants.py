"""Constants for region-cache.

Configuration property keys and store limits shared by regions and adapters.
"""

from enum import Enum
from typing import Final


class PropertyKeys:
    """Configuration property keys."""

    # Default expiry; per-region overrides append ".<namespace name>"
    EXPIRY_SECONDS_PREFIX: Final[str] = "region_cache.expiry_seconds"
    USE_STRUCTURED_ENTRIES: Final[str] = "region_cache.use_structured_entries"
    KEY_PREFIX: Final[str] = "region_cache.key_prefix"
    REDIS_URL: Final[str] = "region_cache.redis.url"


class StoreLimits:
    """Limits imposed by memcached-like stores."""

    MAX_KEY_LENGTH: Final[int] = 250
    NAMESPACE_SEPARATOR: Final[str] = "@"


class StoreBackend(str, Enum):
    """Supported key-value store adapters."""

    MEMORY = "memory"
    REDIS = "redis"


TIMESTAMPS_NAMESPACE: Final[str] = "timestamps"
