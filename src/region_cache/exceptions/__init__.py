"""Exception hierarchy for region-cache.

Only ConfigurationError (construction time) and StoreUnavailableError
(per operation) are raised to consumers.
"""

from .base import RegionCacheError
from .domain import ConfigurationError
from .infrastructure import CacheError, StoreUnavailableError

__all__ = [
    "RegionCacheError",
    "ConfigurationError",
    "CacheError",
    "StoreUnavailableError",
]
