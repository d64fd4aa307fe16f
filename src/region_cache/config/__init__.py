"""Configuration for region-cache."""

from .constants import PropertyKeys, StoreBackend, StoreLimits, TIMESTAMPS_NAMESPACE
from .properties import OverridableProperties
from .settings import RegionCacheSettings

__all__ = [
    "PropertyKeys",
    "StoreBackend",
    "StoreLimits",
    "TIMESTAMPS_NAMESPACE",
    "OverridableProperties",
    "RegionCacheSettings",
]
