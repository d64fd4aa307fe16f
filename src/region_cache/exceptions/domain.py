"""Domain-specific exceptions for region-cache."""

from .base import RegionCacheError


class ConfigurationError(RegionCacheError):
    """Raised when required cache configuration is missing or malformed.

    Only ever raised while a region or factory is being constructed; a region
    that failed with this error is never handed to the consumer.
    """
    pass
