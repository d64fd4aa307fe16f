"""Infrastructure-specific exceptions for region-cache.

Errors coming from the key-value store collaborator.
"""

from typing import Optional

from .base import RegionCacheError


class CacheError(RegionCacheError):
    """Base class for cache store errors."""
    pass


class StoreUnavailableError(CacheError):
    """Raised when the key-value store fails to complete an operation.

    The region performs no retries; the caller decides whether to fall back
    to the database or to fail the request.
    """

    @classmethod
    def for_operation(
        cls,
        operation: str,
        namespace: Optional[str] = None,
        key: Optional[str] = None,
        cause: Optional[BaseException] = None
    ) -> "StoreUnavailableError":
        """Create error describing a failed store operation."""
        message = f"Cache store {operation} failed"
        if namespace:
            message += f" for namespace [{namespace}]"
        if cause is not None:
            message += f": {cause}"

        details = {"operation": operation}
        if namespace:
            details["namespace"] = namespace
        if key:
            details["key"] = key

        return cls(message, error_code=f"CACHE_{operation.upper()}_FAILED", details=details)
