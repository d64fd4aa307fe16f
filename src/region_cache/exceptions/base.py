"""Base exceptions for region-cache.

All exceptions raised by region-cache inherit from RegionCacheError and
carry an error code plus a details dictionary for structured logging.
"""

from typing import Any, Dict, Optional


class RegionCacheError(Exception):
    """Base exception for all region-cache errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
