"""Layered read-only configuration properties.

Properties are loaded externally (environment, settings files, the host
framework) and handed to region-cache as flat string mappings. Overrides
are layered on top of a base mapping; the result never changes afterwards.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


class OverridableProperties(Mapping[str, str]):
    """Immutable property mapping where overrides win over base values."""

    def __init__(
        self,
        base: Optional[Mapping[str, object]] = None,
        overrides: Optional[Mapping[str, object]] = None
    ):
        merged: Dict[str, str] = {}
        for source in (base or {}, overrides or {}):
            for key, value in source.items():
                if value is None:
                    continue
                merged[str(key)] = str(value)
        self._properties = MappingProxyType(merged)

    def __getitem__(self, key: str) -> str:
        return self._properties[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"OverridableProperties({dict(self._properties)!r})"

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get property value or default when absent."""
        return self._properties.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get property as boolean.

        Unrecognised values fall back to the default with a warning.
        """
        value = self._properties.get(key)
        if value is None:
            return default

        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False

        logger.warning(f"Invalid boolean property {key}={value!r}, using default {default}")
        return default

    def with_overrides(self, overrides: Mapping[str, object]) -> "OverridableProperties":
        """Return a new instance with additional overrides applied."""
        return OverridableProperties(self._properties, overrides)
