"""Versioned cache entry.

A long-running store may still hold values written by an earlier process
generation whose class definition has since changed shape. Such values
unpickle without complaint into the new class and silently corrupt state.
CacheItem records the fingerprint of the value's type at write time and
refuses to hand the value back when the currently loaded type no longer
matches.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..utils.fingerprint import resolve_type, type_fingerprint, type_path

logger = logging.getLogger(__name__)

# Key of a structured entry naming the type the mapping was built from
STRUCTURED_TYPE_KEY = "_subclass"

# Types whose serialized form is guaranteed compatible by pickle itself
_SELF_DESCRIBING_MODULES = frozenset({
    "builtins",
    "collections",
    "datetime",
    "decimal",
    "fractions",
    "uuid",
})


def _target_type(value: Any, structured_entries_enabled: bool) -> Optional[type]:
    if value is None:
        return None

    if structured_entries_enabled and isinstance(value, Mapping):
        reference = value.get(STRUCTURED_TYPE_KEY)
        if isinstance(reference, type):
            return reference
        if isinstance(reference, str):
            return resolve_type(reference)

    value_type = type(value)
    if value_type.__module__ in _SELF_DESCRIBING_MODULES:
        return None
    return value_type


@dataclass(frozen=True)
class CacheItem:
    """Cached value plus the fingerprint of its type at write time."""

    payload: Any
    target_type: Optional[str] = None
    type_fingerprint: Optional[str] = None
    wrapped: bool = False

    @staticmethod
    def is_applicable(value: Any, structured_entries_enabled: bool) -> bool:
        """Check whether a value needs type versioning.

        Builtin and standard library value types are never wrapped. Custom
        application types are. With structured entries enabled, a mapping
        naming its source type under ``_subclass`` is versioned against that
        type.
        """
        return _target_type(value, structured_entries_enabled) is not None

    @classmethod
    def wrap(cls, value: Any, structured_entries_enabled: bool) -> "CacheItem":
        """Wrap value, fingerprinting its type as currently loaded."""
        target = _target_type(value, structured_entries_enabled)
        if target is None:
            return cls(payload=value)

        return cls(
            payload=value,
            target_type=type_path(target),
            type_fingerprint=type_fingerprint(target),
            wrapped=True,
        )

    def unwrap(self) -> Tuple[Any, bool]:
        """Get the payload if its type still has the recorded shape.

        Returns:
            ``(payload, True)`` on match, ``(None, False)`` when the target
            type changed or can no longer be resolved.
        """
        if not self.wrapped:
            return self.payload, True

        current_type = resolve_type(self.target_type)
        if current_type is None:
            logger.debug(f"Cached type {self.target_type} is no longer loadable, treating as miss")
            return None, False

        current_fingerprint = type_fingerprint(current_type)
        if current_fingerprint != self.type_fingerprint:
            logger.debug(
                f"Type fingerprint mismatch for {self.target_type}: "
                f"cached={self.type_fingerprint}, current={current_fingerprint}"
            )
            return None, False

        return self.payload, True
