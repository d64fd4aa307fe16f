"""Utilities for region-cache."""

from .fingerprint import (
    VERSION_ATTRIBUTE,
    describe_type,
    field_layout,
    resolve_type,
    type_fingerprint,
    type_path,
)

__all__ = [
    "VERSION_ATTRIBUTE",
    "describe_type",
    "field_layout",
    "resolve_type",
    "type_fingerprint",
    "type_path",
]
