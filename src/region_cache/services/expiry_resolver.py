"""Region expiry resolution.

Each region reads its expiry once, at construction: the namespace-specific
property wins over the global default, and a region without either cannot be
built.
"""

import logging
from typing import Mapping

from ..config.constants import PropertyKeys
from ..entities.namespace import CacheNamespace
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def region_expiry_key(namespace: CacheNamespace) -> str:
    """Get the namespace-specific expiry property key."""
    return f"{PropertyKeys.EXPIRY_SECONDS_PREFIX}.{namespace.name}"


def resolve_expiry_seconds(namespace: CacheNamespace, properties: Mapping[str, str]) -> int:
    """Resolve the expiry seconds of a region.

    Args:
        namespace: Region namespace
        properties: Configuration properties

    Returns:
        Non-negative expiry in seconds

    Raises:
        ConfigurationError: If neither key is set or the value is not a
            non-negative integer
    """
    region_key = region_expiry_key(namespace)
    default_key = PropertyKeys.EXPIRY_SECONDS_PREFIX

    property_key = region_key
    raw_value = properties.get(region_key)
    if raw_value is None:
        property_key = default_key
        raw_value = properties.get(default_key)

    if raw_value is None:
        raise ConfigurationError(
            f"{region_key} or {default_key} (for default expiry seconds) required!",
            details={"namespace": namespace.name, "keys_tried": [region_key, default_key]}
        )

    value = str(raw_value).strip()
    if not (value.isascii() and value.isdigit()):
        raise ConfigurationError(
            f"{property_key} must be a non-negative integer, got {raw_value!r}",
            details={"namespace": namespace.name, "key": property_key, "value": str(raw_value)}
        )

    expiry_seconds = int(value)
    logger.info(f"expirySeconds of cache region [{namespace.name}] - {expiry_seconds} seconds (from {property_key})")
    return expiry_seconds
