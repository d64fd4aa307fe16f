"""Key refinement.

Memcached-like stores limit key length and character set, while consumer
keys are arbitrary objects whose string form can be huge (query keys embed
the full SQL text and parameters). Refined keys have the form::

    sha1(str(raw_key)) + "_" + tenant + "_" + hash_code(raw_key)

which is bounded in length, partitions tenants whose raw keys collide
textually, and keeps a cheap numeric hash code as secondary disambiguator.
"""

import hashlib
import logging
import zlib
from typing import Any

from ..entities.keys import TenantAwareKey
from ..entities.namespace import CacheNamespace

logger = logging.getLogger(__name__)

TENANT_FIELD_ATTRIBUTE = "__tenant_field__"


def _read_tenant(raw_key: Any, attribute: str) -> str:
    try:
        tenant = getattr(raw_key, attribute)
    except Exception as e:
        logger.warning(f"Cannot retrieve tenant identifier {attribute} from {type(raw_key).__name__}: {e}")
        return ""

    if tenant is None:
        return ""
    return str(tenant)


def extract_tenant(raw_key: Any) -> str:
    """Get the tenant a raw key belongs to, empty string when it has none.

    Never raises: structural lookup failures are logged and degrade to the
    empty tenant.
    """
    try:
        tenant_aware = isinstance(raw_key, TenantAwareKey)
    except Exception as e:
        # Protocol checks read the attribute on older interpreters
        logger.warning(f"Cannot retrieve tenant identifier tenant_id from {type(raw_key).__name__}: {e}")
        return ""

    if tenant_aware:
        return _read_tenant(raw_key, "tenant_id")

    field_name = getattr(type(raw_key), TENANT_FIELD_ATTRIBUTE, None)
    if not isinstance(field_name, str):
        return ""
    return _read_tenant(raw_key, field_name)


def key_hash_code(raw_key: Any) -> int:
    """Get a process-independent 32-bit hash code for a raw key.

    Keys may provide ``cache_hash_code()``; otherwise the CRC-32 of the
    key's string form is used, the same form the digest is taken from.
    The builtin ``hash()`` is randomized per process for strings, and the
    default ``repr()`` embeds the object address, so neither can be shared
    through a store.
    """
    cache_hash_code = getattr(raw_key, "cache_hash_code", None)
    if callable(cache_hash_code):
        return int(cache_hash_code()) & 0xFFFFFFFF
    return zlib.crc32(str(raw_key).encode("utf-8"))


def refine_key(raw_key: Any, namespace: CacheNamespace) -> str:
    """Convert a consumer cache key into a bounded store key.

    Args:
        raw_key: Consumer key; must not be None and must have a stable
            string form
        namespace: Region the key is issued against

    Returns:
        Store-safe key, identical for identical inputs

    Raises:
        ValueError: If raw_key or namespace is None
    """
    if raw_key is None:
        raise ValueError("Cache key must not be None")
    if namespace is None:
        raise ValueError("Cache namespace is required to refine a key")

    tenant = extract_tenant(raw_key)
    digest = hashlib.sha1(str(raw_key).encode("utf-8")).hexdigest()
    return f"{digest}_{tenant}_{key_hash_code(raw_key)}"
