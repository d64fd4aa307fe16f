"""Shared store key layout for memcached-like adapters.

Store keys are ``<prefix><namespace>@<key>``. Query-results namespaces add a
sequence number, ``<prefix><namespace>@<sequence>@<key>``, so the whole
namespace is invalidated by bumping the sequence. Sequences live under
``<prefix>@namespace_sequence@<namespace>``; namespace names are never empty
and never contain ``@``, so no namespace prefix covers a sequence key. Keys
over the store limit are replaced by the SHA-1 of the full key, keeping the
namespace part.
"""

import hashlib
import logging
from abc import ABC, abstractmethod
from typing import Mapping

from ..config.constants import PropertyKeys, StoreLimits
from ..entities.namespace import CacheNamespace

logger = logging.getLogger(__name__)


class NamespacedStoreAdapter(ABC):
    """Base class for adapters using the namespaced key layout."""

    NAMESPACE_SEQUENCE_PREFIX = "namespace_sequence"

    def __init__(self):
        self._key_prefix = ""

    @property
    def key_prefix(self) -> str:
        return self._key_prefix

    def init(self, properties: Mapping[str, str]) -> None:
        """Read common properties and connect."""
        self._key_prefix = properties.get(PropertyKeys.KEY_PREFIX) or ""
        self._connect(properties)

    def namespace_prefix(self, namespace: CacheNamespace) -> str:
        """Get the key prefix shared by every key of a namespace."""
        return f"{self._key_prefix}{namespace.name}{StoreLimits.NAMESPACE_SEPARATOR}"

    def sequence_key(self, namespace: CacheNamespace) -> str:
        """Get the key holding the namespace sequence number."""
        return (
            f"{self._key_prefix}{StoreLimits.NAMESPACE_SEPARATOR}{self.NAMESPACE_SEQUENCE_PREFIX}"
            f"{StoreLimits.NAMESPACE_SEPARATOR}{namespace.name}"
        )

    def namespaced_key(self, namespace: CacheNamespace, key: str) -> str:
        """Build the store key for a refined region key."""
        namespace_prefix = self.namespace_prefix(namespace)
        full_key = namespace_prefix
        if namespace.is_query_region:
            full_key += f"{self._namespace_sequence(namespace)}{StoreLimits.NAMESPACE_SEPARATOR}"
        full_key += key

        if len(full_key) > StoreLimits.MAX_KEY_LENGTH:
            hashed_key = namespace_prefix + hashlib.sha1(full_key.encode("utf-8")).hexdigest()
            logger.debug(f"Store key longer than {StoreLimits.MAX_KEY_LENGTH}, hashed to {hashed_key}")
            return hashed_key
        return full_key

    @abstractmethod
    def _connect(self, properties: Mapping[str, str]) -> None:
        """Open the store connection."""
        ...

    @abstractmethod
    def _namespace_sequence(self, namespace: CacheNamespace) -> int:
        """Get the current sequence of a query-results namespace."""
        ...
