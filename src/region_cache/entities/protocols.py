"""Protocols for the collaborators of a cache region.

The key-value store and the timestamp source are external to region-cache;
these protocols describe what regions require from them.
"""

from abc import abstractmethod
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from .namespace import CacheNamespace


@runtime_checkable
class CacheStoreAdapter(Protocol):
    """Protocol for memcached-like key-value store adapters.

    Implementations own connection handling, serialization, timeouts and
    retries. Failures are raised as StoreUnavailableError.
    """

    @abstractmethod
    def init(self, properties: Mapping[str, str]) -> None:
        """Prepare the adapter (open connections)."""
        ...

    @abstractmethod
    def destroy(self) -> None:
        """Release adapter resources."""
        ...

    @abstractmethod
    def get(self, namespace: CacheNamespace, key: str) -> Optional[Any]:
        """Get value by key, None when absent."""
        ...

    @abstractmethod
    def set(self, namespace: CacheNamespace, key: str, value: Any, expiry_seconds: int) -> None:
        """Store value, overwriting any previous value."""
        ...

    @abstractmethod
    def delete(self, namespace: CacheNamespace, key: str) -> None:
        """Delete key; missing keys are ignored."""
        ...

    @abstractmethod
    def evict_all(self, namespace: CacheNamespace) -> None:
        """Invalidate every key of a namespace."""
        ...

    @abstractmethod
    def increase_counter(
        self,
        namespace: CacheNamespace,
        key: str,
        by: int,
        default: int,
        expiry_seconds: int
    ) -> int:
        """Atomically increase a counter, initializing it to default when absent."""
        ...


@runtime_checkable
class CacheTimestamper(Protocol):
    """Protocol for region timestamp sources."""

    @abstractmethod
    def next(self) -> int:
        """Get the next timestamp; strictly greater than any previous one."""
        ...

    @property
    @abstractmethod
    def timeout(self) -> int:
        """Lock timeout expressed in timestamp units."""
        ...
