"""Key-value store adapters (in-memory and Redis)."""

from .base import NamespacedStoreAdapter
from .memory_adapter import MemoryStoreAdapter, MemoryStoreEntry
from .redis_adapter import RedisStoreAdapter
from .factory import create_store_adapter

__all__ = [
    "NamespacedStoreAdapter",
    "MemoryStoreAdapter",
    "MemoryStoreEntry",
    "RedisStoreAdapter",
    "create_store_adapter",
]
