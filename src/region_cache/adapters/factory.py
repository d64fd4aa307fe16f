"""Store adapter factory."""

import logging

from ..config.constants import StoreBackend
from ..entities.protocols import CacheStoreAdapter
from ..exceptions import ConfigurationError
from .memory_adapter import MemoryStoreAdapter
from .redis_adapter import RedisStoreAdapter

logger = logging.getLogger(__name__)


def create_store_adapter(backend: StoreBackend) -> CacheStoreAdapter:
    """Create an uninitialized store adapter for a backend."""
    if backend == StoreBackend.MEMORY:
        adapter = MemoryStoreAdapter()
    elif backend == StoreBackend.REDIS:
        adapter = RedisStoreAdapter()
    else:
        raise ConfigurationError(f"Unsupported cache store backend: {backend}")

    logger.debug(f"Created {type(adapter).__name__} for backend {StoreBackend(backend).value}")
    return adapter
