"""Redis store adapter.

Uses Redis as a memcached-like store: pickled values with ``SET ... EX``,
integer counters with ``INCRBY`` and namespace sequences for query-results
regions. Connection pooling, socket timeouts and reconnects belong to the
redis client; this adapter performs no retries.
"""

import logging
import pickle
from typing import Any, Mapping, Optional

import redis
from redis.exceptions import RedisError

from ..config.constants import PropertyKeys
from ..entities.namespace import CacheNamespace
from ..exceptions import ConfigurationError, StoreUnavailableError
from .base import NamespacedStoreAdapter

logger = logging.getLogger(__name__)

_GLOB_SPECIAL_CHARS = "\\*?[]"


def _escape_pattern(text: str) -> str:
    return "".join(f"\\{char}" if char in _GLOB_SPECIAL_CHARS else char for char in text)


class RedisStoreAdapter(NamespacedStoreAdapter):
    """Key-value store adapter backed by a synchronous Redis client."""

    SCAN_BATCH_SIZE = 500

    def __init__(self, client: Optional[redis.Redis] = None):
        """Initialize adapter.

        Args:
            client: Existing Redis client; when omitted one is created from
                the ``region_cache.redis.url`` property on init
        """
        super().__init__()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            raise StoreUnavailableError.for_operation("connect", cause=RuntimeError("adapter not initialized"))
        return self._client

    def _connect(self, properties: Mapping[str, str]) -> None:
        if self._client is None:
            redis_url = properties.get(PropertyKeys.REDIS_URL)
            if not redis_url:
                raise ConfigurationError(f"{PropertyKeys.REDIS_URL} required for the redis cache store")
            self._client = redis.Redis.from_url(redis_url)
            self._owns_client = True

        try:
            self._client.ping()
        except RedisError as e:
            raise StoreUnavailableError.for_operation("connect", cause=e) from e

        logger.info(f"Connected to Redis cache store (key prefix: {self.key_prefix!r})")

    def destroy(self) -> None:
        if self._client is None:
            return

        if self._owns_client:
            try:
                self._client.close()
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            self._client = None
        logger.info("Redis cache store destroyed")

    def get(self, namespace: CacheNamespace, key: str) -> Optional[Any]:
        store_key = self.namespaced_key(namespace, key)
        try:
            data = self.client.get(store_key)
        except RedisError as e:
            raise StoreUnavailableError.for_operation("get", namespace.name, store_key, e) from e

        if data is None:
            return None

        try:
            return pickle.loads(data)
        except (pickle.UnpicklingError, AttributeError, ImportError, EOFError, TypeError, ValueError) as e:
            logger.warning(f"Cannot deserialize cached value {store_key}, treating as miss: {e}")
            return None

    def set(self, namespace: CacheNamespace, key: str, value: Any, expiry_seconds: int) -> None:
        store_key = self.namespaced_key(namespace, key)
        try:
            data = pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise StoreUnavailableError.for_operation("set", namespace.name, store_key, e) from e

        try:
            self.client.set(store_key, data, ex=self._expiry(expiry_seconds))
        except RedisError as e:
            raise StoreUnavailableError.for_operation("set", namespace.name, store_key, e) from e

    def delete(self, namespace: CacheNamespace, key: str) -> None:
        store_key = self.namespaced_key(namespace, key)
        try:
            self.client.delete(store_key)
        except RedisError as e:
            raise StoreUnavailableError.for_operation("delete", namespace.name, store_key, e) from e

    def evict_all(self, namespace: CacheNamespace) -> None:
        try:
            if namespace.is_query_region:
                sequence_key = self.sequence_key(namespace)
                self.client.set(sequence_key, 1, nx=True)
                sequence = self.client.incr(sequence_key)
                logger.info(f"Namespace [{namespace}] sequence increased to {sequence}")
                return

            pattern = _escape_pattern(self.namespace_prefix(namespace)) + "*"
            deleted = 0
            batch = []
            for store_key in self.client.scan_iter(match=pattern, count=self.SCAN_BATCH_SIZE):
                batch.append(store_key)
                if len(batch) >= self.SCAN_BATCH_SIZE:
                    deleted += self.client.delete(*batch)
                    batch = []
            if batch:
                deleted += self.client.delete(*batch)
            logger.info(f"Namespace [{namespace}] evicted {deleted} keys")
        except RedisError as e:
            raise StoreUnavailableError.for_operation("evict_all", namespace.name, cause=e) from e

    def increase_counter(
        self,
        namespace: CacheNamespace,
        key: str,
        by: int,
        default: int,
        expiry_seconds: int
    ) -> int:
        store_key = self.namespaced_key(namespace, key)
        try:
            if self.client.set(store_key, default, ex=self._expiry(expiry_seconds), nx=True):
                return default
            return int(self.client.incrby(store_key, by))
        except RedisError as e:
            raise StoreUnavailableError.for_operation("increase_counter", namespace.name, store_key, e) from e

    def _namespace_sequence(self, namespace: CacheNamespace) -> int:
        sequence_key = self.sequence_key(namespace)
        try:
            sequence = self.client.get(sequence_key)
            if sequence is None:
                self.client.set(sequence_key, 1, nx=True)
                sequence = self.client.get(sequence_key)
        except RedisError as e:
            raise StoreUnavailableError.for_operation("get_sequence", namespace.name, sequence_key, e) from e
        return int(sequence) if sequence is not None else 1

    @staticmethod
    def _expiry(expiry_seconds: int) -> Optional[int]:
        return expiry_seconds if expiry_seconds > 0 else None
