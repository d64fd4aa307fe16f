"""Tests for the Redis store adapter."""

import pickle
from unittest.mock import MagicMock

import pytest
import redis
from redis.exceptions import ConnectionError as RedisConnectionError

from region_cache.adapters.redis_adapter import RedisStoreAdapter
from region_cache.config.constants import PropertyKeys
from region_cache.entities.namespace import CacheNamespace
from region_cache.exceptions import ConfigurationError, StoreUnavailableError


@pytest.fixture
def redis_client():
    """Mock synchronous Redis client."""
    client = MagicMock(spec=redis.Redis)
    client.get.return_value = None
    client.scan_iter.return_value = iter([])
    return client


@pytest.fixture
def adapter(redis_client):
    """Initialized adapter on the mock client."""
    adapter = RedisStoreAdapter(client=redis_client)
    adapter.init({PropertyKeys.KEY_PREFIX: "app:"})
    return adapter


class TestConnection:
    """Test adapter initialization and shutdown."""

    def test_init_pings(self, adapter, redis_client):
        redis_client.ping.assert_called_once()
        assert adapter.key_prefix == "app:"

    def test_ping_failure(self, redis_client):
        redis_client.ping.side_effect = RedisConnectionError("refused")
        adapter = RedisStoreAdapter(client=redis_client)

        with pytest.raises(StoreUnavailableError) as exc_info:
            adapter.init({})

        assert exc_info.value.error_code == "CACHE_CONNECT_FAILED"
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    def test_client_from_url(self, mocker, redis_client):
        from_url = mocker.patch.object(redis.Redis, "from_url", return_value=redis_client)
        adapter = RedisStoreAdapter()

        adapter.init({PropertyKeys.REDIS_URL: "redis://cache:6379/1"})

        from_url.assert_called_once_with("redis://cache:6379/1")
        assert adapter.client is redis_client

        adapter.destroy()
        redis_client.close.assert_called_once()

    def test_url_required(self):
        with pytest.raises(ConfigurationError, match="region_cache.redis.url"):
            RedisStoreAdapter().init({})

    def test_external_client_not_closed(self, adapter, redis_client):
        adapter.destroy()

        redis_client.close.assert_not_called()

    def test_uninitialized_client(self):
        with pytest.raises(StoreUnavailableError):
            RedisStoreAdapter().client


class TestValues:
    """Test value operations."""

    def test_set_pickles_with_expiry(self, adapter, redis_client, users_namespace):
        adapter.set(users_namespace, "k", {"id": 1}, 300)

        redis_client.set.assert_called_once_with("app:users@k", pickle.dumps({"id": 1}, protocol=pickle.HIGHEST_PROTOCOL), ex=300)

    def test_zero_expiry_has_no_ttl(self, adapter, redis_client, users_namespace):
        adapter.set(users_namespace, "k", "v", 0)

        assert redis_client.set.call_args.kwargs["ex"] is None

    def test_get_unpickles(self, adapter, redis_client, users_namespace):
        redis_client.get.return_value = pickle.dumps([1, 2])

        assert adapter.get(users_namespace, "k") == [1, 2]
        redis_client.get.assert_called_with("app:users@k")

    def test_get_miss(self, adapter, users_namespace):
        assert adapter.get(users_namespace, "k") is None

    def test_corrupt_value_is_miss(self, adapter, redis_client, users_namespace):
        redis_client.get.return_value = b"garbage"

        assert adapter.get(users_namespace, "k") is None

    def test_delete(self, adapter, redis_client, users_namespace):
        adapter.delete(users_namespace, "k")

        redis_client.delete.assert_called_once_with("app:users@k")

    @pytest.mark.parametrize("method, args, operation", [
        ("get", ("k",), "get"),
        ("set", ("k", "v", 60), "set"),
        ("delete", ("k",), "delete"),
    ])
    def test_redis_errors_wrapped(self, adapter, redis_client, users_namespace, method, args, operation):
        getattr(redis_client, method).side_effect = RedisConnectionError("lost")

        with pytest.raises(StoreUnavailableError) as exc_info:
            getattr(adapter, method)(users_namespace, *args)

        assert exc_info.value.error_code == f"CACHE_{operation.upper()}_FAILED"
        assert exc_info.value.details["key"] == "app:users@k"


class TestQueryNamespace:
    """Test sequence-based query namespaces."""

    def test_key_uses_existing_sequence(self, adapter, redis_client, query_namespace):
        redis_client.get.side_effect = lambda key: b"4" if key == "app:@namespace_sequence@query_results" else None

        adapter.delete(query_namespace, "k")

        redis_client.delete.assert_called_once_with("app:query_results@4@k")

    def test_sequence_initialized(self, adapter, redis_client, query_namespace):
        redis_client.get.side_effect = [None, b"1"]

        assert adapter.namespaced_key(query_namespace, "k") == "app:query_results@1@k"
        redis_client.set.assert_called_once_with("app:@namespace_sequence@query_results", 1, nx=True)

    def test_evict_all_increments_sequence(self, adapter, redis_client, query_namespace):
        redis_client.incr.return_value = 2

        adapter.evict_all(query_namespace)

        redis_client.set.assert_called_once_with("app:@namespace_sequence@query_results", 1, nx=True)
        redis_client.incr.assert_called_once_with("app:@namespace_sequence@query_results")
        redis_client.scan_iter.assert_not_called()


class TestGeneralEvictAll:
    """Test prefix eviction of general namespaces."""

    def test_deletes_matching_keys(self, adapter, redis_client, users_namespace):
        redis_client.scan_iter.return_value = iter([b"app:users@a", b"app:users@b"])
        redis_client.delete.return_value = 2

        adapter.evict_all(users_namespace)

        redis_client.scan_iter.assert_called_once_with(match="app:users@*", count=RedisStoreAdapter.SCAN_BATCH_SIZE)
        redis_client.delete.assert_called_once_with(b"app:users@a", b"app:users@b")

    def test_deletes_in_batches(self, adapter, redis_client, users_namespace):
        keys = [f"app:users@{i}".encode() for i in range(RedisStoreAdapter.SCAN_BATCH_SIZE + 1)]
        redis_client.scan_iter.return_value = iter(keys)
        redis_client.delete.return_value = 1

        adapter.evict_all(users_namespace)

        assert redis_client.delete.call_count == 2
        assert len(redis_client.delete.call_args_list[0].args) == RedisStoreAdapter.SCAN_BATCH_SIZE

    def test_empty_namespace(self, adapter, redis_client, users_namespace):
        adapter.evict_all(users_namespace)

        redis_client.delete.assert_not_called()

    def test_glob_characters_escaped(self, adapter, redis_client):
        adapter.evict_all(CacheNamespace("users[eu]*"))

        assert redis_client.scan_iter.call_args.kwargs["match"] == "app:users\\[eu\\]\\*@*"

    def test_sequence_keys_outside_namespace_pattern(self, adapter, redis_client, query_namespace):
        adapter.evict_all(CacheNamespace("namespace_sequence"))

        pattern = redis_client.scan_iter.call_args.kwargs["match"]
        assert pattern == "app:namespace_sequence@*"
        assert not adapter.sequence_key(query_namespace).startswith(pattern[:-1])

    def test_scan_failure_wrapped(self, adapter, redis_client, users_namespace):
        redis_client.scan_iter.side_effect = RedisConnectionError("lost")

        with pytest.raises(StoreUnavailableError) as exc_info:
            adapter.evict_all(users_namespace)

        assert exc_info.value.error_code == "CACHE_EVICT_ALL_FAILED"


class TestRedisCounters:
    """Test counter operations."""

    def test_increase_initializes_to_default(self, adapter, redis_client, users_namespace):
        redis_client.set.return_value = True

        assert adapter.increase_counter(users_namespace, "c", 1, 100, 30) == 100
        redis_client.set.assert_called_once_with("app:users@c", 100, ex=30, nx=True)
        redis_client.incrby.assert_not_called()

    def test_increase_existing(self, adapter, redis_client, users_namespace):
        redis_client.set.return_value = None
        redis_client.incrby.return_value = 105

        assert adapter.increase_counter(users_namespace, "c", 5, 100, 0) == 105
        redis_client.incrby.assert_called_once_with("app:users@c", 5)

    def test_counter_error_wrapped(self, adapter, redis_client, users_namespace):
        redis_client.set.side_effect = RedisConnectionError("lost")

        with pytest.raises(StoreUnavailableError) as exc_info:
            adapter.increase_counter(users_namespace, "c", 1, 0, 0)

        assert exc_info.value.error_code == "CACHE_INCREASE_COUNTER_FAILED"
