"""Pytest configuration and fixtures for region-cache tests."""

import pytest
from unittest.mock import MagicMock

from region_cache.adapters.memory_adapter import MemoryStoreAdapter
from region_cache.config.constants import PropertyKeys
from region_cache.config.properties import OverridableProperties
from region_cache.entities.namespace import CacheNamespace
from region_cache.entities.protocols import CacheStoreAdapter


class FakeClock:
    """Manually advanced clock for expiry and timestamp tests."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Manually advanced clock."""
    return FakeClock()


@pytest.fixture
def users_namespace():
    """General data namespace for user entities."""
    return CacheNamespace("users")


@pytest.fixture
def query_namespace():
    """Query results namespace."""
    return CacheNamespace("query_results", is_query_region=True)


@pytest.fixture
def cache_properties():
    """Properties with a default expiry and a users override."""
    return OverridableProperties(
        {PropertyKeys.EXPIRY_SECONDS_PREFIX: "120"},
        {f"{PropertyKeys.EXPIRY_SECONDS_PREFIX}.users": "300"},
    )


@pytest.fixture
def mock_store():
    """Mock key-value store adapter."""
    store = MagicMock(spec=CacheStoreAdapter)
    store.get.return_value = None
    return store


@pytest.fixture
def memory_store(clock):
    """Initialized in-memory store adapter driven by the fake clock."""
    store = MemoryStoreAdapter(clock=clock)
    store.init({})
    yield store
    store.destroy()
