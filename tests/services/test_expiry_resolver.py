"""Tests for region expiry resolution."""

import logging

import pytest

from region_cache.config.constants import PropertyKeys
from region_cache.entities.namespace import CacheNamespace
from region_cache.exceptions import ConfigurationError
from region_cache.services.expiry_resolver import region_expiry_key, resolve_expiry_seconds

DEFAULT_KEY = PropertyKeys.EXPIRY_SECONDS_PREFIX


class TestRegionExpiryKey:

    def test_key_format(self):
        assert region_expiry_key(CacheNamespace("users")) == "region_cache.expiry_seconds.users"


class TestResolveExpirySeconds:
    """Test expiry resolution order and validation."""

    def test_namespace_property_wins(self, users_namespace, cache_properties):
        assert resolve_expiry_seconds(users_namespace, cache_properties) == 300

    def test_falls_back_to_default(self, cache_properties):
        assert resolve_expiry_seconds(CacheNamespace("orders"), cache_properties) == 120

    def test_only_namespace_property(self, users_namespace):
        properties = {f"{DEFAULT_KEY}.users": "45"}

        assert resolve_expiry_seconds(users_namespace, properties) == 45

    def test_zero_is_valid(self, users_namespace):
        assert resolve_expiry_seconds(users_namespace, {DEFAULT_KEY: "0"}) == 0

    def test_surrounding_whitespace_ignored(self, users_namespace):
        assert resolve_expiry_seconds(users_namespace, {DEFAULT_KEY: " 60 "}) == 60

    def test_missing_configuration(self, users_namespace):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_expiry_seconds(users_namespace, {})

        error = exc_info.value
        assert "region_cache.expiry_seconds.users" in error.message
        assert "region_cache.expiry_seconds (for default expiry seconds) required!" in error.message
        assert error.details["keys_tried"] == [f"{DEFAULT_KEY}.users", DEFAULT_KEY]

    @pytest.mark.parametrize("value", ["abc", "-5", "1.5", "", "١٢"])
    def test_invalid_values_rejected(self, users_namespace, value):
        with pytest.raises(ConfigurationError, match="must be a non-negative integer"):
            resolve_expiry_seconds(users_namespace, {f"{DEFAULT_KEY}.users": value})

    def test_invalid_namespace_value_does_not_fall_back(self, users_namespace):
        properties = {f"{DEFAULT_KEY}.users": "soon", DEFAULT_KEY: "120"}

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_expiry_seconds(users_namespace, properties)

        assert exc_info.value.details["key"] == f"{DEFAULT_KEY}.users"

    def test_resolution_logged(self, users_namespace, cache_properties, caplog):
        with caplog.at_level(logging.INFO):
            resolve_expiry_seconds(users_namespace, cache_properties)

        assert "expirySeconds of cache region [users] - 300 seconds" in caplog.text
