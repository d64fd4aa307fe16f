"""Region factory.

Builds the cache regions of one persistence unit. All regions share the
factory's configuration, store adapter and timestamper; the factory owns the
adapter lifecycle.
"""

import logging
from typing import Mapping, Optional

from ..adapters.factory import create_store_adapter
from ..config.constants import PropertyKeys
from ..config.properties import OverridableProperties
from ..config.settings import RegionCacheSettings
from ..entities.namespace import CacheNamespace
from ..entities.protocols import CacheStoreAdapter, CacheTimestamper
from ..exceptions import RegionCacheError
from .cache_region import CacheRegion
from .timestamper import SystemClockTimestamper

logger = logging.getLogger(__name__)


class RegionFactory:
    """Factory for general data and query-results regions."""

    def __init__(
        self,
        properties: Mapping[str, str],
        store: CacheStoreAdapter,
        timestamper: Optional[CacheTimestamper] = None,
        structured_entries_enabled: Optional[bool] = None
    ):
        if isinstance(properties, OverridableProperties):
            self._properties = properties
        else:
            self._properties = OverridableProperties(properties)

        self._store = store
        self._timestamper = timestamper or SystemClockTimestamper()
        if structured_entries_enabled is None:
            structured_entries_enabled = self._properties.get_bool(PropertyKeys.USE_STRUCTURED_ENTRIES, False)
        self._structured_entries_enabled = structured_entries_enabled
        self._started = False

    @classmethod
    def from_settings(cls, settings: Optional[RegionCacheSettings] = None) -> "RegionFactory":
        """Create factory and store adapter from environment settings."""
        settings = settings or RegionCacheSettings()
        return cls(
            settings.to_properties(),
            create_store_adapter(settings.backend),
            structured_entries_enabled=settings.use_structured_entries,
        )

    @property
    def properties(self) -> OverridableProperties:
        return self._properties

    @property
    def store(self) -> CacheStoreAdapter:
        return self._store

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def structured_entries_enabled(self) -> bool:
        return self._structured_entries_enabled

    def start(self) -> None:
        """Initialize the store adapter."""
        if self._started:
            return

        self._store.init(self._properties)
        self._started = True
        logger.info(f"Region factory started with {type(self._store).__name__}")

    def stop(self) -> None:
        """Release the store adapter."""
        if not self._started:
            return

        try:
            self._store.destroy()
        finally:
            self._started = False
        logger.info("Region factory stopped")

    def build_general_data_region(self, region_name: str) -> CacheRegion:
        """Build a region for entity and collection data."""
        return self._build_region(CacheNamespace(region_name, is_query_region=False))

    def build_query_results_region(self, region_name: str) -> CacheRegion:
        """Build a region for query results."""
        return self._build_region(CacheNamespace(region_name, is_query_region=True))

    def next_timestamp(self) -> int:
        return self._timestamper.next()

    def _build_region(self, namespace: CacheNamespace) -> CacheRegion:
        if not self._started:
            raise RegionCacheError(
                f"Region factory must be started before building region [{namespace.name}]",
                error_code="FACTORY_NOT_STARTED"
            )

        region = CacheRegion(
            namespace,
            self._properties,
            self._store,
            structured_entries_enabled=self._structured_entries_enabled,
            timestamper=self._timestamper,
        )
        logger.debug(f"Built {region!r}")
        return region

    def __enter__(self) -> "RegionFactory":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
