"""Environment-driven settings for region-cache.

Settings are read with pydantic-settings (REGION_CACHE_* variables or a .env
file) and flattened into the property keys the regions consume.
"""

from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import PropertyKeys, StoreBackend
from .properties import OverridableProperties


class RegionCacheSettings(BaseSettings):
    """Global region cache settings."""

    model_config = SettingsConfigDict(
        env_prefix="REGION_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Store backend
    backend: StoreBackend = Field(default=StoreBackend.MEMORY, description="Key-value store adapter")
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    key_prefix: str = Field(default="", description="Prefix for every store key")

    # Expiry policy
    default_expiry_seconds: Optional[int] = Field(default=None, ge=0, description="Default region expiry")
    region_expiry_seconds: Dict[str, int] = Field(
        default_factory=dict,
        description="Per-region expiry overrides keyed by region name"
    )

    # Entry versioning
    use_structured_entries: bool = Field(default=False, description="Values are stored as structured mappings")

    @field_validator("region_expiry_seconds")
    @classmethod
    def validate_region_expiry(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Reject negative per-region expiry values."""
        for region_name, seconds in v.items():
            if seconds < 0:
                raise ValueError(f"Expiry for region {region_name} must be non-negative, got {seconds}")
        return v

    def to_properties(self) -> OverridableProperties:
        """Flatten settings into region-cache property keys."""
        base = {
            PropertyKeys.KEY_PREFIX: self.key_prefix,
            PropertyKeys.REDIS_URL: self.redis_url,
            PropertyKeys.USE_STRUCTURED_ENTRIES: str(self.use_structured_entries).lower(),
            PropertyKeys.EXPIRY_SECONDS_PREFIX: self.default_expiry_seconds,
        }
        overrides = {
            f"{PropertyKeys.EXPIRY_SECONDS_PREFIX}.{name}": seconds
            for name, seconds in self.region_expiry_seconds.items()
        }
        return OverridableProperties(base, overrides)
