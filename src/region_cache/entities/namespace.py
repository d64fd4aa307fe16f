"""Cache namespace entity."""

from dataclasses import dataclass

from ..config.constants import StoreLimits


@dataclass(frozen=True)
class CacheNamespace:
    """Logical cache region name.

    Every key issued against the store is partitioned by the namespace name,
    and expiry configuration is looked up by it. Query-results regions set
    ``is_query_region`` so adapters can invalidate them in bulk by bumping a
    namespace sequence; they never carry a typed class description.
    """

    name: str
    is_query_region: bool = False

    def __post_init__(self):
        """Validate namespace name."""
        if not self.name or not self.name.strip():
            raise ValueError("Namespace name cannot be empty")
        if StoreLimits.NAMESPACE_SEPARATOR in self.name:
            raise ValueError(
                f"Namespace name cannot contain '{StoreLimits.NAMESPACE_SEPARATOR}': {self.name!r}"
            )

    def __str__(self) -> str:
        return self.name
