"""Cache key shapes understood by the key refiner.

Consumers may pass any value with a stable ``str()`` form as a cache key.
Keys that belong to a tenant expose it either through a public ``tenant_id``
attribute (TenantAwareKey) or by naming a private attribute in
``__tenant_field__`` for structural lookup.
"""

import zlib
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class TenantAwareKey(Protocol):
    """Key exposing the tenant it belongs to."""

    tenant_id: Optional[str]


@dataclass(frozen=True)
class EntityCacheKey:
    """Key of a cached entity or collection, scoped to a tenant.

    The string form and hash code do not include the tenant; tenant
    partitioning happens in the refined key.
    """

    identifier: Any
    entity_name: str
    tenant_id: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.entity_name}#{self.identifier}"

    def cache_hash_code(self) -> int:
        """Stable hash code used as secondary key disambiguator."""
        return zlib.crc32(f"{self.entity_name}#{self.identifier!r}".encode("utf-8"))


class QueryResultsKey:
    """Key of a cached query result.

    The tenant identifier is kept private, as the persistence layer does for
    its own query keys; the refiner reaches it through ``__tenant_field__``.
    """

    __tenant_field__ = "_tenant_identifier"

    def __init__(
        self,
        sql: str,
        parameters: Tuple[Any, ...] = (),
        named_parameters: Optional[Mapping[str, Any]] = None,
        first_row: Optional[int] = None,
        max_rows: Optional[int] = None,
        tenant_identifier: Optional[str] = None
    ):
        self.sql = sql
        self.parameters = tuple(parameters)
        self.named_parameters = dict(sorted((named_parameters or {}).items()))
        self.first_row = first_row
        self.max_rows = max_rows
        self._tenant_identifier = tenant_identifier

    def _identity(self) -> Tuple[Any, ...]:
        return (
            self.sql,
            self.parameters,
            tuple(self.named_parameters.items()),
            self.first_row,
            self.max_rows,
            self._tenant_identifier,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, QueryResultsKey):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __str__(self) -> str:
        text = f"sql: {self.sql}; parameters: {list(self.parameters)}"
        if self.named_parameters:
            text += f"; named parameters: {self.named_parameters}"
        if self.first_row is not None:
            text += f"; first row: {self.first_row}"
        if self.max_rows is not None:
            text += f"; max rows: {self.max_rows}"
        return text

    def __repr__(self) -> str:
        return f"QueryResultsKey({self})"

    def cache_hash_code(self) -> int:
        """Stable hash code used as secondary key disambiguator."""
        return zlib.crc32(str(self).encode("utf-8"))
