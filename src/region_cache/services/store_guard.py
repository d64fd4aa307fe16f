"""Store failure translation."""

from contextlib import contextmanager
from typing import Iterator, Optional

from ..entities.namespace import CacheNamespace
from ..exceptions import StoreUnavailableError


@contextmanager
def store_operation(
    operation: str,
    namespace: Optional[CacheNamespace] = None,
    key: Optional[str] = None
) -> Iterator[None]:
    """Surface any store collaborator failure as StoreUnavailableError."""
    try:
        yield
    except StoreUnavailableError:
        raise
    except Exception as e:
        raise StoreUnavailableError.for_operation(
            operation,
            namespace.name if namespace is not None else None,
            key,
            e
        ) from e
