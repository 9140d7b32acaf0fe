"""
Persistence collaborator interface used by the instance resolvers
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from enum import Enum
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class CachePolicy(Enum):
    """How a store may satisfy a lookup."""

    CACHE_FIRST = "cache-first"
    NO_CACHE = "no-cache"


class InstanceStore(Protocol):
    """Capabilities a persistence layer must provide to the resolvers."""

    async def fetch_instance_by_id(
        self,
        model_name: str,
        key: Any,
        *,
        context: Any,
        cache_policy: CachePolicy = CachePolicy.CACHE_FIRST,
        resolve_info: Any = None,
    ) -> Any | None:
        """Return the instance of ``model_name`` keyed by ``key``, or None.

        ``CachePolicy.NO_CACHE`` must force a fresh read from the authoritative store.
        """
        ...

    async def run_in_transaction(self, body: Callable[[Any], Awaitable[T]]) -> T:
        """Await ``body(transaction)`` inside a transaction.

        The transaction commits when ``body`` returns and rolls back when it raises.
        """
        ...

    async def update_instance(
        self, instance: Any, update_set: Mapping[str, Any], *, transaction: Any
    ) -> None: ...

    async def destroy_instance(self, instance: Any, *, transaction: Any) -> None: ...

    def is_instance_of(self, instance: Any, model_name: str) -> bool: ...


StoreProvider = Callable[[Any], InstanceStore]


def resolve_store(store: InstanceStore | StoreProvider, context: Any) -> InstanceStore:
    """Return the store to use for one operation.

    ``store`` is either a store shared by every call or a provider building a
    request-scoped one from the GraphQL context.
    """
    if hasattr(store, "fetch_instance_by_id"):
        return store
    return store(context)
