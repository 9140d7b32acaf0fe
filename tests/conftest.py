"""
Shared pytest fixtures and configuration for all tests.
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any
from unittest.mock import MagicMock

import pytest
from graphql import GraphQLResolveInfo

from resolverkit.store import CachePolicy


class Record:
    """Minimal entity with arbitrary attributes."""

    def __init__(self, **fields: Any):
        self.__dict__.update(fields)

    def __repr__(self) -> str:
        return f"Record({self.__dict__!r})"


class OtherRecord:
    """Entity of a different model, used for type-mismatch tests."""

    def __init__(self, **fields: Any):
        self.__dict__.update(fields)


class RecordingStore:
    """
    In-memory InstanceStore that records every call in ``events``.

    Writes are buffered per transaction and only applied when the body returns,
    so a failing body leaves the stored data untouched.
    """

    def __init__(self, models: Mapping[str, type] | None = None):
        self.models = dict(models or {"Record": Record})
        self.rows: dict[tuple[str, Any], Any] = {}
        self.events: list[tuple] = []
        self.transactions_opened = 0

    def add(self, model_name: str, instance: Any) -> Any:
        self.rows[(model_name, instance.id)] = instance
        return instance

    def get(self, model_name: str, key: Any) -> Any | None:
        return self.rows.get((model_name, key))

    async def fetch_instance_by_id(
        self,
        model_name: str,
        key: Any,
        *,
        context: Any,
        cache_policy: CachePolicy = CachePolicy.CACHE_FIRST,
        resolve_info: Any = None,
    ) -> Any | None:
        self.events.append(("fetch", model_name, key, cache_policy))
        return self.rows.get((model_name, key))

    async def run_in_transaction(self, body: Callable[[Any], Awaitable[Any]]) -> Any:
        self.transactions_opened += 1
        transaction: list[Callable[[], None]] = []
        self.events.append(("begin",))
        try:
            result = await body(transaction)
        except Exception:
            self.events.append(("rollback",))
            raise
        for apply in transaction:
            apply()
        self.events.append(("commit",))
        return result

    async def update_instance(
        self, instance: Any, update_set: Mapping[str, Any], *, transaction: Any
    ) -> None:
        self.events.append(("update", dict(update_set)))
        transaction.append(lambda: instance.__dict__.update(update_set))

    async def destroy_instance(self, instance: Any, *, transaction: Any) -> None:
        self.events.append(("destroy", instance.id))
        model_name = next(name for name, model in self.models.items() if type(instance) is model)
        transaction.append(lambda: self.rows.pop((model_name, instance.id)))

    def is_instance_of(self, instance: Any, model_name: str) -> bool:
        return isinstance(instance, self.models[model_name])

    def event_names(self) -> list[str]:
        return [event[0] for event in self.events]


def make_info(context: Any = None, field_name: str = "node") -> MagicMock:
    """Create a mock GraphQL resolve info carrying ``context``."""
    info = MagicMock(spec=GraphQLResolveInfo)
    info.context = {} if context is None else context
    info.field_name = field_name
    return info


@pytest.fixture
def store() -> RecordingStore:
    """Store holding one Record with id 1."""
    recording_store = RecordingStore()
    recording_store.add("Record", Record(id=1, name="old"))
    return recording_store


@pytest.fixture
def info() -> MagicMock:
    return make_info({"viewer": MagicMock(is_authenticated=True)})


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
