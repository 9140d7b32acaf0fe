"""
InstanceStore implementation backed by a SQLAlchemy AsyncSession
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase

from ..errors import UnknownModelError
from ..logging import get_logger
from ..store import CachePolicy

logger = get_logger(__name__)

T = TypeVar("T")


class SQLAlchemyInstanceStore:
    """
    Store for mapped models, keyed by a model name.

    One store wraps one session, so it is meant to be request-scoped. The
    session factory should be built with ``expire_on_commit=False`` (see
    ``create_session_factory``) because instances are used after commit.
    """

    def __init__(self, session: AsyncSession, models: Mapping[str, type[DeclarativeBase]]):
        self.session = session
        self.models = dict(models)

    def get_model(self, model_name: str) -> type[DeclarativeBase]:
        try:
            return self.models[model_name]
        except KeyError:
            raise UnknownModelError(f"No model registered under '{model_name}'") from None

    async def fetch_instance_by_id(
        self,
        model_name: str,
        key: Any,
        *,
        context: Any,
        cache_policy: CachePolicy = CachePolicy.CACHE_FIRST,
        resolve_info: Any = None,
    ) -> Any | None:
        _ = context, resolve_info
        model = self.get_model(model_name)
        # populate_existing always emits a SELECT and refreshes the identity map
        return await self.session.get(
            model, key, populate_existing=cache_policy is CachePolicy.NO_CACHE
        )

    async def run_in_transaction(self, body: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """
        Await ``body(session)`` in a transaction of its own and commit it.

        Work already pending on the session (lookups, ``before_transaction``
        writes) sits outside the mutation boundary, so it is committed first.
        The mutation then commits on return and rolls back if ``body`` raises.
        """
        if self.session.in_transaction():
            logger.debug("Committing session work ahead of the mutation transaction")
            await self.session.commit()

        async with self.session.begin():
            return await body(self.session)

    async def update_instance(
        self, instance: Any, update_set: Mapping[str, Any], *, transaction: AsyncSession
    ) -> None:
        for field_name, value in update_set.items():
            setattr(instance, field_name, value)
        await transaction.flush()

    async def destroy_instance(self, instance: Any, *, transaction: AsyncSession) -> None:
        await transaction.delete(instance)
        await transaction.flush()

    def is_instance_of(self, instance: Any, model_name: str) -> bool:
        return isinstance(instance, self.get_model(model_name))
