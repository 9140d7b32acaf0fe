"""
Resolvers for fetching, updating and destroying a single instance by key.

Update and destroy run the same pipeline:

1. pre-authorize against ``(context, args)`` (no I/O yet)
2. load the instance with the cache bypassed
3. authorize against the loaded instance
4. preprocess the arguments (update only)
5. compute the update set, returning early when it is empty (update only)
6. ``before_transaction`` hook
7. ``inside_transaction`` hook plus the mutation, in one transaction
8. ``after_transaction`` hook, once the transaction has committed

Any failure stops the pipeline and propagates to the caller. A failure in
``after_transaction`` does not undo the committed transaction.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from graphql import GraphQLResolveInfo

from .checks import call_predicate
from .config import settings
from .errors import AccessDeniedError, NotFoundError
from .guard import resolver_guard
from .logging import get_logger, operation_context
from .store import CachePolicy, InstanceStore, StoreProvider, resolve_store
from .types import CheckTree, InstancePredicate, Predicate, Resolver
from .values import input_to_dict, remove_undefined_values

logger = get_logger(__name__)

# (context, instance, args) -> args
PreprocessHook = Callable[[Any, Any, dict[str, Any]], Awaitable[dict[str, Any]]]
# (context, args, instance) -> Any
StageHook = Callable[[Any, dict[str, Any], Any], Awaitable[Any]]
# (context, args, instance, transaction) -> Any
TransactionHook = Callable[[Any, dict[str, Any], Any, Any], Awaitable[Any]]


@dataclass(frozen=True)
class DestroyHooks:
    """Extension points of the destroy pipeline; every hook is optional."""

    before_transaction: StageHook | None = None
    inside_transaction: TransactionHook | None = None
    after_transaction: StageHook | None = None


@dataclass(frozen=True)
class UpdateHooks(DestroyHooks):
    """Extension points of the update pipeline; every hook is optional."""

    preprocess_input_data: PreprocessHook | None = None


def get_viewer(context: Any) -> Any:
    """Read the session subject from the GraphQL context, if there is one."""
    key = settings.viewer_context_key
    if isinstance(context, Mapping):
        return context.get(key)
    return getattr(context, key, None)


def has_viewer(context: Any) -> bool:
    viewer = get_viewer(context)
    if viewer is None:
        return False
    return bool(getattr(viewer, "is_authenticated", True))


async def pre_authorize(
    context: Any,
    args: dict[str, Any],
    authorize: Predicate | None,
    require_viewer: bool,
) -> None:
    """Deny access before any I/O happens."""
    if require_viewer and not has_viewer(context):
        logger.info("Access denied: no viewer in context")
        raise AccessDeniedError("Authentication required")

    if authorize is not None and not await call_predicate(authorize, context, args):
        logger.info("Access denied by authorization predicate")
        raise AccessDeniedError()


async def load_instance(
    store: InstanceStore,
    model_name: str,
    args: dict[str, Any],
    context: Any,
    primary_key: str,
) -> Any:
    """Fetch the instance to mutate, always bypassing caches."""
    key = args.get(primary_key)
    if key is None:
        logger.info("Instance key missing from arguments", primary_key=primary_key)
        raise NotFoundError()

    instance = await store.fetch_instance_by_id(
        model_name,
        key,
        context=context,
        cache_policy=CachePolicy.NO_CACHE,
    )
    if instance is None or not store.is_instance_of(instance, model_name):
        logger.info("Instance not found", key=str(key))
        raise NotFoundError()

    return instance


async def authorize_loaded_instance(
    context: Any,
    instance: Any,
    args: dict[str, Any],
    authorize_instance: InstancePredicate | None,
) -> None:
    if authorize_instance is None:
        return
    if not await call_predicate(authorize_instance, context, instance, args):
        logger.info("Access denied to instance")
        raise AccessDeniedError()


def resolve_instance_by_id(
    model_name: str,
    store: InstanceStore | StoreProvider,
    *,
    primary_key: str | None = None,
    checks: CheckTree | None = None,
) -> Resolver:
    """
    Build a resolver returning the instance keyed by ``args[primary_key]``.

    Reads may be served from the store's cache. Returns None when nothing is
    found. When ``checks`` is given the resolver is wrapped in a guard.
    """
    pk = primary_key or settings.primary_key_field

    async def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> Any | None:
        _ = parent
        key = args.get(pk)
        if key is None:
            return None

        return await resolve_store(store, info.context).fetch_instance_by_id(
            model_name,
            key,
            context=info.context,
            cache_policy=CachePolicy.CACHE_FIRST,
            resolve_info=info,
        )

    if checks is not None:
        return resolver_guard(resolve, checks)
    return resolve


def update_instance_by_id(
    model_name: str,
    store: InstanceStore | StoreProvider,
    *,
    primary_key: str | None = None,
    authorize: Predicate | None = None,
    require_viewer: bool = False,
    authorize_instance: InstancePredicate | None = None,
    hooks: UpdateHooks | None = None,
) -> Resolver:
    """Build a resolver applying ``args["input"]`` to the instance keyed by ``args[primary_key]``."""
    pk = primary_key or settings.primary_key_field
    hooks = hooks or UpdateHooks()

    async def resolve(parent: Any, info: GraphQLResolveInfo, **kwargs: Any) -> Any:
        _ = parent
        context = info.context
        args = dict(kwargs)

        with operation_context("update", model_name):
            await pre_authorize(context, args, authorize, require_viewer)

            instance_store = resolve_store(store, context)
            instance = await load_instance(instance_store, model_name, args, context, pk)
            await authorize_loaded_instance(context, instance, args, authorize_instance)

            if hooks.preprocess_input_data is not None:
                args = await hooks.preprocess_input_data(context, instance, args)

            update_set = remove_undefined_values(input_to_dict(args.get("input")))
            if not update_set:
                logger.debug("Nothing to update", key=str(args.get(pk)))
                return instance

            if hooks.before_transaction is not None:
                await hooks.before_transaction(context, args, instance)

            async def mutate(transaction: Any) -> None:
                if hooks.inside_transaction is not None:
                    await hooks.inside_transaction(context, args, instance, transaction)
                await instance_store.update_instance(instance, update_set, transaction=transaction)

            await instance_store.run_in_transaction(mutate)

            logger.info(
                "Instance updated",
                key=str(args.get(pk)),
                updated_fields=sorted(update_set),
            )

            if hooks.after_transaction is not None:
                await hooks.after_transaction(context, args, instance)

            return instance

    return resolve


def destroy_instance_by_id(
    model_name: str,
    store: InstanceStore | StoreProvider,
    *,
    primary_key: str | None = None,
    authorize: Predicate | None = None,
    require_viewer: bool = False,
    authorize_instance: InstancePredicate | None = None,
    hooks: DestroyHooks | None = None,
) -> Resolver:
    """Build a resolver destroying the instance keyed by ``args[primary_key]``.

    The destroyed instance is returned so the mutation can echo its fields.
    """
    pk = primary_key or settings.primary_key_field
    hooks = hooks or DestroyHooks()

    async def resolve(parent: Any, info: GraphQLResolveInfo, **kwargs: Any) -> Any:
        _ = parent
        context = info.context
        args = dict(kwargs)

        with operation_context("destroy", model_name):
            await pre_authorize(context, args, authorize, require_viewer)

            instance_store = resolve_store(store, context)
            instance = await load_instance(instance_store, model_name, args, context, pk)
            await authorize_loaded_instance(context, instance, args, authorize_instance)

            if hooks.before_transaction is not None:
                await hooks.before_transaction(context, args, instance)

            async def mutate(transaction: Any) -> None:
                if hooks.inside_transaction is not None:
                    await hooks.inside_transaction(context, args, instance, transaction)
                await instance_store.destroy_instance(instance, transaction=transaction)

            await instance_store.run_in_transaction(mutate)

            logger.info("Instance destroyed", key=str(args.get(pk)))

            if hooks.after_transaction is not None:
                await hooks.after_transaction(context, args, instance)

            return instance

    return resolve
