"""
Access-control gate for arbitrary resolvers
"""

import functools
import inspect
from collections.abc import Callable
from typing import Any

from graphql import GraphQLResolveInfo

from .checks import evaluate_checks
from .errors import AccessDeniedError
from .logging import get_logger
from .types import CheckTree, Resolver

logger = get_logger(__name__)


def resolver_guard(operation: Resolver, checks: CheckTree | None) -> Resolver:
    """
    Wrap ``operation`` so it only runs once ``checks`` pass.

    The check tree is evaluated against ``(info.context, args)``. On failure
    an ``AccessDeniedError`` is raised and ``operation`` is never called;
    otherwise its result (awaited if needed) is returned unchanged.

    The wrapper is always a coroutine function because the predicates are
    awaited first, so a sync ``operation`` becomes async once guarded.
    graphql-core awaits either kind of resolver.
    """

    @functools.wraps(operation)
    async def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        # Predicates get a snapshot so they cannot change what the operation sees
        if not await evaluate_checks(checks, info.context, dict(args)):
            logger.info("Access denied by resolver guard", field=info.field_name)
            raise AccessDeniedError()

        result = operation(parent, info, **args)
        if inspect.isawaitable(result):
            result = await result
        return result

    return resolve


def guarded(checks: CheckTree | None) -> Callable[[Resolver], Resolver]:
    """Decorator form of :func:`resolver_guard`."""

    def decorator(operation: Resolver) -> Resolver:
        return resolver_guard(operation, checks)

    return decorator
