"""
Short-circuiting evaluation of authorization check trees
"""

import inspect
from collections.abc import Iterable, Mapping
from typing import Any

from .logging import get_logger
from .types import Checks, CheckTree, Predicate

logger = get_logger(__name__)


async def call_predicate(predicate: Predicate, *args: Any) -> bool:
    """Invoke a predicate that may be sync or async and coerce its result to bool."""
    result = predicate(*args)
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


async def all_pass(predicates: Iterable[Predicate], context: Any, args: dict[str, Any]) -> bool:
    """
    True only if every predicate returns True.

    Predicates run left to right and evaluation stops at the first False;
    the remaining predicates are never called.
    """
    passed = True
    for predicate in predicates:
        if not passed:
            return False
        passed = await call_predicate(predicate, context, args)
    return passed


async def any_pass(predicates: Iterable[Predicate], context: Any, args: dict[str, Any]) -> bool:
    """
    True if at least one predicate returns True.

    Predicates run left to right and evaluation stops at the first True;
    the remaining predicates are never called.
    """
    passed = False
    for predicate in predicates:
        if passed:
            return True
        passed = await call_predicate(predicate, context, args)
    return passed


def normalize_checks(checks: CheckTree | None) -> Checks:
    """Turn any accepted check tree shape into a ``Checks`` record."""
    if checks is None:
        return Checks()
    if isinstance(checks, Checks):
        return checks
    if isinstance(checks, Mapping):
        return Checks.from_mapping(checks)
    if callable(checks):
        raise TypeError("Check tree must be a sequence of predicates, not a single callable")
    return Checks(all=tuple(checks))


async def evaluate_checks(checks: CheckTree | None, context: Any, args: dict[str, Any]) -> bool:
    """
    Evaluate a check tree against ``(context, args)``.

    A plain sequence is an AND group. A grouped tree requires its ``all``
    group and its ``any`` group to pass; an absent or empty group passes.
    The ``any`` group is skipped once the ``all`` group has failed: the
    result is already decided, and predicates may have side effects.
    """
    tree = normalize_checks(checks)

    if tree.all and not await all_pass(tree.all, context, args):
        logger.debug("Check tree failed", group="all")
        return False

    if tree.any and not await any_pass(tree.any, context, args):
        logger.debug("Check tree failed", group="any")
        return False

    return True
