"""
Leaf field resolvers that prefer a value already present on the parent
"""

from collections.abc import Callable, Mapping
from typing import Any

import strawberry
from graphql import GraphQLResolveInfo

from .types import Resolver
from .values import is_unset

# (parent, args, context, info) -> value
ParentExtractor = Callable[[Any, dict[str, Any], Any, GraphQLResolveInfo], Any]


def read_parent_field(parent: Any, field_name: str) -> Any:
    """Read ``field_name`` off a mapping or an object; missing means UNSET."""
    if parent is None:
        return strawberry.UNSET
    if isinstance(parent, Mapping):
        return parent.get(field_name, strawberry.UNSET)
    return getattr(parent, field_name, strawberry.UNSET)


def field_resolver(
    default_resolver: Resolver,
    get_data_from_parent: ParentExtractor | None = None,
) -> Resolver:
    """
    Build a resolver that returns the parent's value when there is one.

    Falls back to ``default_resolver(parent, info, **args)`` when the value is
    UNSET. The fallback result is returned as-is, awaitable or not, and its
    errors propagate unchanged.
    """

    def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        if get_data_from_parent is not None:
            field_value = get_data_from_parent(parent, args, info.context, info)
        else:
            field_value = read_parent_field(parent, info.field_name)

        if not is_unset(field_value):
            return field_value

        return default_resolver(parent, info, **args)

    return resolve
