"""
Shared type definitions for resolvers, predicates and check trees
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias


# (context, args) -> bool
Predicate: TypeAlias = Callable[[Any, dict[str, Any]], Awaitable[bool] | bool]

# (context, instance, args) -> bool
InstancePredicate: TypeAlias = Callable[[Any, Any, dict[str, Any]], Awaitable[bool] | bool]

# graphql-core field resolver shape: resolve(parent, info, **args)
Resolver: TypeAlias = Callable[..., Any]


@dataclass(frozen=True)
class Checks:
    """AND/OR grouping of predicates.

    ``all`` must pass entirely and at least one of ``any`` must pass.
    A group that is ``None`` or empty does not restrict access.
    """

    all: Sequence[Predicate] | None = None
    any: Sequence[Predicate] | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Sequence[Predicate] | None]) -> Checks:
        unknown = set(data) - {"all", "any", "or"}
        if unknown:
            raise ValueError(f"Unknown check groups: {sorted(unknown)}")
        if "any" in data and "or" in data:
            raise ValueError("Check tree may define 'any' or 'or', not both")
        return cls(all=data.get("all"), any=data.get("any", data.get("or")))


CheckTree: TypeAlias = Sequence[Predicate] | Checks | Mapping[str, Sequence[Predicate] | None]
