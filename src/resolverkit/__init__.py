"""
resolverkit - reusable GraphQL resolvers for single-instance operations
"""

from .checks import all_pass, any_pass, evaluate_checks
from .config import settings
from .errors import AccessDeniedError, NotFoundError, ResolverError, UnknownModelError
from .fields import field_resolver
from .guard import guarded, resolver_guard
from .mutations import (
    DestroyHooks,
    UpdateHooks,
    destroy_instance_by_id,
    resolve_instance_by_id,
    update_instance_by_id,
)
from .store import CachePolicy, InstanceStore
from .types import Checks
from .values import remove_undefined_values

__version__ = "0.1.0"

__all__ = [
    "AccessDeniedError",
    "CachePolicy",
    "Checks",
    "DestroyHooks",
    "InstanceStore",
    "NotFoundError",
    "ResolverError",
    "UnknownModelError",
    "UpdateHooks",
    "all_pass",
    "any_pass",
    "destroy_instance_by_id",
    "evaluate_checks",
    "field_resolver",
    "guarded",
    "remove_undefined_values",
    "resolve_instance_by_id",
    "resolver_guard",
    "settings",
    "update_instance_by_id",
]
