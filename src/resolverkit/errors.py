"""
Error types raised by resolvers.

Every error carries a machine-checkable ``kind`` and an HTTP-like ``status``.
Both are mirrored into the GraphQL ``extensions`` so the engine's error
formatter can render them without knowing about these classes.
"""

from typing import Any

from graphql import GraphQLError


class ResolverError(GraphQLError):
    """Base class for categorized resolver errors."""

    kind: str = "INTERNAL"
    status: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None, **extensions: Any) -> None:
        super().__init__(
            message or self.default_message,
            extensions={"code": self.kind, "status": self.status, **extensions},
        )


class AccessDeniedError(ResolverError):
    """Raised when a check tree or an authorization predicate denies access."""

    kind = "FORBIDDEN"
    status = 403
    default_message = "Access denied"


class NotFoundError(ResolverError):
    """Raised when a keyed lookup yields nothing of the expected entity type."""

    kind = "NOT_FOUND"
    status = 404
    default_message = "No entry with such id found"


class UnknownModelError(LookupError):
    """Raised by a store asked about a model name it has no mapping for."""


__all__ = [
    "AccessDeniedError",
    "NotFoundError",
    "ResolverError",
    "UnknownModelError",
]
