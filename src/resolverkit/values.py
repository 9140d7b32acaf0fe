"""
Helpers for filtering submitted values
"""

import dataclasses
from collections.abc import Mapping
from typing import Any

import strawberry


def is_unset(value: Any) -> bool:
    """Whether ``value`` is the "not provided" sentinel (``None`` is a real value)."""
    return value is strawberry.UNSET


def remove_undefined_values(values: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``values`` without the entries that were never provided.

    Explicit ``None`` values are kept so callers can clear a field.
    """
    return {key: value for key, value in values.items() if not is_unset(value)}


def input_to_dict(value: Any) -> dict[str, Any]:
    """
    Normalize mutation input into a plain dict.

    Accepts a mapping, a Strawberry input object (a dataclass) or nothing at all.
    Dataclass fields are read shallowly so nested inputs are passed through as-is.
    """
    if value is None or is_unset(value):
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    raise TypeError(f"Unsupported mutation input type: {type(value).__name__}")
