"""Utility functions for the objectdiff engine."""

from __future__ import annotations

import types
from typing import Any, Iterable, Optional, Union, get_args, get_origin

_NONE_TYPE = type(None)
_UNION_ORIGINS = (Union, types.UnionType)


def is_public(name: str) -> bool:
    """Check if a member name is part of a value's public surface."""
    return not name.startswith("_")


def normalize_ignore(ignore: Optional[Iterable[str]]) -> frozenset[str]:
    """
    Normalize an ignore specification into a set of field names.

    Args:
        ignore: Iterable of names, a single name, or None

    Returns:
        Frozen set of names to exclude
    """
    if not ignore:
        return frozenset()
    if isinstance(ignore, str):
        return frozenset((ignore,))
    return frozenset(ignore)


def unwrap_optional(declared: Any) -> Any:
    """
    Strip one level of Optional wrapping from a declared type.

    ``Optional[int]``, ``Union[int, None]`` and ``int | None`` all unwrap
    to ``int``. Unions with more than one non-None member are returned
    unchanged.
    """
    if get_origin(declared) in _UNION_ORIGINS:
        args = get_args(declared)
        if _NONE_TYPE in args:
            remaining = [arg for arg in args if arg is not _NONE_TYPE]
            if len(remaining) == 1:
                return remaining[0]
    return declared


def runtime_type_matches(declared: Any, comparable: Any, runtime: type) -> bool:
    """
    Check a value's runtime type against a field's declared type.

    Used when only one side of a comparison carries annotations. A
    parameterized annotation matches its origin (``list[str]`` matches
    ``list``), ``Any`` matches everything, and ``None`` matches any
    Optional declaration.

    Args:
        declared: The declared type as written
        comparable: The declared type with Optional unwrapped
        runtime: The type of the value on the untyped side

    Returns:
        True if the types reconcile
    """
    if comparable is Any:
        return True
    if runtime is _NONE_TYPE and get_origin(declared) in _UNION_ORIGINS:
        return _NONE_TYPE in get_args(declared)
    return (get_origin(comparable) or comparable) is runtime


def values_equal(source: Any, destination: Any) -> bool:
    """Check if two field values are equal (no coercion across runtime types)."""
    if source is destination:
        return True
    if source is None or destination is None:
        return False
    if type(source) is not type(destination):
        return False
    return bool(source == destination)


def type_name(declared: Any) -> Optional[str]:
    """Get a readable name for a declared type."""
    if declared is None:
        return None
    if isinstance(declared, type) and get_origin(declared) is None:
        return declared.__qualname__
    return repr(declared).replace("typing.", "")
