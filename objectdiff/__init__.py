"""
objectdiff - Field-level comparison of Python objects

Compares the top-level public fields of two values (dataclasses, named
tuples, mappings, plain objects) and reports which fields differ, with
both values and their declared types.
"""

from .accessors import AccessorCache, default_cache
from .config import load_config
from .engine import ObjectComparer, compare, compare_lists
from .enumerator import FieldEnumerable, MemberEnumerator
from .exceptions import ConfigError, FieldEnumerationError, ObjectDiffError
from .extensions import Comparable
from .models import (
    ComparisonReport,
    Difference,
    EngineConfig,
    FieldDescriptor,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "ObjectComparer",
    "compare",
    "compare_lists",
    "Comparable",
    "EngineConfig",
    "load_config",
    # Reports
    "ComparisonReport",
    "Difference",
    # Introspection
    "FieldDescriptor",
    "FieldEnumerable",
    "MemberEnumerator",
    "AccessorCache",
    "default_cache",
    # Errors
    "ObjectDiffError",
    "FieldEnumerationError",
    "ConfigError",
]
