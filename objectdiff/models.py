"""Data models for the objectdiff engine."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .exceptions import ConfigError
from .utils import type_name

Accessor = Callable[[Any], Any]


@dataclass
class EngineConfig:
    """Global configuration for the comparison engine."""
    global_ignores: list[str] = field(default_factory=list)
    count_property_name: str = "Count"
    item_name_format: str = "Item[{index}]"

    def __post_init__(self):
        if not isinstance(self.global_ignores, (list, tuple, set, frozenset)) or not all(
            isinstance(name, str) for name in self.global_ignores
        ):
            raise ConfigError(
                "global_ignores must be a list of field names",
                {"global_ignores": self.global_ignores}
            )
        if not isinstance(self.count_property_name, str) or not self.count_property_name:
            raise ConfigError(
                "count_property_name must be a non-empty string",
                {"count_property_name": self.count_property_name}
            )
        if not isinstance(self.item_name_format, str) or "{index}" not in self.item_name_format:
            raise ConfigError(
                "item_name_format must contain an '{index}' placeholder",
                {"item_name_format": self.item_name_format}
            )

    def item_name(self, index: int, property_name: str) -> str:
        """Build the reported name of a field on a sequence element."""
        return f"{self.item_name_format.format(index=index)}.{property_name}"


@dataclass(frozen=True)
class FieldDescriptor:
    """A comparable named member of a value's type."""
    name: str
    declared_type: Any
    comparable_type: Any
    accessor: Accessor

    def resolve_types(self, value: Any) -> tuple[Any, Any]:
        """
        Return the (declared, comparable) types of a value read from this field.

        Fields without a static declaration are typed by the value they hold.
        """
        if self.declared_type is None:
            runtime = type(value)
            return runtime, runtime
        return self.declared_type, self.comparable_type


@dataclass(frozen=True)
class Difference:
    """A single difference found during comparison."""
    property_name: str
    source_value: Any = None
    destination_value: Any = None
    source_type: Any = None
    destination_type: Any = None

    def to_dict(self) -> dict:
        return {
            "property_name": self.property_name,
            "source_value": self.source_value,
            "destination_value": self.destination_value,
            "source_type": type_name(self.source_type),
            "destination_type": type_name(self.destination_type),
        }


@dataclass(frozen=True)
class ComparisonReport:
    """Complete comparison report."""
    are_equal: bool
    differences: tuple[Difference, ...] = ()

    def to_dict(self) -> dict:
        return {
            "are_equal": self.are_equal,
            "differences": [d.to_dict() for d in self.differences],
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize the report, rendering non-JSON values with str()."""
        return json.dumps(self.to_dict(), indent=indent, default=str)
