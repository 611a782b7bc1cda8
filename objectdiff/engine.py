"""Main comparison engine for objectdiff."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Optional, Sequence

from .accessors import AccessorCache, default_cache
from .enumerator import MemberEnumerator
from .models import ComparisonReport, Difference, EngineConfig, FieldDescriptor
from .utils import normalize_ignore, runtime_type_matches, values_equal

logger = logging.getLogger(__name__)


class ObjectComparer:
    """
    Compares the top-level fields of two values.

    Nested composite values are compared as whole field values and are not
    expanded; a changed nested object is a single difference.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        cache: Optional[AccessorCache] = None
    ):
        """
        Initialize the comparer.

        Args:
            config: Engine configuration (uses defaults if not provided)
            cache: Accessor cache (uses the process-wide cache if not provided)
        """
        self.config = config or EngineConfig()
        self.enumerator = MemberEnumerator(cache if cache is not None else default_cache)

    def compare(
        self,
        source: Any,
        destination: Any,
        ignore: Optional[Iterable[str]] = None
    ) -> ComparisonReport:
        """
        Compare the fields of two values.

        Args:
            source: The baseline value
            destination: The value compared against the baseline
            ignore: Field names excluded on both sides

        Returns:
            ComparisonReport listing mismatched, source-only and
            destination-only fields
        """
        if source is None and destination is None:
            return ComparisonReport(are_equal=True)

        # Nullness mismatch is unequal, but there is nothing to enumerate.
        if source is None or destination is None:
            return ComparisonReport(are_equal=False)

        excluded = self._excluded(ignore)
        source_fields = self.enumerator.enumerate(source, excluded)
        dest_fields = self.enumerator.enumerate(destination, excluded)

        differences: list[Difference] = []

        for name, source_field in source_fields.items():
            dest_field = dest_fields.pop(name, None)
            if dest_field is None:
                # Present in source, missing in destination
                value = source_field.accessor(source)
                differences.append(Difference(
                    property_name=name,
                    source_value=value,
                    destination_value=None,
                    source_type=source_field.resolve_types(value)[0],
                    destination_type=None
                ))
                continue

            difference = self._compare_field(source, destination, source_field, dest_field)
            if difference is not None:
                differences.append(difference)

        for name, dest_field in dest_fields.items():
            value = dest_field.accessor(destination)
            differences.append(Difference(
                property_name=name,
                source_value=None,
                destination_value=value,
                source_type=None,
                destination_type=dest_field.resolve_types(value)[0]
            ))

        logger.debug(
            "Compared %s with %s: %d difference(s)",
            type(source).__qualname__,
            type(destination).__qualname__,
            len(differences)
        )

        return ComparisonReport(
            are_equal=not differences,
            differences=tuple(differences)
        )

    def compare_lists(
        self,
        source: Optional[Sequence[Any]],
        destination: Optional[Sequence[Any]],
        ignore: Optional[Iterable[str]] = None
    ) -> ComparisonReport:
        """
        Compare two sequences element by element, position against position.

        Sequences of different lengths are not aligned: the report holds a
        single count difference instead.

        Args:
            source: The baseline sequence
            destination: The sequence compared against the baseline
            ignore: Field names excluded on every element

        Returns:
            ComparisonReport whose difference names are prefixed with the
            element index
        """
        if source is None and destination is None:
            return ComparisonReport(are_equal=True)

        source_count = None if source is None else len(source)
        dest_count = None if destination is None else len(destination)

        if source_count is None or dest_count is None or source_count != dest_count:
            return ComparisonReport(
                are_equal=False,
                differences=(Difference(
                    property_name=self.config.count_property_name,
                    source_value=source_count,
                    destination_value=dest_count,
                    source_type=None if source_count is None else int,
                    destination_type=None if dest_count is None else int
                ),)
            )

        excluded = self._excluded(ignore)
        all_equal = True
        differences: list[Difference] = []

        for index, (source_item, dest_item) in enumerate(zip(source, destination)):
            report = self.compare(source_item, dest_item, excluded)
            if not report.are_equal:
                all_equal = False
            differences.extend(
                replace(d, property_name=self.config.item_name(index, d.property_name))
                for d in report.differences
            )

        return ComparisonReport(
            are_equal=all_equal,
            differences=tuple(differences)
        )

    def _compare_field(
        self,
        source: Any,
        destination: Any,
        source_field: FieldDescriptor,
        dest_field: FieldDescriptor
    ) -> Optional[Difference]:
        """Compare one field present on both sides."""
        source_value = source_field.accessor(source)
        dest_value = dest_field.accessor(destination)

        source_type, source_comparable = source_field.resolve_types(source_value)
        dest_type, dest_comparable = dest_field.resolve_types(dest_value)

        if source_field.declared_type is None and dest_field.declared_type is not None:
            types_match = runtime_type_matches(dest_type, dest_comparable, source_comparable)
        elif dest_field.declared_type is None and source_field.declared_type is not None:
            types_match = runtime_type_matches(source_type, source_comparable, dest_comparable)
        else:
            types_match = source_comparable == dest_comparable

        if types_match and values_equal(source_value, dest_value):
            return None

        return Difference(
            property_name=source_field.name,
            source_value=source_value,
            destination_value=dest_value,
            source_type=source_type,
            destination_type=dest_type
        )

    def _excluded(self, ignore: Optional[Iterable[str]]) -> frozenset[str]:
        return normalize_ignore(ignore) | frozenset(self.config.global_ignores)


def compare(
    source: Any,
    destination: Any,
    ignore: Optional[Iterable[str]] = None,
    config: Optional[EngineConfig] = None
) -> ComparisonReport:
    """
    Convenience function to compare the fields of two values.

    Args:
        source: The baseline value
        destination: The value compared against the baseline
        ignore: Field names excluded on both sides
        config: Optional engine configuration

    Returns:
        ComparisonReport
    """
    return ObjectComparer(config).compare(source, destination, ignore)


def compare_lists(
    source: Optional[Sequence[Any]],
    destination: Optional[Sequence[Any]],
    ignore: Optional[Iterable[str]] = None,
    config: Optional[EngineConfig] = None
) -> ComparisonReport:
    """Convenience function to compare two sequences element by element."""
    return ObjectComparer(config).compare_lists(source, destination, ignore)
