"""Method-style comparison for user types."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .engine import compare
from .models import ComparisonReport


class Comparable:
    """
    Mixin adding ``compare_to`` to a class.

    Usage:
        @dataclass
        class Person(Comparable):
            name: str
            age: int

        report = Person("John", 25).compare_to(Person("Jane", 30))
    """

    def compare_to(
        self,
        destination: Any,
        ignore: Optional[Iterable[str]] = None
    ) -> ComparisonReport:
        """
        Compare this value's fields with another value's.

        Args:
            destination: The value compared against this one
            ignore: Field names excluded on both sides

        Returns:
            ComparisonReport
        """
        return compare(self, destination, ignore)
