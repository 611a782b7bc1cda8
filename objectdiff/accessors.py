"""Per-(type, field) accessor cache."""

from __future__ import annotations

import logging
import threading
from operator import itemgetter

from .models import Accessor

logger = logging.getLogger(__name__)


def compile_accessor(name: str, by_key: bool = False) -> Accessor:
    """
    Build the function that reads one named field from a value.

    Args:
        name: Field name
        by_key: Read with item lookup (mappings) instead of attribute access

    Returns:
        Callable taking an instance and returning the field value
    """
    if by_key:
        return itemgetter(name)

    def read_attribute(instance):
        return getattr(instance, name)

    return read_attribute


class AccessorCache:
    """
    Memoizes field accessors keyed by ``(type, field_name)``.

    Accessors are compiled lazily on first use and kept for the lifetime of
    the cache. Only the extraction function is cached, never a value, so a
    cached accessor cannot produce stale reads. Whether a type is read by
    key or by attribute is decided by the caller once per type.

    Lookup and insert are serialized by a lock; compilation runs outside
    it. When two threads race on the same key, the first accessor stored
    wins and both callers receive it.
    """

    def __init__(self):
        self._accessors: dict[tuple[type, str], Accessor] = {}
        self._lock = threading.Lock()

    def get_or_compile(self, owner: type, name: str, by_key: bool = False) -> Accessor:
        key = (owner, name)
        with self._lock:
            accessor = self._accessors.get(key)
        if accessor is not None:
            return accessor

        compiled = compile_accessor(name, by_key)
        with self._lock:
            accessor = self._accessors.setdefault(key, compiled)
        if accessor is compiled:
            logger.debug("Compiled accessor for %s.%s", owner.__qualname__, name)
        return accessor

    def clear(self):
        with self._lock:
            self._accessors.clear()

    def __contains__(self, key: tuple[type, str]) -> bool:
        with self._lock:
            return key in self._accessors

    def __len__(self) -> int:
        with self._lock:
            return len(self._accessors)


# Process-wide cache shared by comparers that are not given their own.
default_cache = AccessorCache()
