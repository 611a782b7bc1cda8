"""Member enumeration: discovers the comparable fields of a value."""

from __future__ import annotations

import dataclasses
import logging
import numbers
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from functools import cached_property, lru_cache
from types import MappingProxyType
from typing import (
    Any,
    Iterable,
    NamedTuple,
    Optional,
    Protocol,
    get_type_hints,
    runtime_checkable,
)

from .accessors import AccessorCache, default_cache
from .exceptions import FieldEnumerationError
from .models import FieldDescriptor
from .utils import is_public, normalize_ignore, unwrap_optional

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, bytes, bytearray, memoryview, numbers.Number, Enum)


@runtime_checkable
class FieldEnumerable(Protocol):
    """
    Types that declare their own comparable fields.

    ``__diff_fields__`` (a classmethod or a plain class attribute) holds
    either field names (types are then taken from the class annotations,
    or from the values at runtime) or a mapping of field name to declared
    type. Fields are read by attribute, even on mapping types.
    """

    @classmethod
    def __diff_fields__(cls) -> Iterable[str] | Mapping[str, Any]:
        ...


class _Layout(NamedTuple):
    """Statically known members of a class."""
    fields: tuple[tuple[str, Any], ...]
    slots: tuple[str, ...]
    properties: tuple[tuple[str, Any], ...]
    hints: Mapping[str, Any]
    closed: bool
    # declared fields an instance may leave unset (dataclass init=False, no default)
    optional_fields: tuple[str, ...] = ()


def _type_hints(obj: Any) -> dict[str, Any]:
    """Resolve annotations, keeping only the evaluated ones if resolution fails."""
    try:
        return get_type_hints(obj)
    except (NameError, TypeError, AttributeError):
        raw = getattr(obj, "__annotations__", None) or {}
        return {name: hint for name, hint in raw.items() if not isinstance(hint, str)}


def _is_named_tuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def _collect_properties(cls: type) -> tuple[tuple[str, Any], ...]:
    """Readable properties in definition order, base classes first."""
    found: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if not is_public(name):
                continue
            if isinstance(member, property) and member.fget is not None:
                found[name] = _type_hints(member.fget).get("return")
            elif isinstance(member, cached_property):
                found[name] = _type_hints(member.func).get("return")
            elif name in found:
                # overridden by something that is not a readable property
                del found[name]
    return tuple(found.items())


def _collect_slots(cls: type) -> tuple[str, ...]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if is_public(name) and name not in names:
                names.append(name)
    return tuple(names)


@lru_cache(maxsize=None)
def _class_layout(cls: type) -> _Layout:
    """Compute (once per type) the members a class declares."""
    hints = _type_hints(cls)

    if hasattr(cls, "__diff_fields__"):
        declared = cls.__diff_fields__
        if callable(declared):
            declared = declared()
        if isinstance(declared, Mapping):
            items = declared.items()
        else:
            items = ((name, hints.get(name)) for name in declared)
        fields = tuple((name, hint) for name, hint in items if is_public(name))
        return _Layout(fields, (), (), MappingProxyType(hints), True)

    properties = _collect_properties(cls)

    if dataclasses.is_dataclass(cls):
        fields = tuple(
            (f.name, hints.get(f.name, None if isinstance(f.type, str) else f.type))
            for f in dataclasses.fields(cls)
            if is_public(f.name)
        )
        optional_fields = tuple(
            f.name for f in dataclasses.fields(cls)
            if not f.init
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        )
        return _Layout(fields, (), properties, MappingProxyType(hints), True, optional_fields)

    if _is_named_tuple(cls):
        fields = tuple((name, hints.get(name)) for name in cls._fields if is_public(name))
        return _Layout(fields, (), properties, MappingProxyType(hints), True)

    return _Layout((), _collect_slots(cls), properties, MappingProxyType(hints), False)


class MemberEnumerator:
    """
    Produces the comparable fields of a value as name -> FieldDescriptor.

    Handles:
    - Types declaring their own fields (``FieldEnumerable``)
    - Mappings (string keys, typed at runtime)
    - Dataclasses and named tuples (declaration order)
    - Plain objects (instance attributes, set slots, readable properties)

    Only public names are returned. The same type always yields the same
    names in the same order.
    """

    def __init__(self, cache: Optional[AccessorCache] = None):
        self.cache = cache if cache is not None else default_cache

    def enumerate(
        self,
        value: Any,
        ignore: Optional[Iterable[str]] = None
    ) -> dict[str, FieldDescriptor]:
        """
        Enumerate the comparable fields of a value.

        Args:
            value: The composite value to inspect
            ignore: Field names to leave out

        Returns:
            Ordered mapping of field name to descriptor

        Raises:
            FieldEnumerationError: If the value has no introspectable fields
        """
        excluded = normalize_ignore(ignore)
        owner = type(value)
        descriptors: dict[str, FieldDescriptor] = {}

        members, by_key = self._members(value, owner)
        for name, declared in members:
            if name in excluded:
                continue
            descriptors[name] = FieldDescriptor(
                name=name,
                declared_type=declared,
                comparable_type=None if declared is None else unwrap_optional(declared),
                accessor=self.cache.get_or_compile(owner, name, by_key),
            )

        return descriptors

    def _members(self, value: Any, owner: type) -> tuple[Iterable[tuple[str, Any]], bool]:
        """Return the (name, declared type) members and whether they are read by key."""
        if not isinstance(value, FieldEnumerable):
            if isinstance(value, Mapping):
                return self._mapping_members(value, owner), True
            if isinstance(value, _SCALAR_TYPES):
                raise FieldEnumerationError(owner, "scalar values have no fields")
            if isinstance(value, (Sequence, Set)) and not _is_named_tuple(owner):
                raise FieldEnumerationError(owner, "collections have no fields")

        layout = _class_layout(owner)
        if layout.closed:
            members = dict(layout.fields)
            for name in layout.optional_fields:
                if name in members and not hasattr(value, name):
                    del members[name]
        else:
            members = self._instance_members(value, owner, layout)
        for name, declared in layout.properties:
            if members.get(name) is None:
                members[name] = declared
        return members.items(), False

    def _mapping_members(self, value: Mapping, owner: type) -> list[tuple[str, Any]]:
        members = []
        for key in value:
            if isinstance(key, str):
                members.append((key, None))
            else:
                logger.debug("Skipping non-string key %r of %s", key, owner.__qualname__)
        return members

    def _instance_members(self, value: Any, owner: type, layout: _Layout) -> dict[str, Any]:
        instance_dict = getattr(value, "__dict__", None)
        if instance_dict is None and not layout.slots and not layout.properties:
            raise FieldEnumerationError(owner, "no introspectable fields")

        members: dict[str, Any] = {}
        for name in instance_dict or ():
            if is_public(name):
                members[name] = layout.hints.get(name)
        for name in layout.slots:
            if name not in members and hasattr(value, name):
                members[name] = layout.hints.get(name)
        return members
