"""Uniform key/value view over the two record shapes FieldMapper accepts.

A record is either a mapping (``dict``, ``MappingProxyType``, any
``collections.abc.Mapping``) or an object with named fields (a dataclass
instance or anything with a ``__dict__``, including Entity subclasses and
pydantic models). ``as_record()`` wraps either in an adapter exposing
``keys()``, ``get()`` and ``set()``, so the copy pass is written once against
the Record protocol.

Mappings are always treated as mappings, even when they also carry a
``__dict__``. Writing into a read-only mapping fails with the mapping's own
TypeError.
"""

import dataclasses
from collections.abc import Mapping
from typing import Any, Protocol

from basalmodel.contracts.errors import InvalidRecordError
from basalmodel.sentinels import MISSING


class Record(Protocol):
    """Key/value access to a wrapped record."""

    def keys(self) -> list[str]:
        """Field names or keys currently present on the record."""
        ...

    def get(self, key: str) -> Any:
        """Value at ``key``, or MISSING if the record has no such key."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` at ``key``, creating it if needed."""
        ...

    def unwrap(self) -> Any:
        """The wrapped mapping or object."""
        ...


class MappingRecord:
    """Record adapter for mappings."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def get(self, key: str) -> Any:
        if key not in self._data:
            return MISSING
        return self._data[key]

    def set(self, key: str, value: Any) -> None:
        # Read-only mappings raise their own TypeError here
        self._data[key] = value  # type: ignore[index]

    def unwrap(self) -> Mapping[str, Any]:
        return self._data


class ObjectRecord:
    """Record adapter for objects with named fields.

    Only public fields are visible: names starting with ``_`` are never
    enumerated. Dataclass instances enumerate their declared fields (so
    slotted dataclasses work); other objects enumerate their instance
    ``__dict__``.
    """

    __slots__ = ("_obj", "_dataclass_fields")

    def __init__(self, obj: Any) -> None:
        self._obj = obj
        # Dataclass fields are fixed per class; look them up once
        self._dataclass_fields: frozenset[str] | None = None
        if dataclasses.is_dataclass(obj):
            self._dataclass_fields = frozenset(f.name for f in dataclasses.fields(obj))

    def keys(self) -> list[str]:
        if dataclasses.is_dataclass(self._obj):
            names = [f.name for f in dataclasses.fields(self._obj)]
        else:
            names = list(vars(self._obj))
        return [name for name in names if not name.startswith("_")]

    def _has(self, key: str) -> bool:
        if key.startswith("_"):
            return False
        if self._dataclass_fields is not None:
            return key in self._dataclass_fields
        return key in vars(self._obj)

    def get(self, key: str) -> Any:
        if not self._has(key):
            return MISSING
        return getattr(self._obj, key)

    def set(self, key: str, value: Any) -> None:
        setattr(self._obj, key, value)

    def unwrap(self) -> Any:
        return self._obj


def _is_field_object(value: Any) -> bool:
    if isinstance(value, type):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return hasattr(value, "__dict__")


def as_record(value: Any, *, role: str) -> Record:
    """Wrap ``value`` in the matching Record adapter.

    Args:
        value: Mapping or object with fields
        role: Argument name used in the error message ("primary" or "other")

    Raises:
        InvalidRecordError: If ``value`` is neither shape.
    """
    if isinstance(value, Mapping):
        return MappingRecord(value)
    if _is_field_object(value):
        return ObjectRecord(value)
    raise InvalidRecordError(role, type(value).__name__)
