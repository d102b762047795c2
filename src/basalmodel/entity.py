"""Entity base class: key-based field access with accessor overrides.

Subclasses declare their fields as annotated class attributes. Every declared
field can then be read and written by name, through ``entity[name]``,
``read()``/``write()`` or the generated ``get_<name>()``/``set_<name>()``
methods. Defining a real ``get_<name>`` or ``set_<name>`` method on the class
overrides access for that one field; every other field falls through to plain
attribute access with validation.

Example:
    class User(Entity):
        id: int | None = None
        first_name: str = ""
        last_name: str = ""
        _password_hash: str | None = None

        def get_full_name(self) -> str:
            return f"{self.first_name} {self.last_name}".strip()

    user = User(id=7).set_first_name("Ada").set_last_name("Lovelace")
    user["full_name"]          # "Ada Lovelace" (computed, no literal field)
    user.get_id()              # 7 (generated accessor)
    user["_password_hash"]     # InvalidFieldError (private)
    user["email"]              # InvalidFieldError (undeclared)
"""

import copy
import inspect
import typing
from collections.abc import Callable, Iterable, Mapping
from typing import Any, ClassVar

from basalmodel.contracts.errors import InvalidFieldError, UnknownOperationError

PRIVATE_PREFIX = "_"
GETTER_PREFIX = "get_"
SETTER_PREFIX = "set_"


def _is_class_var(annotation: Any) -> bool:
    if annotation is ClassVar or typing.get_origin(annotation) is ClassVar:
        return True
    # String annotations under `from __future__ import annotations`
    return isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar"))


def _declared_fields(cls: type) -> tuple[str, ...]:
    """Annotated instance fields across the MRO, base classes first."""
    fields: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, annotation in inspect.get_annotations(klass).items():
            if not _is_class_var(annotation):
                fields[name] = None
    return tuple(fields)


class Entity:
    """Base class for records with uniform, validated field access.

    A field name is valid when it does not start with ``_`` and is declared
    as an annotated attribute on the class (or a base class). Field values
    live as ordinary instance attributes, so ``entity.first_name`` works too;
    only name-based access goes through validation and accessor overrides.
    """

    _fields: ClassVar[tuple[str, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._fields = _declared_fields(cls)

    def __init__(self, **values: Any) -> None:
        cls = type(self)
        # Each instance gets its own copy of mutable defaults (lists, dicts)
        for name in cls._fields:
            object.__setattr__(self, name, copy.deepcopy(getattr(cls, name, None)))
        self.write_many(values)

    # -- accessor detection ------------------------------------------------

    @classmethod
    def _accessor(cls, prefix: str, name: str) -> Callable[..., Any] | None:
        """Accessor method defined on the class itself (never a dispatched one)."""
        method = getattr(cls, f"{prefix}{name}", None)
        return method if callable(method) else None

    def _has_computed_getter(self, name: str) -> bool:
        return self._accessor(GETTER_PREFIX, name) is not None

    # -- single-field access -----------------------------------------------

    def validate_field(self, name: str) -> bool:
        """Check that ``name`` is a public, declared field.

        Raises:
            InvalidFieldError: If the name is private or not declared on this class.
        """
        record_type = type(self).__name__
        if name.startswith(PRIVATE_PREFIX):
            raise InvalidFieldError.private(name, record_type)
        if name not in self._fields:
            raise InvalidFieldError.undeclared(name, record_type)
        return True

    def exists(self, name: str) -> bool:
        """True if ``name`` has a computed getter or is a valid field.

        The computed getter is checked first, so computed-only names never
        raise. Otherwise this raises like ``validate_field``; use
        ``name in entity`` for a plain boolean.
        """
        return self._has_computed_getter(name) or self.validate_field(name)

    def read(self, name: str) -> Any:
        """Return the value of ``name``, via ``get_<name>()`` if the class defines one."""
        getter = self._accessor(GETTER_PREFIX, name)
        if getter is not None:
            return getter(self)
        self.validate_field(name)
        return getattr(self, name)

    def write(self, name: str, value: Any) -> None:
        """Assign ``name``, via ``set_<name>(value)`` if the class defines one."""
        setter = self._accessor(SETTER_PREFIX, name)
        if setter is not None:
            setter(self, value)
            return
        self.validate_field(name)
        object.__setattr__(self, name, value)

    def remove(self, name: str) -> None:
        """Clear a literal field back to None. Accessor overrides do not apply."""
        self.validate_field(name)
        object.__setattr__(self, name, None)

    # -- bulk access ---------------------------------------------------------

    def read_many(self, names: Iterable[str]) -> dict[str, Any]:
        """Read several fields; keys follow ``names`` order."""
        return {name: self.read(name) for name in names}

    def write_many(self, values: Mapping[str, Any]) -> None:
        """Write several fields in the mapping's iteration order."""
        for name, value in values.items():
            self.write(name, value)

    def field_names(self) -> set[str]:
        """Declared public field names."""
        return {name for name in self._fields if not name.startswith(PRIVATE_PREFIX)}

    # -- mapping-style sugar -------------------------------------------------

    def __getitem__(self, name: str) -> Any:
        return self.read(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.write(name, value)

    def __delitem__(self, name: str) -> None:
        self.remove(name)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        try:
            return self.exists(name)
        except InvalidFieldError:
            return False

    # -- generated get_<name>/set_<name> -------------------------------------

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, so real methods always win
        if name.startswith(PRIVATE_PREFIX):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

        if name.startswith(GETTER_PREFIX) and len(name) > len(GETTER_PREFIX):
            field = name[len(GETTER_PREFIX) :]

            def getter() -> Any:
                return self.read(field)

            return getter

        if name.startswith(SETTER_PREFIX) and len(name) > len(SETTER_PREFIX):
            field = name[len(SETTER_PREFIX) :]

            def setter(value: Any) -> "Entity":
                self.write(field, value)
                return self

            return setter

        raise UnknownOperationError(type(self).__name__, name)

    def __repr__(self) -> str:
        values = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields if not name.startswith(PRIVATE_PREFIX))
        return f"{type(self).__name__}({values})"
