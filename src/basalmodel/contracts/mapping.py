"""Mapping table value types for FieldMapper."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from basalmodel.contracts.enums import Direction

TransformFn: TypeAlias = Callable[[Any, Any, Any], Any]
"""Transformation callable: ``(value, primary_record, other_record) -> new value``."""

TransformRegistry: TypeAlias = Mapping[str, TransformFn]


@dataclass(frozen=True, slots=True)
class MappingEntry:
    """How one primary-side field relates to the other record.

    Attributes:
        other_key: Field name or key on the other record
        to_primary: Transform id applied when pulling other -> primary
        from_primary: Transform id applied when pushing primary -> other
    """

    other_key: str
    to_primary: str
    from_primary: str

    @classmethod
    def coerce(cls, value: "MappingEntry | tuple[str, str, str] | list[str]") -> "MappingEntry":
        """Build an entry from a MappingEntry or a 3-item ``(other_key, to_primary, from_primary)`` sequence."""
        if isinstance(value, MappingEntry):
            return value
        if not isinstance(value, tuple | list) or len(value) != 3:
            raise ValueError(f"mapping entry must be (other_key, to_primary, from_primary), got {value!r}")
        if not all(isinstance(part, str) for part in value):
            raise ValueError(f"mapping entry items must be strings, got {value!r}")
        other_key, to_primary, from_primary = value
        return cls(other_key, to_primary, from_primary)

    def transform_for(self, direction: Direction) -> str:
        """Transform id used for the given copy direction."""
        if direction is Direction.TO_PRIMARY:
            return self.to_primary
        return self.from_primary
