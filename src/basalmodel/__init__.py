"""
basalmodel: the basal building blocks of a data model.

Two independent pieces:

- Entity: key-based field access that routes through ``get_<name>`` /
  ``set_<name>`` accessors when a class defines them, with validation
  against private and undeclared fields.
- FieldMapper: table-driven, bidirectional copying between two records
  (mappings or objects) with a named transform per field and direction.
"""

from basalmodel.contracts.enums import BuiltinTransform, Direction, PushKey
from basalmodel.contracts.errors import (
    BasalModelError,
    InvalidFieldError,
    InvalidRecordError,
    MapperConfigError,
    UnknownOperationError,
)
from basalmodel.contracts.mapping import MappingEntry
from basalmodel.entity import Entity
from basalmodel.mapper import FieldMapper

__version__ = "0.3.0"

__all__ = [
    "BasalModelError",
    "BuiltinTransform",
    "Direction",
    "Entity",
    "FieldMapper",
    "InvalidFieldError",
    "InvalidRecordError",
    "MapperConfigError",
    "MappingEntry",
    "PushKey",
    "UnknownOperationError",
]
