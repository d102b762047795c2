"""Shared contracts for the entity and mapper layers.

Enums, exceptions and value types used by both ``basalmodel.entity`` and
``basalmodel.mapper``. This package is a LEAF MODULE: it imports nothing
from the rest of basalmodel.
"""

from basalmodel.contracts.enums import BuiltinTransform, Direction, PushKey
from basalmodel.contracts.errors import (
    BasalModelError,
    InvalidFieldError,
    InvalidRecordError,
    MapperConfigError,
    UnknownOperationError,
)
from basalmodel.contracts.mapping import MappingEntry, TransformFn, TransformRegistry

__all__ = [
    "BasalModelError",
    "BuiltinTransform",
    "Direction",
    "InvalidFieldError",
    "InvalidRecordError",
    "MapperConfigError",
    "MappingEntry",
    "PushKey",
    "TransformFn",
    "TransformRegistry",
    "UnknownOperationError",
]
