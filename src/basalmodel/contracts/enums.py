"""Direction, transform and push-key identifiers used by FieldMapper.

All are StrEnums so they compare equal to their plain string values and
can be written as strings in YAML settings.
"""

from enum import StrEnum


class Direction(StrEnum):
    """Direction of a FieldMapper copy pass."""

    TO_PRIMARY = "to_primary"  # other record -> primary record
    FROM_PRIMARY = "from_primary"  # primary record -> other record


class BuiltinTransform(StrEnum):
    """Transform identifiers every FieldMapper understands without registration.

    These are reserved: a transformation registry may not redefine them.
    """

    DROP = "drop"
    COPY = "copy"


class PushKey(StrEnum):
    """Key used on the other record when pushing (FROM_PRIMARY).

    PRIMARY writes under the primary-side field name, which is the long-standing
    behaviour. MAPPED writes under the mapping entry's other-side key, mirroring
    the key that a pull reads from.
    """

    PRIMARY = "primary"
    MAPPED = "mapped"
