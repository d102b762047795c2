"""Sentinel used to tell "key not present" apart from "value is None".

Record adapters return MISSING from ``get()`` for keys the record does not
have, so a pull can skip absent fields while still copying explicit None
values.

Example:
    value = record.get("userId")
    if value is MISSING:
        # other record has no such key, leave primary untouched
        ...
"""

from typing import Final


class MissingSentinel:
    """Sentinel class to distinguish missing keys from None values.

    This is a singleton - use the MISSING instance, not the class directly.
    Comparison should always use `is` identity, never equality.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"


MISSING: Final[MissingSentinel] = MissingSentinel()
"""Singleton sentinel indicating a key was not found.

Use identity comparison: `if value is MISSING:`
"""
