"""FieldMapper: table-driven copying between a primary record and another record.

The primary record is the domain-side record (typically an Entity); the other
record is an external representation (API payload, database row, form data).
Either may be a mapping or an object with fields.

A mapping table pairs each primary-side field with a key on the other record
and two transform ids, one per direction:

    mapper = FieldMapper(
        {
            # primary field     other key     to_primary   from_primary
            "id":               ("userId",    COPY,        COPY),
            "created_at":       ("created",   "date",      "iso_date"),
            "password_hash":    ("password",  "hash",      DROP),
        },
        {
            "date": lambda value, primary, other: date.fromisoformat(value),
            "iso_date": lambda value, primary, other: value.isoformat(),
            "hash": hash_password,
        },
    )
    mapper.pull(user, payload)   # payload -> user
    mapper.push(user, response)  # user -> response

IMPORTANT: The primary record's own fields drive every pass, in both
directions. Keys on the other record that no primary field maps to are
never looked at.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Self, TypeVar

import structlog

from basalmodel.contracts.enums import BuiltinTransform, Direction, PushKey
from basalmodel.contracts.errors import MapperConfigError
from basalmodel.contracts.mapping import MappingEntry, TransformFn, TransformRegistry
from basalmodel.core.config import MapperSettings
from basalmodel.records import Record, as_record
from basalmodel.sentinels import MISSING

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT")

_RESERVED_TRANSFORMS = frozenset(t.value for t in BuiltinTransform)


class FieldMapper:
    """Copy fields between two records according to a mapping table.

    The table and transformation registry are fixed at construction and
    exposed read-only. Subclasses typically build both in ``__init__`` and
    pass them to ``super().__init__()``.

    Args:
        mapping: primary field name -> MappingEntry or
            ``(other_key, to_primary, from_primary)``
        transformations: transform id -> ``fn(value, primary, other)``.
            The ids "drop" and "copy" are reserved.
        push_key: Key used on the other record when pushing. PRIMARY (default)
            reuses the primary-side field name; MAPPED uses the entry's other key.
        push_falsy: If False (default), falsy push outputs (None, 0, "", False,
            empty containers) are not written. If True, only None is skipped.

    Raises:
        MapperConfigError: If an entry is malformed or a reserved transform id
            is redefined.
    """

    def __init__(
        self,
        mapping: Mapping[str, MappingEntry | tuple[str, str, str] | list[str]],
        transformations: TransformRegistry | None = None,
        *,
        push_key: PushKey = PushKey.PRIMARY,
        push_falsy: bool = False,
    ) -> None:
        try:
            table = {field: MappingEntry.coerce(entry) for field, entry in mapping.items()}
        except ValueError as e:
            raise MapperConfigError(f"Invalid mapping table for {type(self).__name__}: {e}") from e

        registry = dict(transformations or {})
        reserved = sorted(_RESERVED_TRANSFORMS.intersection(registry))
        if reserved:
            raise MapperConfigError(f"Transform ids {reserved} are built in and cannot be redefined")
        for transform_id, fn in registry.items():
            if not callable(fn):
                raise MapperConfigError(f"Transformation '{transform_id}' is not callable: {fn!r}")

        self._mapping: Mapping[str, MappingEntry] = MappingProxyType(table)
        self._transformations: Mapping[str, TransformFn] = MappingProxyType(registry)
        self._push_key = PushKey(push_key)
        self._push_falsy = push_falsy

        referenced = {entry.transform_for(direction) for entry in table.values() for direction in Direction}
        unknown = sorted(referenced - _RESERVED_TRANSFORMS - set(registry))
        if unknown:
            logger.warning(
                "Mapping table references unregistered transforms; they will yield None",
                mapper=type(self).__name__,
                transforms=unknown,
            )

    @classmethod
    def from_settings(cls, settings: MapperSettings, transformations: TransformRegistry | None = None) -> Self:
        """Build a mapper from validated MapperSettings."""
        return cls(
            settings.mapping,
            transformations,
            push_key=settings.push_key,
            push_falsy=settings.push_falsy,
        )

    @classmethod
    def from_dict(cls, config: dict[str, Any], transformations: TransformRegistry | None = None) -> Self:
        """Build a mapper from a raw settings dict.

        Raises:
            MapperConfigError: If the configuration is invalid.
        """
        return cls.from_settings(MapperSettings.from_dict(config), transformations)

    @property
    def mapping_table(self) -> Mapping[str, MappingEntry]:
        return self._mapping

    @property
    def transformations(self) -> Mapping[str, TransformFn]:
        return self._transformations

    @property
    def push_key(self) -> PushKey:
        return self._push_key

    @property
    def push_falsy(self) -> bool:
        return self._push_falsy

    def apply_transform(self, transform_id: str, value: Any, primary: Any, other: Any) -> Any:
        """Apply one transform to ``value``.

        DROP yields None, COPY returns ``value`` unchanged, anything else is
        looked up in the registry and called with ``(value, primary, other)``.
        Unregistered ids yield None instead of raising.
        """
        if transform_id == BuiltinTransform.DROP:
            return None
        if transform_id == BuiltinTransform.COPY:
            return value
        fn = self._transformations.get(transform_id)
        if fn is None:
            logger.debug("Unregistered transform yields None", mapper=type(self).__name__, transform=transform_id)
            return None
        return fn(value, primary, other)

    def lookup_mapping(self, field_name: str) -> MappingEntry | None:
        """Mapping entry for a primary-side field, or None if it is not mapped."""
        return self._mapping.get(field_name)

    def _is_suppressed(self, output: Any) -> bool:
        if self._push_falsy:
            return output is None
        return not output

    def copy_fields(self, primary: Any, other: Any, direction: Direction) -> Any:
        """Copy mapped fields in one direction, mutating the target in place.

        Args:
            primary: Domain-side record (mapping or object)
            other: External record (mapping or object)
            direction: TO_PRIMARY (other -> primary) or FROM_PRIMARY (primary -> other)

        Returns:
            The primary record for TO_PRIMARY, the other record for FROM_PRIMARY.

        Raises:
            InvalidRecordError: If either record is neither a mapping
                nor an object with fields.
        """
        direction = Direction(direction)
        primary_record = as_record(primary, role="primary")
        other_record = as_record(other, role="other")

        copied = 0
        skipped = 0
        # Snapshot: a push into the same record must not extend the pass
        for field in primary_record.keys():
            entry = self.lookup_mapping(field)
            if entry is None:
                skipped += 1
                continue
            if direction is Direction.TO_PRIMARY:
                written = self._pull_field(field, entry, primary_record, other_record)
            else:
                written = self._push_field(field, entry, primary_record, other_record)
            if written:
                copied += 1
            else:
                skipped += 1

        logger.debug(
            "Copied mapped fields",
            mapper=type(self).__name__,
            direction=str(direction),
            fields_copied=copied,
            fields_skipped=skipped,
        )

        if direction is Direction.TO_PRIMARY:
            return primary_record.unwrap()
        return other_record.unwrap()

    def _pull_field(self, field: str, entry: MappingEntry, primary: Record, other: Record) -> bool:
        other_value = other.get(entry.other_key)
        if other_value is MISSING:
            return False
        new_value = self.apply_transform(entry.transform_for(Direction.TO_PRIMARY), other_value, primary.unwrap(), other.unwrap())
        primary.set(field, new_value)
        return True

    def _push_field(self, field: str, entry: MappingEntry, primary: Record, other: Record) -> bool:
        value = primary.get(field)
        output = self.apply_transform(entry.transform_for(Direction.FROM_PRIMARY), value, primary.unwrap(), other.unwrap())
        if self._is_suppressed(output):
            return False
        target_key = field if self._push_key is PushKey.PRIMARY else entry.other_key
        other.set(target_key, output)
        return True

    def pull(self, primary: RecordT, other: Any) -> RecordT:
        """Populate ``primary`` from ``other`` (TO_PRIMARY)."""
        result: RecordT = self.copy_fields(primary, other, Direction.TO_PRIMARY)
        return result

    def push(self, primary: Any, other: RecordT) -> RecordT:
        """Populate ``other`` from ``primary`` (FROM_PRIMARY)."""
        result: RecordT = self.copy_fields(primary, other, Direction.FROM_PRIMARY)
        return result
