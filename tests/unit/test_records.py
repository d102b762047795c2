"""Tests for the Record adapters used by FieldMapper."""

from dataclasses import dataclass
from types import MappingProxyType, SimpleNamespace

import pytest

from basalmodel import InvalidRecordError
from basalmodel.records import MappingRecord, ObjectRecord, as_record
from basalmodel.sentinels import MISSING
from tests.fixtures.entities import User
from tests.fixtures.records import Payload


@dataclass(slots=True)
class SlottedPoint:
    x: int
    y: int


class TestAsRecord:
    """as_record picks the adapter by shape."""

    def test_dict_is_mapping_record(self) -> None:
        assert isinstance(as_record({}, role="primary"), MappingRecord)

    def test_entity_is_object_record(self) -> None:
        assert isinstance(as_record(User(), role="primary"), ObjectRecord)

    def test_slotted_dataclass_is_object_record(self) -> None:
        assert isinstance(as_record(SlottedPoint(1, 2), role="other"), ObjectRecord)

    def test_mapping_proxy_is_mapping_record(self) -> None:
        assert isinstance(as_record(MappingProxyType({"a": 1}), role="other"), MappingRecord)

    def test_mapping_subclass_is_mapping_record(self) -> None:
        """A Mapping with a __dict__ is read by key, not by attribute."""
        record = as_record(Payload(userId=42), role="other")

        assert isinstance(record, MappingRecord)
        assert record.keys() == ["userId"]
        assert record.get("userId") == 42
        assert record.get("source") is MISSING

    @pytest.mark.parametrize("value", [None, 42, "text", b"raw", [1, 2], (1, 2), frozenset(), User])
    def test_rejects_non_records(self, value: object) -> None:
        with pytest.raises(InvalidRecordError) as exc_info:
            as_record(value, role="other")

        assert exc_info.value.role == "other"
        assert exc_info.value.record_type == type(value).__name__
        assert "'other'" in str(exc_info.value)

    def test_invalid_record_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            as_record(3.5, role="primary")


class TestMappingRecord:
    def test_keys_get_set(self) -> None:
        data = {"a": 1, "b": None}
        record = MappingRecord(data)

        assert record.keys() == ["a", "b"]
        assert record.get("b") is None
        assert record.get("c") is MISSING

        record.set("c", 3)
        assert data == {"a": 1, "b": None, "c": 3}
        assert record.unwrap() is data

    def test_read_only_mapping_is_readable(self) -> None:
        record = MappingRecord(MappingProxyType({"a": 1}))

        assert record.keys() == ["a"]
        assert record.get("a") == 1
        assert record.get("b") is MISSING

    def test_read_only_mapping_write_raises_type_error(self) -> None:
        record = MappingRecord(MappingProxyType({"a": 1}))

        with pytest.raises(TypeError):
            record.set("a", 2)


class TestObjectRecord:
    def test_enumerates_public_instance_attributes(self) -> None:
        obj = SimpleNamespace(name="x", _secret="y")

        assert ObjectRecord(obj).keys() == ["name"]

    def test_entity_enumerates_declared_public_fields(self) -> None:
        assert set(ObjectRecord(User()).keys()) == {"id", "first_name", "last_name", "email"}

    def test_get_missing_attribute_returns_sentinel(self) -> None:
        record = ObjectRecord(SimpleNamespace(name="x"))

        assert record.get("name") == "x"
        assert record.get("other") is MISSING
        assert record.get("_private") is MISSING

    def test_set_creates_attribute(self) -> None:
        obj = SimpleNamespace()
        ObjectRecord(obj).set("created", "2024-01-01")

        assert obj.created == "2024-01-01"

    def test_slotted_dataclass_fields(self) -> None:
        record = ObjectRecord(SlottedPoint(1, 2))

        assert record.keys() == ["x", "y"]
        record.set("y", 5)
        assert record.get("y") == 5

    def test_dataclass_lookup_ignores_non_field_attributes(self) -> None:
        record = ObjectRecord(SlottedPoint(1, 2))

        assert record.get("x") == 1
        assert record.get("z") is MISSING
        assert record.get("__class__") is MISSING

    def test_attribute_added_after_wrapping_is_visible(self) -> None:
        obj = SimpleNamespace(name="x")
        record = ObjectRecord(obj)
        obj.late = "y"

        assert record.get("late") == "y"
        assert "late" in record.keys()

    def test_lookup_on_wide_object(self) -> None:
        """Lookups stay correct on objects with many attributes."""
        obj = SimpleNamespace(**{f"f{i}": i for i in range(2000)})
        record = ObjectRecord(obj)

        assert all(record.get(f"f{i}") == i for i in range(2000))
        assert record.get("f2000") is MISSING


def test_missing_sentinel_repr() -> None:
    assert repr(MISSING) == "<MISSING>"
