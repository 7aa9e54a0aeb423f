"""Tests for violations and their aggregation."""

from schema_compat.exceptions import SchemaIncompatibleError
from schema_compat.schema.field_path import FieldPath
from schema_compat.schema.violations import (
    REMOVED_PROPERTIES_MESSAGE,
    FieldViolation,
    new_aggregate,
    removed_properties,
)


def _violation(name: str) -> FieldViolation:
    return removed_properties(FieldPath.new("spec").child("properties"), [name])


class TestFieldViolation:
    def test_str(self):
        violation = _violation("new")

        assert str(violation) == (
            "spec.properties: Invalid value: ['new']: " + REMOVED_PROPERTIES_MESSAGE
        )

    def test_to_dict(self):
        assert _violation("new").to_dict() == {
            "path": "spec.properties",
            "value": ["new"],
            "message": REMOVED_PROPERTIES_MESSAGE,
        }


class TestNewAggregate:
    def test_empty_is_none(self):
        assert new_aggregate([]) is None

    def test_none_entries_skipped(self):
        assert new_aggregate([None, None]) is None

    def test_keeps_order(self):
        error = new_aggregate([_violation("b"), _violation("a")])

        assert isinstance(error, SchemaIncompatibleError)
        assert [v.value for v in error] == [("b",), ("a",)]
        assert len(error) == 2

    def test_flattens_nested_aggregates(self):
        inner = new_aggregate([_violation("a"), _violation("b")])

        error = new_aggregate([inner, None, _violation("c")])

        assert [v.value for v in error] == [("a",), ("b",), ("c",)]

    def test_single_violation_message(self):
        error = new_aggregate([_violation("a")])

        assert str(error) == str(_violation("a"))

    def test_multiple_violation_message(self):
        error = new_aggregate([_violation("a"), _violation("b")])

        lines = str(error).splitlines()
        assert lines[0] == "[2 violations]"
        assert lines[1].endswith(REMOVED_PROPERTIES_MESSAGE)

    def test_equality(self):
        assert new_aggregate([_violation("a")]) == new_aggregate([_violation("a")])
        assert new_aggregate([_violation("a")]) != new_aggregate([_violation("b")])
