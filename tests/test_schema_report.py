"""Tests for compatibility report rendering."""

from conftest import obj, string
from rich.console import Console

from schema_compat.reporting.schema_report import (
    display_compatibility_summary,
    generate_compatibility_report_text,
)
from schema_compat.schema.comparator import SchemaComparator
from schema_compat.schema.field_path import FieldPath


def _console() -> Console:
    return Console(record=True, width=200, force_terminal=False)


class TestDisplay:
    def test_compatible_with_narrowing(self):
        result = SchemaComparator(narrow_existing=True).compare(
            obj({"a": string(), "b": string()}), obj({"a": string()})
        )
        console = _console()

        display_compatibility_summary(result, console)

        output = console.export_text()
        assert "compatible" in output
        assert "dropped properties: b" in output

    def test_incompatible(self):
        result = SchemaComparator(FieldPath.new("spec")).compare(
            obj({"a": string(), "b": string()}), obj()
        )
        console = _console()

        display_compatibility_summary(result, console)

        output = console.export_text()
        assert "INCOMPATIBLE" in output
        assert "spec.properties" in output
        assert "a, b" in output


class TestText:
    def test_incompatible_text(self):
        result = SchemaComparator(FieldPath.new("spec")).compare(obj({"a": string()}), obj())

        text = generate_compatibility_report_text(result)

        assert "Compatible: False" in text
        assert "• spec.properties" in text
        assert "Value: a" in text

    def test_compatible_text(self):
        result = SchemaComparator().compare(obj({"a": string()}), obj({"a": string()}))

        text = generate_compatibility_report_text(result)

        assert "Compatible: True" in text
        assert "Location: <root>" in text
