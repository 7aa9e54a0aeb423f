"""Tests for schema node decoding and comparison results."""

import pytest
from conftest import obj, string

from schema_compat.exceptions import SchemaDocumentError
from schema_compat.schema.comparator import SchemaComparator
from schema_compat.schema.field_path import FieldPath
from schema_compat.schema.models import SchemaNode
from schema_compat.schema.wildcard import AdditionalProperties, AllowAny, Forbidden, Pattern


class TestFromDict:
    def test_decodes_object(self):
        node = SchemaNode.from_dict(
            {
                "type": "object",
                "description": "a thing",
                "properties": {"name": {"type": "string", "maxLength": 10}},
                "required": ["name"],
                "x-kubernetes-preserve-unknown-fields": True,
            }
        )

        assert node.type == "object"
        assert node.description == "a thing"
        assert node.properties["name"] == SchemaNode(type="string", extra={"maxLength": 10})
        assert node.required == ("name",)
        assert node.extra == {"x-kubernetes-preserve-unknown-fields": True}

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (True, AllowAny()),
            (False, Forbidden()),
            ({"type": "string"}, Pattern(SchemaNode(type="string"))),
        ],
    )
    def test_decodes_additional_properties(self, raw, expected):
        node = SchemaNode.from_dict({"type": "object", "additionalProperties": raw})

        assert node.wildcard == expected

    def test_round_trip(self):
        document = {
            "type": "object",
            "properties": {"a": {"type": "integer", "minimum": 0}},
            "additionalProperties": {"type": "string"},
            "required": ["a"],
        }

        assert SchemaNode.from_dict(document).to_dict() == document

    def test_decoded_node_does_not_alias_document(self):
        document = {"type": "array", "items": {"type": "string"}}

        node = SchemaNode.from_dict(document)
        document["items"]["type"] = "integer"
        node.to_dict()["items"]["type"] = "boolean"

        assert node.extra == {"items": {"type": "string"}}

    def test_error_reports_location(self):
        with pytest.raises(SchemaDocumentError) as exc_info:
            SchemaNode.from_dict({"type": "object", "properties": {"spec": {"type": 3}}})

        assert exc_info.value.source == "properties[spec]"

    @pytest.mark.parametrize(
        "document",
        [
            [],
            {"properties": []},
            {"additionalProperties": "yes"},
            {"required": "name"},
            {"description": 1},
        ],
    )
    def test_rejects_malformed(self, document):
        with pytest.raises(SchemaDocumentError):
            SchemaNode.from_dict(document)


class TestIsObject:
    def test_typed(self):
        assert obj().is_object
        assert not string().is_object

    def test_untyped_with_properties(self):
        assert SchemaNode(properties={"a": string()}).is_object
        assert SchemaNode(additional_properties=AdditionalProperties(allows=True)).is_object
        assert not SchemaNode().is_object


class TestHashing:
    def test_schema_nodes_are_unhashable(self):
        assert SchemaNode.__hash__ is None
        with pytest.raises(TypeError):
            hash(string())

    def test_pattern_is_unhashable(self):
        assert Pattern.__hash__ is None
        with pytest.raises(TypeError):
            hash(Pattern(string()))

    def test_equality_still_structural(self):
        assert obj({"a": string()}) == obj({"a": string()})
        assert Pattern(string()) == Pattern(string())


class TestComparisonResult:
    def test_to_dict_compatible(self):
        result = SchemaComparator(FieldPath.new("spec"), narrow_existing=True).compare(
            obj({"a": string(), "b": string()}), obj({"a": string()})
        )

        assert result.to_dict() == {
            "path": "spec",
            "compatible": True,
            "narrow_existing": True,
            "narrowed_properties": ["b"],
            "violations": [],
            "lcd": {"type": "object", "properties": {"a": {"type": "string"}}},
        }

    def test_to_dict_incompatible(self):
        result = SchemaComparator(FieldPath.new("spec")).compare(
            obj({"a": string(), "b": string()}), obj({"a": string()})
        )

        data = result.to_dict()
        assert data["compatible"] is False
        assert data["lcd"] is None
        assert data["violations"] == [
            {
                "path": "spec.properties",
                "value": ["b"],
                "message": "properties have been removed in an incompatible way",
            }
        ]
