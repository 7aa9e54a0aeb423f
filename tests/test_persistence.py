"""Tests for loading schema documents and saving outputs."""

import json

import pytest
import yaml
from conftest import obj, string

from schema_compat.exceptions import SchemaDocumentError
from schema_compat.schema.comparator import SchemaComparator
from schema_compat.schema.persistence import (
    load_report,
    load_schema_document,
    save_lcd,
    save_report,
    select_subdocument,
)

RESOURCE_DOCUMENT = """
apiVersion: apis.example.io/v1alpha1
kind: APIResourceSchema
spec:
  versions:
    - name: v1
      schema:
        openAPIV3Schema:
          type: object
          properties:
            replicas:
              type: integer
"""


class TestLoadSchemaDocument:
    def test_load_yaml(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text("type: object\nproperties:\n  a:\n    type: string\n")

        assert load_schema_document(path) == obj({"a": string()})

    def test_load_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"type": "object", "properties": {"a": {"type": "string"}}}))

        assert load_schema_document(path) == obj({"a": string()})

    def test_select(self, tmp_path):
        path = tmp_path / "resource.yml"
        path.write_text(RESOURCE_DOCUMENT)

        schema = load_schema_document(path, select="spec.versions.0.schema.openAPIV3Schema")

        assert set(schema.properties) == {"replicas"}

    def test_select_not_found(self, tmp_path):
        path = tmp_path / "resource.yaml"
        path.write_text(RESOURCE_DOCUMENT)

        with pytest.raises(SchemaDocumentError) as exc_info:
            load_schema_document(path, select="spec.versions.1.schema")

        assert exc_info.value.source == str(path)
        assert "spec.versions.1" in exc_info.value.message

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "schema.txt"
        path.write_text("{}")

        with pytest.raises(SchemaDocumentError):
            load_schema_document(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaDocumentError):
            load_schema_document(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text("type: [object\n")

        with pytest.raises(SchemaDocumentError):
            load_schema_document(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_bytes(b"\xff\xfe\x00type: object\n")

        with pytest.raises(SchemaDocumentError) as exc_info:
            load_schema_document(path)

        assert exc_info.value.source == str(path)
        assert "UTF-8" in exc_info.value.message

    def test_unreadable_path(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.mkdir()

        with pytest.raises(SchemaDocumentError):
            load_schema_document(path)

    def test_yaml_dates_stay_strings(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text(
            "type: object\nproperties:\n  since:\n    type: string\n    default: 2024-01-01\n"
        )

        schema = load_schema_document(path)

        assert schema.properties["since"].extra == {"default": "2024-01-01"}
        json.dumps(schema.to_dict())

    def test_malformed_schema(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text("type: object\nproperties: [a]\n")

        with pytest.raises(SchemaDocumentError) as exc_info:
            load_schema_document(path)

        assert exc_info.value.source == str(path)


class TestSelectSubdocument:
    def test_walks_dicts_and_lists(self):
        document = {"a": [{"b": 1}]}

        assert select_subdocument(document, "a.0.b") == 1


class TestSaveOutputs:
    @pytest.mark.parametrize("suffix", [".json", ".yaml"])
    def test_save_lcd_round_trip(self, tmp_path, suffix: str):
        lcd = obj({"a": string()}, required=("a",))
        path = tmp_path / "out" / f"lcd{suffix}"

        written = save_lcd(lcd, path)

        assert written == path
        assert load_schema_document(path) == lcd

    def test_save_lcd_yaml_is_plain_document(self, tmp_path):
        path = save_lcd(obj({"a": string()}), tmp_path / "lcd.yaml")

        assert yaml.safe_load(path.read_text()) == {
            "type": "object",
            "properties": {"a": {"type": "string"}},
        }

    def test_save_and_load_report(self, tmp_path):
        result = SchemaComparator().compare(obj({"a": string()}), obj())

        path = save_report(result, tmp_path / "report.json", "old.yaml", "new.yaml")
        report = load_report(path)

        assert report["compatible"] is False
        assert report["existing_file"] == "old.yaml"
        assert report["new_file"] == "new.yaml"
        assert report["violations"][0]["value"] == ["a"]
        assert "generated_at" in report

    def test_load_report_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_report(tmp_path / "missing.json")
