"""Pytest fixtures for schema_compat tests."""

import pytest

from schema_compat.schema.field_path import FieldPath
from schema_compat.schema.models import SchemaNode
from schema_compat.schema.wildcard import AdditionalProperties


def obj(properties: dict[str, SchemaNode] | None = None, **kwargs) -> SchemaNode:
    """Build an object-typed schema node."""
    return SchemaNode(type="object", properties=properties or {}, **kwargs)


def string() -> SchemaNode:
    return SchemaNode(type="string")


def integer() -> SchemaNode:
    return SchemaNode(type="integer")


def pattern(schema: SchemaNode, allows: bool = False) -> AdditionalProperties:
    """Additional properties constrained to ``schema``.

    ``allows`` defaults to False like a decoder that only filled the schema slot.
    """
    return AdditionalProperties(allows=allows, schema=schema)


@pytest.fixture
def root_path() -> FieldPath:
    return FieldPath.new("schema", "openAPISchema")


@pytest.fixture
def nested_existing() -> SchemaNode:
    """Two object properties sharing subProp1, prop2 also has subProp2."""
    return obj(
        {
            "prop1": obj({"subProp1": string()}),
            "prop2": obj({"subProp1": string(), "subProp2": string()}),
        }
    )


@pytest.fixture
def schema_documents(tmp_path):
    """Write an existing/new pair of YAML schema documents."""

    def _write(existing: str, new: str):
        existing_file = tmp_path / "existing.yaml"
        new_file = tmp_path / "new.yaml"
        existing_file.write_text(existing)
        new_file.write_text(new)
        return existing_file, new_file

    return _write
