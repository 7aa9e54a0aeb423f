"""Data models for structural schemas and compatibility results."""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from schema_compat.exceptions import SchemaDocumentError, SchemaIncompatibleError
from schema_compat.schema.field_path import FieldPath
from schema_compat.schema.violations import REMOVED_PROPERTIES_MESSAGE, FieldViolation
from schema_compat.schema.wildcard import AdditionalProperties, Wildcard, resolve_wildcard

# Keys decoded into dedicated SchemaNode attributes; everything else is opaque
_KNOWN_KEYS = frozenset({"type", "properties", "additionalProperties", "required", "description"})


@dataclass(frozen=True)
class SchemaNode:
    """One node of a structural schema tree.

    Only type, properties and additional properties drive the compatibility
    algorithm. Remaining facets (items, enum, format, bounds, ...) are kept in
    ``extra`` and compared as a whole.
    """

    type: str = ""
    properties: Mapping[str, "SchemaNode"] = field(default_factory=dict)
    additional_properties: AdditionalProperties | None = None
    required: tuple[str, ...] = ()
    description: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    # properties and extra are dicts
    __hash__ = None  # type: ignore[assignment]

    @property
    def is_object(self) -> bool:
        """Check if this node describes an object."""
        if self.type:
            return self.type == "object"
        return bool(self.properties) or self.additional_properties is not None

    @property
    def wildcard(self) -> Wildcard:
        """Resolved additional-properties wildcard."""
        return resolve_wildcard(self.additional_properties)

    def structurally_equals(self, other: "SchemaNode") -> bool:
        """Compare every facet except the human-readable description."""
        return (
            self.type == other.type
            and self.properties == other.properties
            and self.additional_properties == other.additional_properties
            and self.required == other.required
            and self.extra == other.extra
        )

    @classmethod
    def from_dict(cls, data: Any, path: FieldPath | None = None) -> "SchemaNode":
        """Decode a JSON-Schema style mapping.

        Args:
            data: Mapping with type/properties/additionalProperties/... keys
            path: Location of ``data`` in the document, for error messages

        Returns:
            Decoded SchemaNode

        Raises:
            SchemaDocumentError: If the document is malformed
        """
        path = path or FieldPath()
        where = str(path) or "<root>"

        if not isinstance(data, Mapping):
            raise SchemaDocumentError(f"expected a mapping, got {type(data).__name__}", where)

        type_tag = data.get("type", "")
        if not isinstance(type_tag, str):
            raise SchemaDocumentError("'type' must be a string", where)

        raw_properties = data.get("properties")
        if raw_properties is None:
            raw_properties = {}
        if not isinstance(raw_properties, Mapping):
            raise SchemaDocumentError("'properties' must be a mapping", where)
        properties = {
            str(name): cls.from_dict(child, path.child("properties").key(str(name)))
            for name, child in raw_properties.items()
        }

        additional_properties = None
        raw_additional = data.get("additionalProperties")
        if isinstance(raw_additional, bool):
            additional_properties = AdditionalProperties(allows=raw_additional)
        elif isinstance(raw_additional, Mapping):
            additional_properties = AdditionalProperties(
                allows=True,
                schema=cls.from_dict(raw_additional, path.child("additionalProperties")),
            )
        elif raw_additional is not None:
            raise SchemaDocumentError("'additionalProperties' must be a boolean or mapping", where)

        required = data.get("required")
        if required is None:
            required = []
        if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
            raise SchemaDocumentError("'required' must be a list of strings", where)

        description = data.get("description")
        if description is not None and not isinstance(description, str):
            raise SchemaDocumentError("'description' must be a string", where)

        return cls(
            type=type_tag,
            properties=properties,
            additional_properties=additional_properties,
            required=tuple(required),
            description=description,
            extra=copy.deepcopy({k: v for k, v in data.items() if k not in _KNOWN_KEYS}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-Schema style dictionary."""
        result: dict[str, Any] = {}
        if self.type:
            result["type"] = self.type
        if self.description is not None:
            result["description"] = self.description
        if self.properties:
            result["properties"] = {
                name: child.to_dict() for name, child in sorted(self.properties.items())
            }
        if self.additional_properties is not None:
            if self.additional_properties.schema is not None:
                result["additionalProperties"] = self.additional_properties.schema.to_dict()
            else:
                result["additionalProperties"] = self.additional_properties.allows
        if self.required:
            result["required"] = list(self.required)
        result.update(copy.deepcopy(dict(self.extra)))
        return result


@dataclass
class ComparisonResult:
    """Result of checking a new schema against an existing one."""

    existing: SchemaNode
    new: SchemaNode
    lcd: SchemaNode | None
    error: SchemaIncompatibleError | None
    narrow_existing: bool = False
    path: FieldPath = field(default_factory=FieldPath)

    @property
    def is_compatible(self) -> bool:
        """Check if the new schema may replace the existing one."""
        return self.error is None

    @property
    def violations(self) -> list[FieldViolation]:
        """All violations, in traversal order."""
        return list(self.error.violations) if self.error else []

    @property
    def narrowed_properties(self) -> list[str]:
        """Top-level properties of existing that the LCD silently dropped."""
        if self.lcd is None:
            return []
        return sorted(set(self.existing.properties) - set(self.lcd.properties))

    def raise_for_incompatibility(self) -> None:
        """Raise the aggregated error if the schemas are incompatible.

        Raises:
            SchemaIncompatibleError: If any violation was found
        """
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary for reports."""
        return {
            "path": str(self.path),
            "compatible": self.is_compatible,
            "narrow_existing": self.narrow_existing,
            "narrowed_properties": self.narrowed_properties,
            "violations": [violation.to_dict() for violation in self.violations],
            "lcd": self.lcd.to_dict() if self.lcd is not None else None,
        }

    def get_summary(self) -> dict[str, Any]:
        """Get summary of comparison results."""
        return {
            "path": str(self.path),
            "compatible": self.is_compatible,
            "violations_count": len(self.violations),
            "removed_properties_count": sum(
                len(v.value) for v in self.violations if v.message == REMOVED_PROPERTIES_MESSAGE
            ),
            "narrowed_properties_count": len(self.narrowed_properties),
        }
