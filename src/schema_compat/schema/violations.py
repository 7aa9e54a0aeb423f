"""Field violations and their aggregation into a single error."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from schema_compat.exceptions import SchemaIncompatibleError
from schema_compat.schema.field_path import FieldPath

REMOVED_PROPERTIES_MESSAGE = "properties have been removed in an incompatible way"
RESTRICTED_ADDITIONAL_PROPERTIES_MESSAGE = (
    "additional properties have been restricted in an incompatible way"
)
CHANGED_SCHEMA_MESSAGE = "schema changed in an incompatible way"


@dataclass(frozen=True)
class FieldViolation:
    """A single incompatibility at one location of the schema tree."""

    path: FieldPath
    value: tuple[Any, ...]
    message: str

    def __str__(self) -> str:
        return f"{self.path}: Invalid value: {list(self.value)!r}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": str(self.path),
            "value": list(self.value),
            "message": self.message,
        }


def removed_properties(path: FieldPath, names: Iterable[str]) -> FieldViolation:
    """Build the violation reported for properties missing from the new schema."""
    return FieldViolation(path=path, value=tuple(names), message=REMOVED_PROPERTIES_MESSAGE)


def new_aggregate(
    violations: Iterable[FieldViolation | SchemaIncompatibleError | None],
) -> SchemaIncompatibleError | None:
    """Combine violations into one error, or None when there are none.

    Nested aggregates are flattened and ``None`` entries skipped, so callers can
    pass the raw results of recursive calls straight through.

    Args:
        violations: Violations and/or aggregates to combine

    Returns:
        SchemaIncompatibleError with every violation in order, or None if empty
    """
    flattened: list[FieldViolation] = []
    for item in violations:
        if item is None:
            continue
        if isinstance(item, SchemaIncompatibleError):
            flattened.extend(item.violations)
        else:
            flattened.append(item)

    if not flattened:
        return None
    return SchemaIncompatibleError(flattened)
