"""Custom exceptions for Schema Compat.

This module defines exception classes for the error conditions that can
occur while loading schema documents and checking their compatibility.
"""

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schema_compat.schema.violations import FieldViolation


class SchemaCompatError(Exception):
    """Base exception for all Schema Compat errors."""

    pass


class ConfigurationError(SchemaCompatError):
    """Raised when configuration is invalid or missing."""

    pass


class SchemaDocumentError(SchemaCompatError):
    """Raised when a schema document cannot be read or decoded."""

    def __init__(self, message: str, source: str | None = None):
        """Initialize schema document error.

        Args:
            message: Error message
            source: File or location the document came from
        """
        self.message = message
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class SchemaIncompatibleError(SchemaCompatError):
    """Raised when a new schema cannot safely replace an existing one.

    Carries every violation found during one comparison, in traversal order.
    Use ``schema_compat.schema.violations.new_aggregate`` to build one, so an
    empty violation list never turns into an error.
    """

    def __init__(self, violations: Sequence["FieldViolation"]):
        """Initialize incompatibility error.

        Args:
            violations: Field violations, at least one
        """
        self.violations: tuple["FieldViolation", ...] = tuple(violations)
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Render violations, one per line when there are several."""
        if len(self.violations) == 1:
            return str(self.violations[0])
        lines = "\n".join(f"  - {violation}" for violation in self.violations)
        return f"[{len(self.violations)} violations]\n{lines}"

    def __iter__(self) -> Iterator["FieldViolation"]:
        return iter(self.violations)

    def __len__(self) -> int:
        return len(self.violations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaIncompatibleError):
            return NotImplemented
        return self.violations == other.violations

    def __hash__(self) -> int:
        return hash(self.violations)
