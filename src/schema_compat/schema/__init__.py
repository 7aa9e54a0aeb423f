"""Structural schema compatibility checking.

This module decides whether a new schema version may replace an existing one
and computes the Least Common Denominator (LCD) schema both agree on.
"""

from schema_compat.schema.comparator import SchemaComparator, compute_compatibility
from schema_compat.schema.field_path import FieldPath
from schema_compat.schema.models import ComparisonResult, SchemaNode
from schema_compat.schema.violations import FieldViolation, new_aggregate
from schema_compat.schema.wildcard import (
    AdditionalProperties,
    AllowAny,
    Forbidden,
    Pattern,
    resolve_wildcard,
)

__all__ = [
    "SchemaComparator",
    "compute_compatibility",
    "FieldPath",
    "ComparisonResult",
    "SchemaNode",
    "FieldViolation",
    "new_aggregate",
    "AdditionalProperties",
    "AllowAny",
    "Forbidden",
    "Pattern",
    "resolve_wildcard",
]
