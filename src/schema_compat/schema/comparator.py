"""Structural schema compatibility checking and LCD computation.

The comparator walks an existing schema and a proposed new schema in
lock-step. For every capability of ``existing`` it asks whether ``new`` still
provides it, and builds the Least Common Denominator (LCD): the largest schema
inside ``existing`` that ``new`` also admits.

Violations are collected over the whole tree rather than stopping at the
first one, and an incompatible comparison never yields a partial LCD.
"""

import copy
from dataclasses import replace
from typing import Any

from schema_compat.exceptions import SchemaIncompatibleError
from schema_compat.schema.field_path import FieldPath
from schema_compat.schema.models import ComparisonResult, SchemaNode
from schema_compat.schema.violations import (
    CHANGED_SCHEMA_MESSAGE,
    RESTRICTED_ADDITIONAL_PROPERTIES_MESSAGE,
    FieldViolation,
    new_aggregate,
    removed_properties,
)
from schema_compat.schema.wildcard import (
    AdditionalProperties,
    AllowAny,
    Forbidden,
    Pattern,
    to_declaration,
)
from schema_compat.utils.logging import get_logger

logger = get_logger(__name__)

CompatibilityOutcome = tuple[SchemaNode | None, SchemaIncompatibleError | None]


def compute_compatibility(
    path: FieldPath,
    existing: SchemaNode,
    new: SchemaNode,
    narrow_existing: bool,
) -> CompatibilityOutcome:
    """Check that ``new`` keeps every capability of ``existing``.

    Args:
        path: Location of the schemas, prefixed to every violation
        existing: Currently accepted schema
        new: Proposed replacement
        narrow_existing: Silently drop properties that ``new`` no longer
            admits instead of reporting them

    Returns:
        Tuple of (lcd, error). Exactly one of them is None. Without narrowing
        a successful lcd equals ``existing``. The lcd shares no data with
        either input.
    """
    lcd, error = _compute(path, existing, new, narrow_existing)
    if lcd is not None:
        lcd = copy.deepcopy(lcd)
    return lcd, error


def _compute(
    path: FieldPath,
    existing: SchemaNode,
    new: SchemaNode,
    narrow_existing: bool,
) -> CompatibilityOutcome:
    if existing.type != new.type:
        return None, new_aggregate(
            [
                FieldViolation(
                    path=path.child("type"),
                    value=(new.type,),
                    message=f'type changed from "{existing.type}" to "{new.type}"',
                )
            ]
        )

    if existing.is_object or new.is_object:
        return _compare_object(path, existing, new, narrow_existing)

    return _compare_leaf(path, existing, new)


def _compare_object(
    path: FieldPath,
    existing: SchemaNode,
    new: SchemaNode,
    narrow_existing: bool,
) -> CompatibilityOutcome:
    errors: list[FieldViolation | SchemaIncompatibleError | None] = []
    lcd_properties: dict[str, SchemaNode] = {}
    removed: list[str] = []
    narrowed: list[str] = []

    properties_path = path.child("properties")
    new_wildcard = new.wildcard

    for name in sorted(existing.properties):
        existing_property = existing.properties[name]
        property_path = properties_path.key(name)

        if name in new.properties:
            sub_lcd, error = _compute(
                property_path, existing_property, new.properties[name], narrow_existing
            )
        elif isinstance(new_wildcard, AllowAny):
            lcd_properties[name] = existing_property
            continue
        elif isinstance(new_wildcard, Pattern):
            sub_lcd, error = _compute(
                property_path, existing_property, new_wildcard.schema, narrow_existing
            )
        else:
            if narrow_existing:
                narrowed.append(name)
            else:
                removed.append(name)
            continue

        if error is not None:
            errors.append(error)
        elif sub_lcd is not None:
            lcd_properties[name] = sub_lcd

    if removed:
        errors.append(removed_properties(properties_path, removed))

    lcd_additional, wildcard_error = _compare_wildcards(
        path.child("additionalProperties"), existing, new, narrow_existing
    )
    errors.append(wildcard_error)

    aggregate = new_aggregate(errors)
    if aggregate is not None:
        return None, aggregate

    if narrowed:
        logger.debug("properties_narrowed", path=str(properties_path), properties=narrowed)

    # Required names declared under properties survive only if still present
    required = tuple(
        name
        for name in existing.required
        if name in lcd_properties or name not in existing.properties
    )

    return (
        replace(
            existing,
            properties=lcd_properties,
            additional_properties=lcd_additional,
            required=required,
        ),
        None,
    )


def _compare_wildcards(
    path: FieldPath,
    existing: SchemaNode,
    new: SchemaNode,
    narrow_existing: bool,
) -> tuple[AdditionalProperties | None, SchemaIncompatibleError | None]:
    """Check that ``new`` admits every unnamed property ``existing`` admits."""
    existing_wildcard = existing.wildcard
    new_wildcard = new.wildcard

    if isinstance(existing_wildcard, Forbidden) or isinstance(new_wildcard, AllowAny):
        return existing.additional_properties, None

    if isinstance(existing_wildcard, Pattern) and isinstance(new_wildcard, Pattern):
        sub_lcd, error = _compute(
            path, existing_wildcard.schema, new_wildcard.schema, narrow_existing
        )
        if error is not None:
            return None, error
        if sub_lcd == existing_wildcard.schema:
            return existing.additional_properties, None
        return AdditionalProperties(allows=True, schema=sub_lcd), None

    # AllowAny narrowed to Pattern/Forbidden, or Pattern narrowed to Forbidden
    if narrow_existing:
        logger.debug(
            "additional_properties_narrowed",
            path=str(path),
            existing=type(existing_wildcard).__name__,
            new=type(new_wildcard).__name__,
        )
        return to_declaration(new_wildcard), None

    return None, new_aggregate(
        [FieldViolation(path=path, value=(), message=RESTRICTED_ADDITIONAL_PROPERTIES_MESSAGE)]
    )


def _compare_leaf(path: FieldPath, existing: SchemaNode, new: SchemaNode) -> CompatibilityOutcome:
    if existing.structurally_equals(new):
        return existing, None

    return None, new_aggregate(
        [
            FieldViolation(
                path=path,
                value=tuple(_changed_facets(existing, new)),
                message=CHANGED_SCHEMA_MESSAGE,
            )
        ]
    )


def _changed_facets(existing: SchemaNode, new: SchemaNode) -> list[str]:
    """Names of the facets that differ between two leaf schemas, sorted."""
    existing_facets: dict[str, Any] = {**existing.extra, "required": existing.required}
    new_facets: dict[str, Any] = {**new.extra, "required": new.required}
    existing_facets["properties"] = existing.properties
    new_facets["properties"] = new.properties
    existing_facets["additionalProperties"] = existing.additional_properties
    new_facets["additionalProperties"] = new.additional_properties

    return sorted(
        name
        for name in set(existing_facets) | set(new_facets)
        if existing_facets.get(name) != new_facets.get(name)
    )


class SchemaComparator:
    """Check proposed schema versions against the accepted one.

    Holds the defaults a registration gate applies to every check, and wraps
    ``compute_compatibility`` results into ``ComparisonResult`` objects.
    """

    def __init__(self, root_path: FieldPath | None = None, narrow_existing: bool = False):
        """Initialize comparator.

        Args:
            root_path: Path prefixed to every violation (default: empty path)
            narrow_existing: Default narrowing policy
        """
        self.root_path = root_path or FieldPath()
        self.narrow_existing = narrow_existing

    def compare(
        self,
        existing: SchemaNode,
        new: SchemaNode,
        narrow_existing: bool | None = None,
        path: FieldPath | None = None,
    ) -> ComparisonResult:
        """Compare ``new`` against ``existing``.

        Args:
            existing: Currently accepted schema
            new: Proposed schema
            narrow_existing: Override the comparator's narrowing policy
            path: Override the comparator's root path

        Returns:
            ComparisonResult with the LCD or the aggregated violations
        """
        narrow = self.narrow_existing if narrow_existing is None else narrow_existing
        root = self.root_path if path is None else path

        lcd, error = compute_compatibility(root, existing, new, narrow)
        result = ComparisonResult(
            existing=existing,
            new=new,
            lcd=lcd,
            error=error,
            narrow_existing=narrow,
            path=root,
        )

        logger.info("schema_compatibility_checked", **result.get_summary())

        return result
