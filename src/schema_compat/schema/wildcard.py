"""Classification of "additional properties" declarations.

Schema documents encode additional properties as either a boolean or a
schema, and decoders usually keep both in one slot. The comparator only ever
sees the three-way result of ``resolve_wildcard``.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schema_compat.schema.models import SchemaNode


@dataclass(frozen=True)
class AdditionalProperties:
    """Decoded boolean-or-schema declaration.

    ``allows`` only matters when ``schema`` is None.
    """

    allows: bool = False
    schema: "SchemaNode | None" = None


@dataclass(frozen=True)
class Forbidden:
    """No unnamed property is admitted."""


@dataclass(frozen=True)
class AllowAny:
    """Any unnamed property is admitted, unconstrained."""


@dataclass(frozen=True)
class Pattern:
    """Any unnamed property is admitted if it conforms to ``schema``."""

    schema: "SchemaNode"

    __hash__ = None  # type: ignore[assignment]


Wildcard = Forbidden | AllowAny | Pattern

FORBIDDEN = Forbidden()
ALLOW_ANY = AllowAny()


def resolve_wildcard(declaration: AdditionalProperties | None) -> Wildcard:
    """Resolve a declaration into Forbidden, AllowAny or Pattern.

    A present schema wins over the boolean flag.

    Args:
        declaration: Decoded declaration, or None when absent

    Returns:
        The wildcard variant
    """
    if declaration is None:
        return FORBIDDEN
    if declaration.schema is not None:
        return Pattern(declaration.schema)
    if declaration.allows:
        return ALLOW_ANY
    return FORBIDDEN


def to_declaration(wildcard: Wildcard) -> AdditionalProperties | None:
    """Map a wildcard variant back to its declaration form.

    Forbidden maps to None, the form a decoder produces for an absent field.
    """
    if isinstance(wildcard, Pattern):
        return AdditionalProperties(allows=True, schema=wildcard.schema)
    if isinstance(wildcard, AllowAny):
        return AdditionalProperties(allows=True)
    return None
