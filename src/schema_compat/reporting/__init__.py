"""Reporting for schema compatibility checks."""

from schema_compat.reporting.schema_report import (
    display_compatibility_summary,
    generate_compatibility_report_text,
)

__all__ = [
    "display_compatibility_summary",
    "generate_compatibility_report_text",
]
