"""Loading schema documents and saving LCDs and compatibility reports."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml

from schema_compat.exceptions import SchemaDocumentError
from schema_compat.schema.models import ComparisonResult, SchemaNode
from schema_compat.utils.logging import get_logger

logger = get_logger(__name__)

JSON_SUFFIXES = {".json"}
YAML_SUFFIXES = {".yaml", ".yml"}

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _SchemaLoader(yaml.SafeLoader):
    """Safe loader that keeps unquoted dates and timestamps as strings.

    JSON has no date type, so schema values such as ``default: 2024-01-01``
    must survive a YAML to JSON round trip unchanged.
    """


_SchemaLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _read_document(path: Path) -> Any:
    suffix = path.suffix.lower()
    if suffix not in JSON_SUFFIXES | YAML_SUFFIXES:
        raise SchemaDocumentError(
            f"Unsupported file format: {suffix or '<none>'}. Use .json, .yaml, or .yml",
            str(path),
        )

    try:
        with open(path, encoding="utf-8") as f:
            if suffix in JSON_SUFFIXES:
                return json.load(f)
            return yaml.load(f, Loader=_SchemaLoader)
    except FileNotFoundError as e:
        raise SchemaDocumentError("file not found", str(path)) from e
    except UnicodeDecodeError as e:
        raise SchemaDocumentError(f"not valid UTF-8: {e}", str(path)) from e
    except OSError as e:
        raise SchemaDocumentError(f"cannot read file: {e.strerror or e}", str(path)) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaDocumentError(f"invalid document: {e}", str(path)) from e


def select_subdocument(document: Any, select: str) -> Any:
    """Walk a dotted selector into a loaded document.

    Numeric parts index into lists, e.g. ``spec.versions.0.schema.openAPIV3Schema``.

    Raises:
        SchemaDocumentError: If a part of the selector does not resolve
    """
    current = document
    walked: list[str] = []
    for part in select.split("."):
        walked.append(part)
        if isinstance(current, dict) and part in current:
            current = current[part]
        elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            raise SchemaDocumentError(f"selector does not resolve at '{'.'.join(walked)}'")
    return current


def load_schema_document(path: Path | str, select: str | None = None) -> SchemaNode:
    """Load a schema from a JSON or YAML file.

    Args:
        path: Schema file
        select: Optional dotted selector of the schema inside the document

    Returns:
        Decoded schema

    Raises:
        SchemaDocumentError: If the file cannot be read or decoded
    """
    path = Path(path)
    document = _read_document(path)

    if select:
        try:
            document = select_subdocument(document, select)
        except SchemaDocumentError as e:
            raise SchemaDocumentError(e.message, str(path)) from e

    try:
        schema = SchemaNode.from_dict(document)
    except SchemaDocumentError as e:
        raise SchemaDocumentError(f"{e.source}: {e.message}", str(path)) from e

    logger.debug(
        "schema_loaded",
        file=str(path),
        select=select,
        properties_count=len(schema.properties),
    )

    return schema


def save_lcd(lcd: SchemaNode, output_path: Path | str) -> Path:
    """Save an LCD schema as JSON or YAML depending on the file suffix.

    Args:
        lcd: Schema to save
        output_path: Destination file (.json, .yaml or .yml)

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        if output_path.suffix.lower() in YAML_SUFFIXES:
            yaml.safe_dump(lcd.to_dict(), f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(lcd.to_dict(), f, indent=2)

    logger.info("lcd_saved", file=str(output_path), properties_count=len(lcd.properties))

    return output_path


def save_report(
    result: ComparisonResult,
    output_path: Path | str,
    existing_file: str | None = None,
    new_file: str | None = None,
) -> Path:
    """Save a compatibility report to a JSON file.

    Args:
        result: Comparison result
        output_path: Destination file
        existing_file: Source of the existing schema, recorded in the report
        new_file: Source of the new schema, recorded in the report

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    report = {
        "generated_at": datetime.now(UTC).isoformat(),
        "existing_file": existing_file,
        "new_file": new_file,
        **result.to_dict(),
    }

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)

    logger.info(
        "compatibility_report_saved",
        file=str(output_path),
        compatible=result.is_compatible,
        violations_count=len(result.violations),
    )

    return output_path


def load_report(report_file: Path | str) -> dict[str, Any]:
    """Load a compatibility report saved by ``save_report``.

    Raises:
        FileNotFoundError: If the report doesn't exist
    """
    report_file = Path(report_file)
    if not report_file.exists():
        raise FileNotFoundError(f"Report file not found: {report_file}")

    with open(report_file, encoding="utf-8") as f:
        return json.load(f)
