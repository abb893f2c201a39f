"""Load OpenAPI documents from a local file or stdin.

This module handles all I/O for reading the raw OpenAPI document and
converting it into Python dictionaries. It supports both JSON and YAML
formats with automatic format detection, and checks that the document has
the shape the generator needs before anything else runs.

The public functions are:

* :func:`load_spec` -- Load and parse a document from a path or stdin.
* :func:`validate_openapi_version` -- Reject Swagger 2.x documents and
  return the declared ``openapi`` version, if any.
* :func:`load_document` -- The full load step used by the generator: parse,
  validate, and convert ``components.schemas`` into a schema table.

Every failure here is fatal and raised as
:class:`~opscatalog.exceptions.SpecParseError` before any output is written.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import yaml

from opscatalog.exceptions import SpecParseError
from opscatalog.models import ApiDocument
from opscatalog.parser.schema import parse_schema_table


def load_spec(source: str) -> dict[str, Any]:
    """Load an OpenAPI document from a file path or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A file path, or '-' for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read the document from stdin.

    Raises:
        SpecParseError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_file(path: str) -> dict[str, Any]:
    """Load the document from a local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Raises:
        SpecParseError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        SpecParseError: If the content cannot be parsed as either format.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
        else:
            if not isinstance(result, dict):
                raise SpecParseError(
                    f"Spec must be a JSON/YAML object (got {type(result).__name__})"
                )
            return result

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        if not isinstance(result, dict):
            raise SpecParseError(
                "Spec must be a JSON/YAML object (got "
                f"{type(result).__name__ if result is not None else 'empty document'})"
            )
        return result

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def validate_openapi_version(spec: dict[str, Any]) -> str | None:
    """Return the document's OpenAPI version string.

    Swagger 2.x documents are rejected: their schemas live under
    ``definitions`` and their bodies under ``in: body`` parameters, so the
    catalog would silently lose every sample. A missing ``openapi`` field is
    tolerated since the generator only needs ``paths``.

    Args:
        spec: The parsed document dictionary.

    Returns:
        The version string (e.g. ``'3.0.1'``), or ``None`` when absent.

    Raises:
        SpecParseError: If the document declares Swagger 2.x or a major
            version other than 3.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported. "
            "Only OpenAPI 3.0.x and 3.1.x are supported. "
            "Consider converting with https://converter.swagger.io"
        )

    openapi_version = spec.get("openapi")
    if openapi_version is None:
        return None

    version_str = str(openapi_version)
    if not version_str.startswith("3."):
        raise SpecParseError(
            f"Unsupported OpenAPI version: {version_str}. "
            "Only OpenAPI 3.0.x and 3.1.x are supported."
        )
    return version_str


def load_document(source: str) -> ApiDocument:
    """Load, validate and convert an OpenAPI document into an :class:`ApiDocument`.

    Args:
        source: A file path, or '-' for stdin.

    Returns:
        The immutable input model consumed by the generator.

    Raises:
        SpecParseError: If the document cannot be loaded, declares an
            unsupported version, or ``paths`` / ``components.schemas`` are
            present but not mappings.
    """
    raw = load_spec(source)
    version = validate_openapi_version(raw)

    paths = raw.get("paths")
    if paths is None:
        paths = {}
    if not isinstance(paths, dict):
        raise SpecParseError(f"'paths' must be an object (got {type(paths).__name__})")

    components = raw.get("components")
    if components is None:
        components = {}
    if not isinstance(components, dict):
        raise SpecParseError(
            f"'components' must be an object (got {type(components).__name__})"
        )
    schemas = components.get("schemas")
    if schemas is None:
        schemas = {}
    if not isinstance(schemas, dict):
        raise SpecParseError(
            f"'components.schemas' must be an object (got {type(schemas).__name__})"
        )

    info = raw.get("info")
    title = info.get("title") if isinstance(info, dict) else None
    if title is not None and not isinstance(title, str):
        # YAML `title: 2024` loads as an int.
        title = str(title) if not isinstance(title, (dict, list)) else None

    return ApiDocument(
        paths={str(path): item for path, item in paths.items() if isinstance(item, dict)},
        schema_table=parse_schema_table(schemas),
        openapi_version=version,
        title=title,
        raw=raw,
    )
