"""Extract catalog operations from an :class:`~opscatalog.models.ApiDocument`.

:func:`extract_operations` walks every path template and every HTTP method
declared under it, and builds exactly one
:class:`~opscatalog.models.CatalogOperation` per pair. Non-method keys of a
path item (``parameters``, ``summary``, ``servers``...) are skipped.

Parameter merging follows the OpenAPI specification: path-level parameters
provide defaults, and operation-level parameters override them when they
share the same ``name`` and ``in`` values. Parameters and request bodies
given as ``$ref`` pointers into ``components`` are followed.

Operation keys are derived from method and path only and are **not**
deduplicated: two operations that slugify to the same key (``/a-b`` and
``/a/b`` under the same method) both appear with that key.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from opscatalog.catalog.naming import slugify
from opscatalog.catalog.sampler import render_sample, synthesize_sample
from opscatalog.models import (
    ApiDocument,
    CatalogOperation,
    GeneratorOptions,
    HTTPMethod,
)
from opscatalog.parser.schema import parse_schema

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)
_PATH_PARAM_RE = re.compile(r"\{([^}]+)\}")


def extract_operations(
    document: ApiDocument,
    options: Optional[GeneratorOptions] = None,
    timestamp: Optional[str] = None,
) -> list[CatalogOperation]:
    """Build one catalog operation per path and method of *document*.

    Args:
        document: The loaded input document.
        options: Prefix, default tag and depth settings. Defaults apply
            when omitted.
        timestamp: Value used for ``date-time`` fields in sample bodies.

    Returns:
        Operations in document order (paths, then methods as declared).

    Example::

        document = load_document("docs/admin-openapi.json")
        for op in extract_operations(document):
            print(op.method, op.path, op.key)
    """
    options = options or GeneratorOptions()
    operations: list[CatalogOperation] = []

    for path, path_item in document.paths.items():
        path_params = _as_list(path_item.get("parameters"))

        for method, operation in path_item.items():
            if not isinstance(method, str) or method.lower() not in _HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                logger.debug("%s %s is not an object, using defaults", method, path)
                operation = {}

            operations.append(
                _build_operation(
                    document,
                    path,
                    method.lower(),
                    operation,
                    path_params,
                    options,
                    timestamp,
                )
            )

    return operations


def _build_operation(
    document: ApiDocument,
    path: str,
    method: str,
    operation: dict[str, Any],
    path_params: list[Any],
    options: GeneratorOptions,
    timestamp: Optional[str],
) -> CatalogOperation:
    """Assemble a single :class:`CatalogOperation`."""
    cleaned = clean_path(path, options.strip_prefix)
    verb = method.upper()

    merged = merge_parameters(
        _resolve_parameters(document, path_params, path),
        _resolve_parameters(document, _as_list(operation.get("parameters")), path),
    )
    query_params = [p["name"] for p in merged if p.get("in") == "query"]

    body_schema = _json_body_schema(document, operation.get("requestBody"))
    sample_body: Optional[str] = None
    if body_schema is not None:
        sample = synthesize_sample(
            parse_schema(body_schema),
            document.schema_table,
            max_depth=options.max_depth,
            timestamp=timestamp,
        )
        sample_body = render_sample(sample)

    return CatalogOperation(
        key=slugify(f"{method}-{cleaned.replace('{', '').replace('}', '')}"),
        method=verb,
        path=cleaned,
        label=_label(operation, verb, cleaned),
        has_body=body_schema is not None,
        sample_body=sample_body,
        query_params=query_params,
        path_params=path_param_names(cleaned),
        tag=_first_tag(operation) or options.default_tag,
    )


def clean_path(path: str, prefix: str) -> str:
    """Strip the API-root *prefix* from *path*; an empty result becomes ``"/"``."""
    if prefix and path.startswith(prefix):
        path = path[len(prefix):]
    return path or "/"


def path_param_names(path: str) -> list[str]:
    """Return the ``{name}`` placeholders of *path* in order of appearance."""
    return _PATH_PARAM_RE.findall(path)


def merge_parameters(
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters override path-level parameters with the same
    name and location (``in`` field), per the OpenAPI spec. Path-level
    parameters come first, followed by every operation-level parameter in
    declaration order.
    """
    op_keys = {(p.get("name"), p.get("in")) for p in op_params}
    merged = [p for p in path_params if (p.get("name"), p.get("in")) not in op_keys]
    merged.extend(op_params)
    return merged


def _resolve_parameters(
    document: ApiDocument, params: list[Any], path: str
) -> list[dict[str, Any]]:
    """Follow ``$ref`` parameters and drop entries without a usable name."""
    resolved: list[dict[str, Any]] = []
    for param in params:
        if isinstance(param, dict) and "$ref" in param:
            target = _lookup_pointer(document.raw, param["$ref"])
            if target is None:
                logger.debug("Unresolved parameter $ref %s on %s", param["$ref"], path)
                continue
            param = target
        if not isinstance(param, dict) or not isinstance(param.get("name"), str):
            logger.debug("Skipping malformed parameter on %s: %r", path, param)
            continue
        resolved.append(param)
    return resolved


def _json_body_schema(document: ApiDocument, body: Any) -> Optional[dict[str, Any]]:
    """Return the ``application/json`` request-body schema, if declared."""
    if isinstance(body, dict) and "$ref" in body:
        body = _lookup_pointer(document.raw, body["$ref"])
    if not isinstance(body, dict):
        return None
    content = body.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get(JSON_CONTENT_TYPE)
    if not isinstance(media, dict):
        return None
    schema = media.get("schema")
    return schema if isinstance(schema, dict) else None


def _lookup_pointer(root: dict[str, Any], ref: Any) -> Optional[dict[str, Any]]:
    """Resolve an internal JSON Pointer (``#/...``) against *root*.

    Handles RFC 6901 escaping (``~0`` for ``~``, ``~1`` for ``/``). Returns
    ``None`` for external references, missing segments, or non-object
    targets.
    """
    if not isinstance(ref, str) or not ref.startswith("#/"):
        return None
    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")
        if not isinstance(current, dict) or segment not in current:
            return None
        current = current[segment]
    return current if isinstance(current, dict) else None


def _first_tag(operation: dict[str, Any]) -> Optional[str]:
    tags = operation.get("tags")
    if isinstance(tags, list) and tags and isinstance(tags[0], str) and tags[0]:
        return tags[0]
    return None


def _label(operation: dict[str, Any], verb: str, cleaned_path: str) -> str:
    for field in ("summary", "operationId"):
        value = operation.get(field)
        if isinstance(value, str) and value.strip():
            return value
    return f"{verb} {cleaned_path}"


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []
