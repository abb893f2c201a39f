"""Synthesize example request bodies from schema nodes.

:func:`synthesize_sample` turns a :class:`~opscatalog.models.SchemaNode` into
a small, representative JSON value that the API Explorer pre-fills into its
request editor:

=============== =============================================================
Kind            Sample
=============== =============================================================
enumerated      the first enum literal
object          first :data:`MAX_SAMPLE_PROPERTIES` properties, recursively
array           a single-element list of the item sample
integer/number  ``0``
boolean         ``False``
string          ``""``, or the generation timestamp for ``date-time``
unknown         ``""``
=============== =============================================================

Every call is bounded by ``max_depth``; past it the sample is ``None``
regardless of the node kind. This is what keeps self-referential schemas
(``Category.parent: Category``) from recursing forever.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional

from opscatalog.models import SchemaKind, SchemaNode
from opscatalog.parser.resolver import DEFAULT_MAX_DEPTH, resolve_schema

MAX_SAMPLE_PROPERTIES = 15
"""Object samples keep only this many properties, in declaration order."""

DATE_TIME_FORMAT = "date-time"


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """Format *moment* (default: now) as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def synthesize_sample(
    node: Optional[SchemaNode],
    schema_table: Mapping[str, SchemaNode],
    depth: int = 0,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    timestamp: Optional[str] = None,
) -> Any:
    """Build an example value for *node*.

    Args:
        node: The schema to sample. ``None`` (no schema declared) samples
            to ``None``.
        schema_table: Named schemas used to resolve references.
        depth: Current nesting depth; callers normally leave this at ``0``.
        max_depth: Depth ceiling shared with the resolver.
        timestamp: Value used for ``date-time`` strings. When omitted the
            current UTC time is used, which makes the result time-dependent.

    Returns:
        A JSON-compatible value (dict, list, str, int, bool or ``None``).

    Example::

        node = parse_schema({"type": "object", "properties": {
            "name": {"type": "string"}, "age": {"type": "integer"}}})
        synthesize_sample(node, {})  # {"name": "", "age": 0}
    """
    if node is None or depth > max_depth:
        return None

    node, depth = resolve_schema(node, schema_table, depth, max_depth)
    if depth > max_depth:
        return None

    kind = node.kind
    if kind == SchemaKind.ENUMERATED:
        return node.enum_values[0]

    if kind == SchemaKind.OBJECT:
        names = list(node.properties)[:MAX_SAMPLE_PROPERTIES]
        return {
            name: synthesize_sample(
                node.properties[name],
                schema_table,
                depth + 1,
                max_depth=max_depth,
                timestamp=timestamp,
            )
            for name in names
        }

    if kind == SchemaKind.ARRAY:
        return [
            synthesize_sample(
                node.items, schema_table, depth + 1, max_depth=max_depth, timestamp=timestamp
            )
        ]

    if kind in (SchemaKind.INTEGER, SchemaKind.NUMBER):
        return 0

    if kind == SchemaKind.BOOLEAN:
        return False

    if kind == SchemaKind.STRING and node.format == DATE_TIME_FORMAT:
        return timestamp if timestamp is not None else utc_timestamp()

    # Plain strings and anything the resolver could not pin down.
    return ""


def render_sample(value: Any) -> str:
    """Pretty-print a sample the way the request editor displays it.

    YAML-only scalars (``2024-01-01`` loads as a date) render as strings.
    """
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)
