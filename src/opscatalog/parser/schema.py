"""Convert raw JSON Schema dictionaries into :class:`~opscatalog.models.SchemaNode` trees.

Kind detection follows a fixed priority, first match wins:

1. ``$ref`` -- a :attr:`~SchemaKind.REFERENCE` to a ``components.schemas``
   entry. Pointers anywhere else keep ``ref_name=None`` and later resolve to
   the unknown sentinel.
2. non-empty ``allOf`` -- :attr:`~SchemaKind.COMPOSED_AND`.
3. non-empty ``enum`` -- :attr:`~SchemaKind.ENUMERATED`.
4. ``type`` -- one of the six JSON Schema value types. OpenAPI 3.1 type
   arrays such as ``["string", "null"]`` use the first non-null entry.
5. anything else -- :attr:`~SchemaKind.UNKNOWN`.

Conversion never follows references, so it always terminates on acyclic
JSON input.
"""

from __future__ import annotations

from typing import Any

from opscatalog.models import SchemaKind, SchemaNode

SCHEMA_REF_PREFIX = "#/components/schemas/"

_TYPE_KINDS = {
    "object": SchemaKind.OBJECT,
    "array": SchemaKind.ARRAY,
    "string": SchemaKind.STRING,
    "integer": SchemaKind.INTEGER,
    "number": SchemaKind.NUMBER,
    "boolean": SchemaKind.BOOLEAN,
}


def parse_schema(raw: Any) -> SchemaNode | None:
    """Convert one raw schema into a :class:`SchemaNode`.

    Args:
        raw: A schema dictionary as found in the OpenAPI document.

    Returns:
        The converted node, or ``None`` when *raw* is not a dictionary
        (i.e. the document declares no schema at this position).
    """
    if not isinstance(raw, dict):
        return None

    if "$ref" in raw:
        return SchemaNode(kind=SchemaKind.REFERENCE, ref_name=ref_target(raw["$ref"]))

    all_of = raw.get("allOf")
    if isinstance(all_of, list) and all_of:
        members = [parse_schema(member) for member in all_of]
        return SchemaNode(
            kind=SchemaKind.COMPOSED_AND,
            members=[m if m is not None else SchemaNode(kind=SchemaKind.UNKNOWN) for m in members],
        )

    enum_values = raw.get("enum")
    if isinstance(enum_values, list) and enum_values:
        return SchemaNode(kind=SchemaKind.ENUMERATED, enum_values=list(enum_values))

    kind = _TYPE_KINDS.get(_schema_type(raw))
    if kind == SchemaKind.OBJECT:
        props = raw.get("properties")
        properties: dict[str, SchemaNode] = {}
        if isinstance(props, dict):
            for name, prop in props.items():
                # Boolean schemas (`name: true`) still show up in the sample.
                node = parse_schema(prop)
                properties[str(name)] = node if node is not None else SchemaNode(kind=SchemaKind.UNKNOWN)
        return SchemaNode(kind=kind, properties=properties)
    if kind == SchemaKind.ARRAY:
        return SchemaNode(kind=kind, items=parse_schema(raw.get("items")))
    if kind == SchemaKind.STRING:
        fmt = raw.get("format")
        return SchemaNode(kind=kind, format=fmt if isinstance(fmt, str) else None)
    if kind is not None:
        return SchemaNode(kind=kind)

    return SchemaNode(kind=SchemaKind.UNKNOWN)


def parse_schema_table(schemas: dict[str, Any]) -> dict[str, SchemaNode]:
    """Convert a ``components.schemas`` mapping into a schema table.

    Entries that are not dictionaries become :attr:`~SchemaKind.UNKNOWN`
    nodes so that references to them still resolve (to an empty sample).
    """
    table: dict[str, SchemaNode] = {}
    for name, raw in schemas.items():
        node = parse_schema(raw)
        table[str(name)] = node if node is not None else SchemaNode(kind=SchemaKind.UNKNOWN)
    return table


def ref_target(ref: Any) -> str | None:
    """Return the schema name a ``$ref`` points at, or ``None``.

    Handles RFC 6901 JSON Pointer escaping (``~1`` for ``/``, ``~0`` for ``~``).

    Example::

        ref_target("#/components/schemas/Pet")          # "Pet"
        ref_target("#/components/parameters/PageSize")  # None
    """
    if not isinstance(ref, str) or not ref.startswith(SCHEMA_REF_PREFIX):
        return None
    name = ref[len(SCHEMA_REF_PREFIX):]
    if not name or "/" in name:
        return None
    return name.replace("~1", "/").replace("~0", "~")


def _schema_type(raw: dict[str, Any]) -> str | None:
    type_value = raw.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        return non_null[0] if non_null and isinstance(non_null[0], str) else None
    return type_value if isinstance(type_value, str) else None
