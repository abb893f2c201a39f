"""Resolve reference and ``allOf`` schema nodes against a schema table.

The resolver replaces a :attr:`~opscatalog.models.SchemaKind.REFERENCE` node
with the schema it names, and a
:attr:`~opscatalog.models.SchemaKind.COMPOSED_AND` node with its **first**
member only. The remaining ``allOf`` members are discarded rather than
merged; catalog samples for composed request bodies therefore only show the
fields of the first fragment.

The schema table is always passed explicitly, so the resolver is a pure
function that can be used on its own in tests.

Each dereference step consumes one unit of depth. The counter is shared with
:func:`~opscatalog.catalog.sampler.synthesize_sample`, so a chain of
references (``A -> B -> A -> ...``) can never loop: once the depth passes
``max_depth`` the resolver returns :data:`UNKNOWN_SCHEMA`.
"""

from __future__ import annotations

from collections.abc import Mapping

from opscatalog.models import SchemaKind, SchemaNode

DEFAULT_MAX_DEPTH = 3

UNKNOWN_SCHEMA = SchemaNode(kind=SchemaKind.UNKNOWN)
"""Sentinel for dangling references and exhausted reference chains."""

_INDIRECT_KINDS = frozenset({SchemaKind.REFERENCE, SchemaKind.COMPOSED_AND})


def resolve_schema(
    node: SchemaNode,
    schema_table: Mapping[str, SchemaNode],
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[SchemaNode, int]:
    """Dereference *node* until it is a concrete shape.

    Args:
        node: The node to resolve.
        schema_table: Named schemas from ``components.schemas``.
        depth: Depth already consumed by the caller.
        max_depth: Depth ceiling shared with sample synthesis.

    Returns:
        A ``(resolved_node, depth)`` tuple. ``depth`` is increased by one per
        dereference step. ``resolved_node`` is never a reference or composed
        node: it is :data:`UNKNOWN_SCHEMA` when a target is missing or the
        chain ran past ``max_depth``.

    Example::

        table = {"Pet": SchemaNode(kind=SchemaKind.OBJECT)}
        ref = SchemaNode(kind=SchemaKind.REFERENCE, ref_name="Pet")
        resolve_schema(ref, table)  # (table["Pet"], 1)
    """
    while node.kind in _INDIRECT_KINDS:
        if depth > max_depth:
            return UNKNOWN_SCHEMA, depth
        node = _step(node, schema_table)
        depth += 1
    return node, depth


def _step(node: SchemaNode, schema_table: Mapping[str, SchemaNode]) -> SchemaNode:
    """Perform a single dereference of a reference or composed node."""
    if node.kind == SchemaKind.REFERENCE:
        if node.ref_name is None:
            return UNKNOWN_SCHEMA
        return schema_table.get(node.ref_name, UNKNOWN_SCHEMA)
    if node.members:
        return node.members[0]
    return UNKNOWN_SCHEMA
