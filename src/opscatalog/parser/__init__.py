"""OpenAPI document parser -- load the input and model its schemas.

This sub-package is responsible for the first half of the opscatalog
pipeline: turning a raw OpenAPI 3.x document (JSON or YAML, local file or
stdin) into an :class:`~opscatalog.models.ApiDocument` that the catalog
generator can consume.

Typical usage::

    from opscatalog.parser import load_document

    document = load_document("docs/admin-openapi.json")
    node = document.schema_table["CreateAdminRequest"]

Sub-modules:

* :mod:`~opscatalog.parser.loader` -- I/O layer (file, stdin) plus format
  detection and shape validation.
* :mod:`~opscatalog.parser.schema` -- Conversion of raw schema dicts into
  :class:`~opscatalog.models.SchemaNode` trees.
* :mod:`~opscatalog.parser.resolver` -- Depth-bounded dereferencing of
  reference and ``allOf`` nodes against the schema table.
"""

from opscatalog.parser.loader import load_document, load_spec, validate_openapi_version
from opscatalog.parser.resolver import UNKNOWN_SCHEMA, resolve_schema
from opscatalog.parser.schema import parse_schema, parse_schema_table

__all__ = [
    "load_spec",
    "load_document",
    "validate_openapi_version",
    "parse_schema",
    "parse_schema_table",
    "resolve_schema",
    "UNKNOWN_SCHEMA",
]
