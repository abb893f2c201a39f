"""Canonical Pydantic models shared across all opscatalog modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration model** -- resolved from defaults, ``./opscatalog.json``,
environment variables and CLI flags:
    :class:`GeneratorOptions`.

**Input models** -- produced by the parser from the raw OpenAPI document:
    :class:`SchemaKind`, :class:`SchemaNode`, :class:`HTTPMethod` and
    :class:`ApiDocument`.

**Catalog models** -- produced by the generator and serialised as the single
output artifact:
    :class:`CatalogOperation`, :class:`Domain` and :class:`CatalogDocument`.

Catalog models serialise with camelCase aliases (``hasBody``, ``sampleBody``,
``generatedAt``...) because the consuming dashboard reads them from
JavaScript. Always dump them with ``by_alias=True``.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class GeneratorOptions(BaseModel):
    """Options controlling a single catalog generation run.

    Resolved by :func:`~opscatalog.config.resolve_options`; see that function
    for the full precedence chain.
    """

    input: str = Field(
        default="docs/admin-openapi.json",
        description="Path to the OpenAPI document, or '-' for stdin",
    )
    output: str = Field(
        default="docs/admin-openapi-ops.json",
        description="Path the catalog document is written to",
    )
    strip_prefix: str = Field(
        default="/admin-api",
        description="API-root prefix removed from every path template",
    )
    default_tag: str = Field(
        default="Admin", description="Tag assigned to operations that declare none"
    )
    max_depth: int = Field(
        default=3,
        ge=1,
        description="Depth ceiling for schema resolution and sample synthesis",
    )


# --- Input models ---


class SchemaKind(str, enum.Enum):
    """Shape discriminator for :class:`SchemaNode`.

    ``UNKNOWN`` is the sentinel used for nodes without a recognised type and
    for references whose target is missing from the schema table.
    """

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    REFERENCE = "reference"
    COMPOSED_AND = "composed_and"
    ENUMERATED = "enumerated"
    UNKNOWN = "unknown"


class SchemaNode(BaseModel):
    """A recursive description of a value shape.

    Only the fields relevant to ``kind`` are populated:

    * ``OBJECT`` -- ``properties`` (declaration order is preserved).
    * ``ARRAY`` -- ``items`` (``None`` when the document omits it).
    * ``REFERENCE`` -- ``ref_name`` (``None`` for pointers outside
      ``#/components/schemas``).
    * ``COMPOSED_AND`` -- ``members`` (never empty).
    * ``ENUMERATED`` -- ``enum_values`` (never empty).
    * ``STRING`` -- optional ``format`` hint such as ``"date-time"``.
    """

    model_config = ConfigDict(frozen=True)

    kind: SchemaKind
    properties: dict[str, SchemaNode] = Field(default_factory=dict)
    items: Optional[SchemaNode] = None
    ref_name: Optional[str] = None
    members: list[SchemaNode] = Field(default_factory=list)
    enum_values: list[Any] = Field(default_factory=list)
    format: Optional[str] = None


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects.

    Any other key of a path item (``parameters``, ``summary``, ``servers``...)
    is not an operation.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class ApiDocument(BaseModel):
    """The generator's single input, read once from disk and never mutated.

    ``paths`` keeps the raw path-item dictionaries; operations are only
    interpreted by :mod:`~opscatalog.catalog.extractor`. ``schema_table``
    holds the converted ``components.schemas`` entries and is handed
    explicitly to the resolver and synthesizer.
    """

    model_config = ConfigDict(frozen=True)

    paths: dict[str, dict[str, Any]] = Field(default_factory=dict)
    schema_table: dict[str, SchemaNode] = Field(default_factory=dict)
    openapi_version: Optional[str] = None
    title: Optional[str] = None
    raw: dict[str, Any] = Field(
        default_factory=dict, description="Original document for pointer lookups"
    )


# --- Catalog models ---


class CatalogOperation(BaseModel):
    """One REST endpoint as shown in the API Explorer.

    ``tag`` drives grouping into a :class:`Domain` and is not serialised on
    the operation itself.
    """

    model_config = ConfigDict(populate_by_name=True)

    key: str
    method: str
    path: str
    label: str
    has_body: bool = Field(default=False, alias="hasBody")
    sample_body: Optional[str] = Field(default=None, alias="sampleBody")
    query_params: list[str] = Field(default_factory=list, alias="queryParams")
    path_params: list[str] = Field(default_factory=list, alias="pathParams")
    tag: str = Field(exclude=True)


class Domain(BaseModel):
    """A tag-derived group of operations."""

    key: str
    tag: str
    label: str
    operations: list[CatalogOperation] = Field(default_factory=list)


class CatalogDocument(BaseModel):
    """The output artifact: every domain, plus the generation timestamp."""

    model_config = ConfigDict(populate_by_name=True)

    generated_at: str = Field(alias="generatedAt")
    domains: list[Domain] = Field(default_factory=list)

    def operation_count(self) -> int:
        return sum(len(domain.operations) for domain in self.domains)
