"""opscatalog -- Build an API Explorer operation catalog from an OpenAPI document.

This package reads an OpenAPI 3.x description of an admin backend and turns
it into a single JSON catalog: operations grouped by tag into *domains*, each
with a stable key, its path and query parameters, and a synthesized example
request body. The catalog is produced at build time and consumed read-only by
the dashboard's API Explorer screen.

Typical workflow::

    opscatalog generate docs/admin-openapi.json -o docs/admin-openapi-ops.json
    opscatalog inspect domains docs/admin-openapi.json

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for the input document and the catalog.
    config: Generator options and their precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
