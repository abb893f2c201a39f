"""Inspect commands -- preview the catalog without writing it.

Provides the ``opscatalog inspect`` sub-command group with read-only
commands for checking what the generator will produce: the domain list,
the operations (optionally of one domain), and the synthesized sample for a
named schema. All sub-commands resolve options the same way ``generate``
does and present the data in table or structured output format.
"""

from __future__ import annotations

from typing import Optional

import typer

from opscatalog.catalog import build_catalog, duplicate_operation_keys, synthesize_sample
from opscatalog.config import resolve_options
from opscatalog.exceptions import CatalogError, InvalidUsageError
from opscatalog.models import ApiDocument, GeneratorOptions
from opscatalog.output import error, info, print_json, print_table, warning
from opscatalog.parser import load_document


inspect_app = typer.Typer(no_args_is_help=True)

_INPUT_HELP = "OpenAPI document, or '-' for stdin. Defaults to the configured input."


def _load(input: Optional[str]) -> tuple[ApiDocument, GeneratorOptions]:
    """Resolve options and load the input document.

    Raises:
        typer.Exit: With the error's exit code when options or the document
            cannot be loaded.
    """
    try:
        options = resolve_options(cli_input=input)
        return load_document(options.input), options
    except CatalogError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


@inspect_app.command("domains")
def inspect_domains(
    input: Optional[str] = typer.Argument(None, help=_INPUT_HELP, show_default=False),
) -> None:
    """List the domains the catalog will contain.

    Example::

        opscatalog inspect domains docs/admin-openapi.json
    """
    document, options = _load(input)
    catalog = build_catalog(document, options)

    rows = [
        [domain.key, domain.label, domain.tag, str(len(domain.operations))]
        for domain in catalog.domains
    ]
    title = f"{document.title or 'API'} -- Domains ({len(rows)})"
    print_table(["Key", "Label", "Tag", "Operations"], rows, title=title)


@inspect_app.command("operations")
def inspect_operations(
    input: Optional[str] = typer.Argument(None, help=_INPUT_HELP, show_default=False),
    domain: Optional[str] = typer.Option(
        None, "--domain", "-d", help="Only show operations of this domain key."
    ),
) -> None:
    """List catalog operations with their keys.

    Duplicate operation keys are reported as a warning on stderr.

    Example::

        opscatalog inspect operations --domain kyc-job
    """
    document, options = _load(input)
    catalog = build_catalog(document, options)

    domains = catalog.domains
    if domain is not None:
        domains = [d for d in domains if d.key == domain]
        if not domains:
            error(f"Unknown domain: {domain}")
            raise typer.Exit(code=InvalidUsageError.exit_code)

    rows = [
        [op.method, op.path, op.key, op.label, "yes" if op.has_body else ""]
        for d in domains
        for op in d.operations
    ]
    print_table(
        ["Method", "Path", "Key", "Label", "Body"], rows, title=f"Operations ({len(rows)})"
    )

    duplicates = duplicate_operation_keys(domains)
    if duplicates:
        warning(f"Duplicate operation keys: {', '.join(duplicates)}")


@inspect_app.command("sample")
def inspect_sample(
    schema_name: str = typer.Argument(..., help="Name under components.schemas."),
    input: Optional[str] = typer.Argument(None, help=_INPUT_HELP, show_default=False),
) -> None:
    """Print the example value synthesized for a named schema.

    Example::

        opscatalog inspect sample CreateAdminRequest
    """
    document, options = _load(input)

    node = document.schema_table.get(schema_name)
    if node is None:
        error(f"Schema not found: {schema_name}")
        if document.schema_table:
            info(f"Available schemas: {', '.join(sorted(document.schema_table))}")
        raise typer.Exit(code=InvalidUsageError.exit_code)

    sample = synthesize_sample(node, document.schema_table, max_depth=options.max_depth)
    print_json(sample)
