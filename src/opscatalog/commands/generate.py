"""Generate command -- build the API Explorer catalog.

``opscatalog generate`` resolves the generator options, loads the OpenAPI
document, and writes the catalog. With ``--stdout`` the catalog is printed
instead of written, which is handy for diffing against the committed file.

Nothing is written when the input cannot be loaded; the command exits with
the error's exit code (7 for a broken document, 8 for an unwritable output).
"""

from __future__ import annotations

from typing import Optional

import typer

from opscatalog.catalog import duplicate_operation_keys, dump_catalog, generate_catalog
from opscatalog.config import resolve_options, save_project_config
from opscatalog.exceptions import CatalogError
from opscatalog.output import debug, error, info, print_data, success, warning


def generate_command(
    input: Optional[str] = typer.Argument(
        None,
        help="OpenAPI document (JSON or YAML), or '-' for stdin. "
        "Defaults to docs/admin-openapi.json.",
        show_default=False,
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Catalog destination path."
    ),
    strip_prefix: Optional[str] = typer.Option(
        None, "--strip-prefix", help="API-root prefix removed from every path."
    ),
    default_tag: Optional[str] = typer.Option(
        None, "--default-tag", help="Tag for operations that declare none."
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", min=1, help="Depth ceiling for sample synthesis."
    ),
    to_stdout: bool = typer.Option(
        False, "--stdout", help="Print the catalog instead of writing it."
    ),
    save_config: bool = typer.Option(
        False,
        "--save-config",
        help="Store the resolved options in ./opscatalog.json for later runs.",
    ),
) -> None:
    """Generate the operation catalog from an OpenAPI document.

    Example::

        opscatalog generate
        opscatalog generate api.yaml -o public/ops.json --strip-prefix /api/v1
        opscatalog generate api.yaml --strip-prefix /api/v1 --save-config
    """
    try:
        options = resolve_options(
            cli_input=input,
            cli_output=output,
            cli_strip_prefix=strip_prefix,
            cli_default_tag=default_tag,
            cli_max_depth=max_depth,
        )
        debug(f"Loading API document from {options.input}")
        catalog = generate_catalog(options, write=not to_stdout)
        if save_config:
            info(f"Saved options to {save_project_config(options)}")
    except CatalogError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    duplicates = duplicate_operation_keys(catalog.domains)
    if duplicates:
        listed = ", ".join(f"{key} (x{count})" for key, count in duplicates.items())
        warning(f"Duplicate operation keys: {listed}")

    if to_stdout:
        print_data(dump_catalog(catalog).rstrip("\n"))
        return

    debug(f"{catalog.operation_count()} operations in {len(catalog.domains)} domains")
    success(f"Wrote {len(catalog.domains)} domains to {options.output}")
