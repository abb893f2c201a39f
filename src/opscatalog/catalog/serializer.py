"""Assemble the catalog document and persist it.

:func:`generate_catalog` is the whole pipeline in one call:

1. :func:`~opscatalog.parser.loader.load_document` reads the input. Any
   failure here raises before an output file is touched.
2. :func:`build_catalog` extracts operations and groups them into domains.
3. :func:`write_catalog` writes the JSON atomically (temp file + rename), so
   readers never observe a partially written catalog.

The generation timestamp is taken once per run and reused for both
``generatedAt`` and every ``date-time`` sample value.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from opscatalog.catalog.extractor import extract_operations
from opscatalog.catalog.grouping import group_operations
from opscatalog.catalog.sampler import utc_timestamp
from opscatalog.config import atomic_write
from opscatalog.exceptions import CatalogWriteError
from opscatalog.models import ApiDocument, CatalogDocument, GeneratorOptions
from opscatalog.parser.loader import load_document

logger = logging.getLogger(__name__)


def build_catalog(
    document: ApiDocument,
    options: Optional[GeneratorOptions] = None,
    now: Optional[datetime] = None,
) -> CatalogDocument:
    """Build the catalog for *document*.

    Args:
        document: The loaded input document.
        options: Generator settings; defaults apply when omitted.
        now: Generation time. Defaults to the current UTC time.

    Returns:
        The complete, sorted catalog.
    """
    generated_at = utc_timestamp(now)
    operations = extract_operations(document, options, timestamp=generated_at)
    domains = group_operations(operations)
    logger.debug("Grouped %d operations into %d domains", len(operations), len(domains))
    return CatalogDocument(generated_at=generated_at, domains=domains)


def dump_catalog(catalog: CatalogDocument) -> str:
    """Serialise *catalog* as pretty-printed camelCase JSON.

    ``sampleBody`` is omitted for operations without a JSON request body.
    """
    data = catalog.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_catalog(catalog: CatalogDocument, path: str | Path) -> Path:
    """Write *catalog* to *path* atomically.

    Returns:
        The path written to.

    Raises:
        CatalogWriteError: If the destination cannot be written. The
            previous file, if any, is left untouched.
    """
    target = Path(path)
    try:
        atomic_write(target, dump_catalog(catalog))
    except OSError as exc:
        raise CatalogWriteError(f"Failed to write catalog to {target}: {exc}") from exc
    return target


def generate_catalog(
    options: GeneratorOptions,
    now: Optional[datetime] = None,
    write: bool = True,
) -> CatalogDocument:
    """Load ``options.input``, build the catalog and write it to ``options.output``.

    Args:
        options: Resolved generator options.
        now: Generation time override.
        write: When ``False`` the catalog is only built and returned.

    Raises:
        SpecParseError: If the input cannot be loaded. Nothing is written.
        CatalogWriteError: If the output cannot be written.
    """
    document = load_document(options.input)
    catalog = build_catalog(document, options, now)
    if write:
        write_catalog(catalog, options.output)
    return catalog
