"""Catalog generator -- from an ApiDocument to the API Explorer catalog.

This sub-package is the second half of the opscatalog pipeline:

* :mod:`~opscatalog.catalog.sampler` -- depth-bounded example-value
  synthesis for request-body schemas.
* :mod:`~opscatalog.catalog.extractor` -- one
  :class:`~opscatalog.models.CatalogOperation` per path and method.
* :mod:`~opscatalog.catalog.naming` -- slugs and humanized tag labels.
* :mod:`~opscatalog.catalog.grouping` -- tag buckets sorted into
  :class:`~opscatalog.models.Domain` objects.
* :mod:`~opscatalog.catalog.serializer` -- catalog assembly and the atomic
  write of the output document.
"""

from opscatalog.catalog.extractor import extract_operations
from opscatalog.catalog.grouping import duplicate_operation_keys, group_operations
from opscatalog.catalog.naming import humanize_tag, slugify
from opscatalog.catalog.sampler import render_sample, synthesize_sample
from opscatalog.catalog.serializer import (
    build_catalog,
    dump_catalog,
    generate_catalog,
    write_catalog,
)

__all__ = [
    "extract_operations",
    "group_operations",
    "duplicate_operation_keys",
    "humanize_tag",
    "slugify",
    "render_sample",
    "synthesize_sample",
    "build_catalog",
    "dump_catalog",
    "generate_catalog",
    "write_catalog",
]
