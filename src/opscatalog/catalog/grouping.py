"""Group catalog operations into tag-derived domains.

Operations sharing the exact same tag string land in one
:class:`~opscatalog.models.Domain`. Ordering is fully deterministic:

* operations inside a domain by ``(path, method)``,
* domains by ``label``, then by ``tag`` for domains whose labels coincide
  (e.g. ``"Users"`` and ``"AdminUsers"``).

All comparisons are plain code-point comparisons, independent of locale.
"""

from __future__ import annotations

from opscatalog.catalog.naming import humanize_tag, slugify
from opscatalog.models import CatalogOperation, Domain


def group_operations(operations: list[CatalogOperation]) -> list[Domain]:
    """Bucket *operations* by tag and sort the result.

    Args:
        operations: Flat operation list, as returned by
            :func:`~opscatalog.catalog.extractor.extract_operations`.

    Returns:
        Domains sorted by label, each with its operations sorted by path
        then method.
    """
    by_tag: dict[str, list[CatalogOperation]] = {}
    for op in operations:
        by_tag.setdefault(op.tag, []).append(op)

    domains = [
        Domain(
            key=slugify(tag),
            tag=tag,
            label=humanize_tag(tag),
            operations=sorted(ops, key=lambda o: (o.path, o.method)),
        )
        for tag, ops in by_tag.items()
    ]
    domains.sort(key=lambda d: (d.label, d.tag))
    return domains


def duplicate_operation_keys(domains: list[Domain]) -> dict[str, int]:
    """Return operation keys that occur more than once, with their counts.

    Key collisions are kept in the catalog as-is; this helper only lets
    callers report them.
    """
    counts: dict[str, int] = {}
    for domain in domains:
        for op in domain.operations:
            counts[op.key] = counts.get(op.key, 0) + 1
    return {key: count for key, count in sorted(counts.items()) if count > 1}
