"""Slugs and human-readable labels for catalog keys.

* :func:`slugify` -- lowercase, hyphen-separated keys for operations and
  domains. Never returns an empty string.
* :func:`humanize_tag` -- turns OpenAPI tags such as ``"KycJobController"``
  into sidebar labels such as ``"Kyc Job"``.
"""

from __future__ import annotations

import re

FALLBACK_SLUG = "misc"
FALLBACK_LABEL = "Misc"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")
_TRAILING_CONTROLLER_RE = re.compile(r"(?<![a-z])Controller$")
_LEADING_ADMIN_RE = re.compile(r"^Admin(?![a-z])")
_WHITESPACE_RE = re.compile(r"\s+")


def slugify(text: str) -> str:
    """Convert *text* to a lowercase, hyphen-separated slug.

    Every run of characters outside ``[a-z0-9]`` (after lower-casing)
    becomes a single hyphen, and hyphens at either end are trimmed.

    Example::

        slugify("put-/admins/id")  # "put-admins-id"
        slugify("?!/")             # "misc"
    """
    slug = _NON_ALNUM_RE.sub("-", text.lower()).strip("-")
    return slug or FALLBACK_SLUG


def humanize_tag(tag: str) -> str:
    """Convert an OpenAPI tag into a display label.

    The steps run in a fixed order:

    1. split camel case at lowercase-to-uppercase boundaries,
    2. drop a trailing ``Controller`` word,
    3. drop a leading ``Admin`` word (``"Admins"`` is left alone),
    4. turn underscores into spaces,
    5. collapse whitespace and trim.

    An empty result becomes ``"Misc"``.

    Example::

        humanize_tag("KycJobController")  # "Kyc Job"
        humanize_tag("AdminFeatureFlags") # "Feature Flags"
        humanize_tag("Admin")             # "Misc"
        humanize_tag("KYCController")     # "KYC"
    """
    label = _CAMEL_BOUNDARY_RE.sub(r"\1 \2", tag)
    label = _TRAILING_CONTROLLER_RE.sub("", label)
    label = _LEADING_ADMIN_RE.sub("", label)
    label = label.replace("_", " ")
    label = _WHITESPACE_RE.sub(" ", label).strip()
    return label or FALLBACK_LABEL
