"""Exception hierarchy for opscatalog.

All exceptions inherit from :class:`CatalogError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`opscatalog.exit_codes`.
The top-level error handler in :func:`opscatalog.app.main` catches
``CatalogError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    CatalogError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SpecParseError      (exit 7)
    +-- CatalogWriteError   (exit 8)
    +-- ConfigError         (exit 1)
"""

from opscatalog.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_WRITE_ERROR,
)


class CatalogError(Exception):
    """Base exception for all opscatalog errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`opscatalog.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(CatalogError):
    """Raised for invalid CLI arguments (e.g. an unknown schema or domain name)."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(CatalogError):
    """Raised when the OpenAPI document cannot be read, parsed, or has the wrong shape."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class CatalogWriteError(CatalogError):
    """Raised when the catalog document cannot be persisted."""

    exit_code = EXIT_WRITE_ERROR


class ConfigError(CatalogError):
    """Raised for configuration problems (invalid project config, bad option values)."""

    exit_code = EXIT_GENERIC_FAILURE
