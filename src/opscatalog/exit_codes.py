"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~opscatalog.exceptions.CatalogError` subclass.
Build scripts can inspect the exit code to tell a broken input document
apart from an unwritable output path without parsing stderr.

Example::

    $ opscatalog generate missing.json
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- the input could not be loaded
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be read, parsed, or validated."""

EXIT_WRITE_ERROR = 8
"""The catalog document could not be written to its destination."""
