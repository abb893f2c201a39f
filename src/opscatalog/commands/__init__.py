"""Built-in CLI sub-commands for opscatalog.

This package groups the Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~opscatalog.commands.generate` -- build and write the catalog.
* :mod:`~opscatalog.commands.inspect` -- preview domains, operations and
  schema samples without writing anything.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``inspect``) or a plain callback function
registered directly on the root app (for single commands like
``generate``).
"""
