"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for opscatalog:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.opscatalog/`` on macOS and Windows. Only the data directory is used,
  for crash logs. See :func:`get_data_dir`.
* **Project config** -- An optional ``./opscatalog.json`` next to the
  dashboard sources pinning input/output paths and generator settings.
  Managed via :func:`load_project_config` and :func:`save_project_config`.
* **Precedence resolution** -- :func:`resolve_options` merges CLI flags,
  environment variables, project config, and defaults into the final
  :class:`~opscatalog.models.GeneratorOptions`.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) to prevent partial files on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from opscatalog.exceptions import ConfigError
from opscatalog.models import GeneratorOptions

_APP_NAME = "opscatalog"
_PROJECT_CONFIG_FILENAME = "opscatalog.json"

ENV_PREFIX = "OPSCATALOG_"
"""Environment variables ``OPSCATALOG_<FIELD>`` override project config."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/opscatalog/`` (default
    ``~/.local/share/opscatalog/``). On macOS/Windows: ``~/.opscatalog/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up and *path* is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        # Includes KeyboardInterrupt.
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Project-local config ---


def project_config_path() -> Path:
    """Path to ``./opscatalog.json`` in the current working directory."""
    return Path.cwd() / _PROJECT_CONFIG_FILENAME


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./opscatalog.json``.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = project_config_path()
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def save_project_config(options: GeneratorOptions) -> Path:
    """Persist *options* atomically as ``./opscatalog.json``.

    Returns:
        The path written to.
    """
    path = project_config_path()
    data = options.model_dump(mode="json")
    atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


# --- Precedence resolution ---


def _env_overrides() -> dict[str, str]:
    """Collect ``OPSCATALOG_*`` environment variables for known option fields."""
    overrides: dict[str, str] = {}
    for field in GeneratorOptions.model_fields:
        value = os.environ.get(f"{ENV_PREFIX}{field.upper()}")
        if value:
            overrides[field] = value
    return overrides


def resolve_options(
    cli_input: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_strip_prefix: Optional[str] = None,
    cli_default_tag: Optional[str] = None,
    cli_max_depth: Optional[int] = None,
) -> GeneratorOptions:
    """Resolve generator options with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_*`` arguments that are not ``None``)
        2. Environment variables (``OPSCATALOG_INPUT``, ``OPSCATALOG_MAX_DEPTH``...)
        3. Project config (``./opscatalog.json``)
        4. Defaults

    An empty ``--strip-prefix ""`` is a valid CLI value that disables
    prefix stripping.

    Returns:
        The validated :class:`~opscatalog.models.GeneratorOptions`.

    Raises:
        ConfigError: If the project config is invalid or a merged value fails
            validation (e.g. ``max_depth`` below 1 or not an integer).
    """
    merged: dict[str, Any] = {}

    project = load_project_config()
    if project is not None:
        merged.update(
            {k: v for k, v in project.items() if k in GeneratorOptions.model_fields}
        )

    merged.update(_env_overrides())

    cli = {
        "input": cli_input,
        "output": cli_output,
        "strip_prefix": cli_strip_prefix,
        "default_tag": cli_default_tag,
        "max_depth": cli_max_depth,
    }
    merged.update({k: v for k, v in cli.items() if v is not None})

    try:
        return GeneratorOptions.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid generator options: {exc}") from exc
