"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for skillpack:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.skillpack/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~skillpack.models.PackagingConfig`
  JSON file storing packaging defaults.
* **Project config** -- An optional ``./skillpack.json`` with the same keys,
  letting a repository pin its own output directory or strictness.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and global config into the
  effective :class:`~skillpack.models.PackagingConfig`.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from skillpack.exceptions import ConfigError
from skillpack.models import PackagingConfig

logger = logging.getLogger(__name__)

_APP_NAME = "skillpack"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "skillpack.json"

ENV_OUTPUT_DIR = "SKILLPACK_OUTPUT_DIR"
ENV_FORCE = "SKILLPACK_FORCE"
ENV_STRICT = "SKILLPACK_STRICT"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/skillpack/`` (default ``~/.config/skillpack/``).
    On macOS/Windows: ``~/.skillpack/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/skillpack/`` (default ``~/.local/share/skillpack/``).
    On macOS/Windows: ``~/.skillpack/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up and the error propagates.
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
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> PackagingConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~skillpack.models.PackagingConfig`, or a
        default instance if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = global_config_path()
    if not path.is_file():
        return PackagingConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return PackagingConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}", path=path) from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read global config at {path}: {exc}", path=path) from exc


def save_global_config(config: PackagingConfig) -> None:
    """Persist the global configuration atomically to disk.

    Raises:
        ConfigError: If the file cannot be written.
    """
    path = global_config_path()
    data = config.model_dump(mode="json")
    try:
        _atomic_write(path, json.dumps(data, indent=2) + "\n")
    except OSError as exc:
        raise ConfigError(f"Cannot write global config at {path}: {exc}", path=path) from exc


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./skillpack.json``.

    Project-local config sits between global config and environment
    variables in the precedence chain.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}", path=path) from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read project config at {path}: {exc}", path=path) from exc
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid project config at {path}: expected a JSON object", path=path
        )
    return data


# --- Environment ---


def parse_bool(value: str, source: str) -> bool:
    """Interpret a boolean from an env var or ``config set`` argument.

    Raises:
        ConfigError: If *value* is not one of the accepted spellings.
    """
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(
        f"Invalid boolean for {source}: {value!r} (expected one of: "
        f"{', '.join(v for v in _TRUE_VALUES + _FALSE_VALUES if v)})"
    )


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    output_dir = os.environ.get(ENV_OUTPUT_DIR)
    if output_dir:
        overrides["output_dir"] = output_dir
    force = os.environ.get(ENV_FORCE)
    if force is not None:
        overrides["force"] = parse_bool(force, ENV_FORCE)
    strict = os.environ.get(ENV_STRICT)
    if strict is not None:
        overrides["allow_unknown_fields"] = not parse_bool(strict, ENV_STRICT)
    return overrides


# --- Precedence resolution ---


def resolve_config(
    cli_output_dir: Optional[str] = None,
    cli_force: Optional[bool] = None,
    cli_strict: Optional[bool] = None,
) -> PackagingConfig:
    """Resolve packaging defaults with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_output_dir``, ``cli_force``, ``cli_strict``)
        2. Environment variables (``SKILLPACK_OUTPUT_DIR``,
           ``SKILLPACK_FORCE``, ``SKILLPACK_STRICT``)
        3. Project config (``./skillpack.json``)
        4. User config (``~/.config/skillpack/config.json``)
        5. Defaults

    A CLI flag of ``None`` means "not given"; ``--force`` and ``--strict``
    can only switch their setting on.

    Raises:
        ConfigError: If any layer holds invalid values.
    """
    # 5 + 4. Global config fills in defaults automatically
    merged = load_global_config().model_dump()

    # 3. Project-local config
    project = load_project_config()
    if project is not None:
        merged.update(project)

    # 2. Environment variables
    merged.update(_env_overrides())

    # 1. CLI flags
    if cli_output_dir is not None:
        merged["output_dir"] = cli_output_dir
    if cli_force:
        merged["force"] = True
    if cli_strict:
        merged["allow_unknown_fields"] = False

    try:
        config = PackagingConfig.model_validate(merged)
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    logger.debug("Resolved config: %s", config.model_dump())
    return config
