"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for schemacli:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.schemacli/`` on macOS and Windows.  See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- a single :class:`~schemacli.models.GlobalConfig`
  JSON file holding output preferences and user-level generation defaults.
* **Project config** -- ``./schemacli.json`` pins the spec, the inlining
  threshold, and the command-name prefix for one repository.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and global config into the
  effective :class:`~schemacli.models.ProjectConfig`.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from schemacli.exceptions import ConfigError
from schemacli.models import GlobalConfig, ProjectConfig

_APP_NAME = "schemacli"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "schemacli.json"

# Environment variable -> ProjectConfig field.
_ENV_OVERRIDES: dict[str, str] = {
    "SCHEMACLI_SPEC": "spec",
    "SCHEMACLI_MAX_INLINED_PARAMETERS": "max_inlined_parameters",
    "SCHEMACLI_NAME_PREFIX": "name_prefix",
}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
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

    On Linux/BSD: ``$XDG_CONFIG_HOME/schemacli/`` (default
    ``~/.config/schemacli/``).  On macOS/Windows: ``~/.schemacli/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/schemacli/`` (default
    ``~/.local/share/schemacli/``).  On macOS/Windows: ``~/.schemacli/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* through a sibling temp file and ``os.replace``.

    The temp file is removed again if anything fails before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp = tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
        encoding="utf-8",
    )
    try:
        with tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp.name, path)
    except BaseException:
        try:
            os.unlink(tmp.name)
        except OSError:
            pass
        raise


def _read_json(path: Path, label: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~schemacli.models.GlobalConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def project_config_path() -> Path:
    """Path of the project-local config file in the current directory."""
    return Path.cwd() / _PROJECT_CONFIG_FILENAME


def load_project_config() -> Optional[dict[str, Any]]:
    """Load the raw project-local configuration from ``./schemacli.json``.

    Only the keys present in the file participate in precedence resolution,
    so the raw dict is returned rather than a validated model.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = project_config_path()
    if not path.is_file():
        return None
    data = _read_json(path, "project config")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def save_project_config(values: dict[str, Any]) -> ProjectConfig:
    """Validate *values* and write them to ``./schemacli.json``.

    Args:
        values: Raw project settings (keys of :class:`ProjectConfig`).

    Returns:
        The validated configuration that was written.

    Raises:
        ConfigError: If a key is unknown or a value fails validation.
    """
    unknown = sorted(set(values) - set(ProjectConfig.model_fields))
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")
    try:
        config = ProjectConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid project config: {exc}") from exc
    data = config.model_dump(mode="json", include=set(values))
    _atomic_write(project_config_path(), json.dumps(data, indent=2) + "\n")
    return config


# --- Precedence resolution ---


def resolve_config(
    cli_spec: Optional[str] = None,
    cli_max_inlined: Optional[int] = None,
    cli_prefix: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> tuple[GlobalConfig, ProjectConfig]:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_spec``, ``cli_max_inlined``, ``cli_prefix``,
           ``cli_format``)
        2. Environment variables (``SCHEMACLI_SPEC``,
           ``SCHEMACLI_MAX_INLINED_PARAMETERS``, ``SCHEMACLI_NAME_PREFIX``)
        3. Project config (``./schemacli.json``)
        4. User config (``~/.config/schemacli/config.json``)
        5. Defaults

    Returns:
        A tuple of ``(global_config, project_config)``.

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    global_cfg = load_global_config()
    merged: dict[str, Any] = global_cfg.project.model_dump()

    project = load_project_config()
    if project is not None:
        merged.update(
            {k: v for k, v in project.items() if k in ProjectConfig.model_fields}
        )

    for env_var, field in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            merged[field] = value

    if cli_spec is not None:
        merged["spec"] = cli_spec
    if cli_max_inlined is not None:
        merged["max_inlined_parameters"] = cli_max_inlined
    if cli_prefix is not None:
        merged["name_prefix"] = cli_prefix

    try:
        resolved = ProjectConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    if cli_format is not None:
        global_cfg.output.format = cli_format

    return global_cfg, resolved


def resolve_output_format(cli_format: Optional[str] = None) -> str:
    """Effective output format: the ``--json``/``--plain`` flag, else the user config.

    The user config is only read when no flag was given.

    Raises:
        ConfigError: If the user config is invalid.
    """
    if cli_format is not None:
        return cli_format
    return load_global_config().output.format
