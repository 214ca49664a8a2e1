"""Configuration model and loader for the reservation helper.

The loader merges built-in defaults with an optional ``reserve.toml`` found in
the project root and reads the registry token from the environment exactly
once per run.

Usage
-----
Load the configuration for the current project::

    from pathlib import Path
    from reserve_common.config import load_config

    config = load_config(Path("."))
    print(f"Publishing to {config.registry}")
"""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path

import tomllib

from .environment import load_env_file, require_env
from .errors import ConfigError

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_PRUNE_ENTRIES",
    "RESERVED_VERSION",
    "TOKEN_ENV_VAR",
    "ReserveConfig",
    "load_config",
]

CONFIG_FILE_NAME = "reserve.toml"
TOKEN_ENV_VAR = "NPM_TOKEN"
RESERVED_VERSION = "0.0.0-reserved"
DEFAULT_PRUNE_ENTRIES: tuple[str, ...] = (
    "README.md",
    "README-ja.md",
    "Readme.md",
    "readme.md",
    "README",
    "log.txt",
    "LICENSE",
    "LICENSE.md",
    ".env",
)

_STRING_KEYS = {"registry", "npm_binary", "log_file", "ignore_file"}
_LIST_KEYS = {"default_prune"}


@dataclasses.dataclass(slots=True, frozen=True)
class ReserveConfig:
    """Settings consumed by :func:`reserve_common.pipeline.reserve`.

    Parameters
    ----------
    project_root : Path
        Template project that is copied into the staged workspace. Only the
        ignore list and the reservation log are ever read from it directly.
    token : str
        Registry auth token. Excluded from ``repr`` so it never reaches logs.
    registry : str, default="registry.npmjs.org"
        Registry host written into the staged ``.npmrc``.
    npm_binary : str, default="npm"
        Executable invoked to publish.
    log_file : str, default="log.txt"
        Reservation log name relative to :attr:`project_root`.
    ignore_file : str, default=".npmignore"
        Ignore-list name relative to :attr:`project_root`.
    default_prune : tuple[str, ...]
        Entries pruned when no usable ignore list exists.
    version : str, default="0.0.0-reserved"
        Placeholder version forced into the staged manifest.

    Examples
    --------
    >>> config = ReserveConfig(project_root=Path("."), token="secret")
    >>> "secret" in repr(config)
    False
    """

    project_root: Path
    token: str = dataclasses.field(repr=False)
    registry: str = "registry.npmjs.org"
    npm_binary: str = "npm"
    log_file: str = "log.txt"
    ignore_file: str = ".npmignore"
    default_prune: tuple[str, ...] = DEFAULT_PRUNE_ENTRIES
    version: str = RESERVED_VERSION

    @property
    def log_path(self) -> Path:
        """Absolute path of the reservation log."""
        return self.project_root / self.log_file

    @property
    def ignore_path(self) -> Path:
        """Absolute path of the ignore-list file."""
        return self.project_root / self.ignore_file


def load_config(project_root: Path) -> ReserveConfig:
    """Build the run configuration for ``project_root``.

    Parameters
    ----------
    project_root : Path
        Directory holding the template project.

    Returns
    -------
    ReserveConfig
        Configuration with defaults overridden by ``reserve.toml``.

    Raises
    ------
    ConfigError
        Raised when :data:`TOKEN_ENV_VAR` is missing or ``reserve.toml``
        contains invalid entries.
    """
    project_root = Path(project_root)
    if not project_root.is_dir():
        message = f"Project directory not found at {project_root}"
        raise ConfigError(message)

    load_env_file(project_root)
    token = require_env(TOKEN_ENV_VAR)
    overrides = _load_overrides(project_root / CONFIG_FILE_NAME)
    return ReserveConfig(project_root=project_root, token=token, **overrides)


def _load_overrides(config_file: Path) -> dict[str, typ.Any]:
    if not config_file.is_file():
        return {}
    try:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        message = f"Invalid TOML in {config_file}: {exc}"
        raise ConfigError(message) from exc

    section = data.get("tool", {}).get("npm-reserve", {})
    if not isinstance(section, dict):
        message = f"[tool.npm-reserve] in {config_file} must be a table"
        raise ConfigError(message)
    return _validate_overrides(section, config_file)


def _validate_overrides(
    section: dict[str, typ.Any], config_file: Path
) -> dict[str, typ.Any]:
    if unknown := sorted(set(section) - _STRING_KEYS - _LIST_KEYS):
        joined = ", ".join(unknown)
        message = f"Unknown key(s) {joined} in [tool.npm-reserve] of {config_file}"
        raise ConfigError(message)

    overrides: dict[str, typ.Any] = {}
    for key, value in section.items():
        if key in _STRING_KEYS:
            if not isinstance(value, str) or not value:
                message = f"{key} must be a non-empty string in {config_file}"
                raise ConfigError(message)
            overrides[key] = value
            continue
        if not isinstance(value, list) or not all(
            isinstance(item, str) for item in value
        ):
            message = f"{key} must be a list of strings in {config_file}"
            raise ConfigError(message)
        overrides[key] = tuple(item for item in value if item)
    return overrides
