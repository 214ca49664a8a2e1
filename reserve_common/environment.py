"""Environment helpers shared by the reservation toolchain."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigError

__all__ = ["load_env_file", "require_env"]


def load_env_file(project_root: Path, name: str = ".env") -> bool:
    """Load ``name`` from ``project_root`` into ``os.environ`` when present.

    Variables already exported by the caller take precedence over the file.
    Returns ``True`` when a file was found and loaded.
    """
    env_file = project_root / name
    if not env_file.is_file():
        return False
    return load_dotenv(env_file, override=False)


def require_env(name: str) -> str:
    """Return the value of ``name`` or raise :class:`ConfigError`.

    Parameters
    ----------
    name:
        Name of the environment variable to fetch.

    Raises
    ------
    ConfigError
        Raised when the environment variable is unset or empty.
    """
    value = os.environ.get(name)
    if not value:
        message = f"{name} environment variable is required."
        raise ConfigError(message)
    return value
