"""Force reservation metadata into the staged ``package.json``."""

from __future__ import annotations

import json
import logging
import typing as typ
from pathlib import Path

from .config import RESERVED_VERSION

if typ.TYPE_CHECKING:
    from .request import ReservationRequest

__all__ = ["MANIFEST_NAME", "finalize_manifest", "read_manifest"]

LOGGER = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


def read_manifest(path: Path) -> dict[str, typ.Any] | None:
    """Return the parsed manifest at ``path`` or ``None`` when unusable.

    Examples
    --------
    >>> read_manifest(Path("missing/package.json")) is None
    True
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        LOGGER.debug("Ignoring unreadable manifest %s: %s", path, exc)
        return None
    return data if isinstance(data, dict) else None


def finalize_manifest(
    root: Path, request: ReservationRequest, *, version: str = RESERVED_VERSION
) -> bool:
    """Overwrite ``name``, ``author`` and ``version`` in the staged manifest.

    Parameters
    ----------
    root : Path
        Staged workspace root.
    request : ReservationRequest
        Supplies the package name and author.
    version : str
        Placeholder version to publish.

    Returns
    -------
    bool
        ``True`` when the manifest was rewritten. A missing or unparseable
        manifest leaves the workspace untouched and returns ``False``; the
        publish step reports that condition instead.
    """
    path = root / MANIFEST_NAME
    manifest = read_manifest(path)
    if manifest is None:
        LOGGER.warning(
            "No usable %s in staged workspace; leaving it as-is", MANIFEST_NAME
        )
        return False

    manifest["name"] = request.package_name
    manifest["author"] = request.username
    manifest["version"] = version
    path.write_text(
        json.dumps(manifest, indent=2, ensure_ascii=False),
        encoding="utf-8",
        newline="\n",
    )
    return True
