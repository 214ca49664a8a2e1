"""Remove non-publishable paths from the staged workspace."""

from __future__ import annotations

import dataclasses
import logging
import re
import shutil
import typing as typ
from pathlib import Path

from .config import DEFAULT_PRUNE_ENTRIES

__all__ = [
    "PruneList",
    "is_glob_pattern",
    "load_prune_list",
    "parse_ignore_lines",
    "prune_workspace",
]

LOGGER = logging.getLogger(__name__)

_GLOB_CHARS = re.compile(r"[*?\[\]]")


@dataclasses.dataclass(slots=True, frozen=True)
class PruneList:
    """Literal entries to delete, with the file they were read from."""

    entries: tuple[str, ...]
    source: Path | None = None

    @property
    def from_defaults(self) -> bool:
        """Whether the built-in defaults were used."""
        return self.source is None


def is_glob_pattern(entry: str) -> bool:
    """Return ``True`` when ``entry`` contains ``*``, ``?``, ``[`` or ``]``.

    Examples
    --------
    >>> is_glob_pattern("*.test.js")
    True
    >>> is_glob_pattern("README.md")
    False
    """
    return _GLOB_CHARS.search(entry) is not None


def parse_ignore_lines(text: str) -> tuple[str, ...]:
    """Return de-duplicated entries from ignore-list ``text``.

    Blank lines, ``#`` comments and ``!`` negations are dropped and trailing
    slashes are stripped. First occurrence order is kept.

    Examples
    --------
    >>> parse_ignore_lines("dist/\\n# note\\n!keep\\n\\ndist\\nREADME.md\\n")
    ('dist', 'README.md')
    """
    entries: dict[str, None] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(("#", "!")):
            continue
        entries.setdefault(line.rstrip("/"), None)
    return tuple(entries)


def load_prune_list(
    ignore_file: Path, *, defaults: typ.Iterable[str] = DEFAULT_PRUNE_ENTRIES
) -> PruneList:
    """Read ``ignore_file`` once, falling back to ``defaults``.

    The defaults apply when the file is absent, unreadable or yields no
    entries.
    """
    try:
        text = ignore_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        return PruneList(tuple(defaults))
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.debug("Could not read %s (%s); using defaults", ignore_file, exc)
        return PruneList(tuple(defaults))

    if entries := parse_ignore_lines(text):
        return PruneList(entries, source=ignore_file)
    return PruneList(tuple(defaults))


def _resolve_entry(root: Path, entry: str) -> Path | None:
    target = (root / entry.lstrip("/")).resolve()
    if target == root or not target.is_relative_to(root):
        return None
    return target


def prune_workspace(root: Path, prune_list: PruneList) -> list[Path]:
    """Delete every literal entry of ``prune_list`` found beneath ``root``.

    Glob patterns are skipped without matching anything, as are entries that
    would resolve to ``root`` itself or outside it. Missing paths are ignored.

    Returns
    -------
    list[Path]
        Paths that were removed.
    """
    staging_root = root.resolve()
    removed: list[Path] = []
    for entry in prune_list.entries:
        if is_glob_pattern(entry):
            LOGGER.debug("Skipping glob pattern %r", entry)
            continue
        target = _resolve_entry(staging_root, entry)
        if target is None:
            LOGGER.debug("Skipping entry %r outside the staged workspace", entry)
            continue
        if target.is_dir():
            shutil.rmtree(target)
        elif target.exists():
            target.unlink()
        else:
            continue
        removed.append(target)

    origin = prune_list.source.name if prune_list.source else "defaults"
    LOGGER.info(
        "Removed %d path(s) from temporary package according to %s.",
        len(removed),
        origin,
    )
    return removed
