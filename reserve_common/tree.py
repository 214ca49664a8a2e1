"""Directory traversal shared by the staging, substitution and copy steps."""

from __future__ import annotations

import dataclasses
import os
import typing as typ
from pathlib import Path

__all__ = ["SKIPPED_DIRECTORIES", "TreeEntry", "visit_tree", "walk_tree"]

SKIPPED_DIRECTORIES: frozenset[str] = frozenset({".git", "node_modules"})


@dataclasses.dataclass(slots=True, frozen=True)
class TreeEntry:
    """A regular file or directory found beneath a walk root."""

    path: Path
    relative: Path
    is_dir: bool


def walk_tree(
    root: Path, *, skip: typ.Collection[str] = SKIPPED_DIRECTORIES
) -> typ.Iterator[TreeEntry]:
    """Yield entries beneath ``root`` depth-first, parents before children.

    Entries whose name appears in ``skip`` are pruned at any depth. Symlinks
    are never followed and neither they nor special files are yielded.

    Examples
    --------
    >>> [e.relative.as_posix() for e in walk_tree(Path("pkg"))]  # doctest: +SKIP
    ['index.js', 'lib', 'lib/util.js']
    """
    yield from _walk(root, Path(), skip)


def _walk(
    directory: Path, relative: Path, skip: typ.Collection[str]
) -> typ.Iterator[TreeEntry]:
    with os.scandir(directory) as iterator:
        entries = sorted(iterator, key=lambda item: item.name)
    for item in entries:
        if item.name in skip:
            continue
        child = relative / item.name
        if item.is_dir(follow_symlinks=False):
            yield TreeEntry(Path(item.path), child, is_dir=True)
            yield from _walk(Path(item.path), child, skip)
        elif item.is_file(follow_symlinks=False):
            yield TreeEntry(Path(item.path), child, is_dir=False)


def visit_tree(
    root: Path,
    visitor: typ.Callable[[TreeEntry], None],
    *,
    skip: typ.Collection[str] = SKIPPED_DIRECTORIES,
) -> int:
    """Call ``visitor`` for every entry of :func:`walk_tree` and return the count."""
    count = 0
    for entry in walk_tree(root, skip=skip):
        visitor(entry)
        count += 1
    return count
