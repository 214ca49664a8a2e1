"""Literal placeholder replacement across a staged workspace."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from .tree import TreeEntry, visit_tree

if typ.TYPE_CHECKING:
    from .request import ReservationRequest

__all__ = [
    "PACKAGE_NAME_TOKEN",
    "USERNAME_TOKEN",
    "build_replacements",
    "replace_in_text",
    "substitute_placeholders",
]

LOGGER = logging.getLogger(__name__)

USERNAME_TOKEN = "<username>"
PACKAGE_NAME_TOKEN = "<package-name>"


def build_replacements(request: ReservationRequest) -> dict[str, str]:
    """Return the ordered token map applied to every staged text file."""
    return {
        USERNAME_TOKEN: request.username,
        PACKAGE_NAME_TOKEN: request.package_name,
    }


def replace_in_text(
    content: str, replacements: typ.Mapping[str, str]
) -> tuple[str, bool]:
    """Apply ``replacements`` to ``content`` in mapping order.

    Each key is replaced literally and globally. A later key also sees text
    produced by earlier replacements, so keys must not overlap with values.

    Examples
    --------
    >>> replace_in_text("<a> and <a>", {"<a>": "b"})
    ('b and b', True)
    >>> replace_in_text("plain", {"<a>": "b"})
    ('plain', False)
    """
    changed = False
    for token, value in replacements.items():
        if token in content:
            content = content.replace(token, value)
            changed = True
    return content, changed


def substitute_placeholders(
    root: Path, replacements: typ.Mapping[str, str]
) -> list[Path]:
    """Rewrite every decodable file beneath ``root`` that contains a token.

    Files that are not valid UTF-8 are treated as binary and skipped. Files
    without any token are not written, so their modification time is kept.

    Returns
    -------
    list[Path]
        Files that were rewritten.
    """
    rewritten: list[Path] = []

    def _substitute(entry: TreeEntry) -> None:
        if entry.is_dir:
            return
        raw = entry.path.read_bytes()
        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError:
            LOGGER.debug("Skipping binary file %s", entry.relative)
            return
        updated, changed = replace_in_text(content, replacements)
        if changed:
            entry.path.write_bytes(updated.encode("utf-8"))
            rewritten.append(entry.path)

    visit_tree(root, _substitute)
    LOGGER.debug("Rewrote %d file(s) under %s", len(rewritten), root)
    return rewritten
