"""Tests for placeholder substitution inside the staged workspace."""

from __future__ import annotations

import os
from pathlib import Path

from reserve_test_helpers import PNG_BYTES

from reserve_common import (
    ReservationRequest,
    build_replacements,
    substitute_placeholders,
)
from reserve_common.substitution import replace_in_text


def test_build_replacements_maps_both_tokens() -> None:
    """The replacement map carries the username and package name."""
    replacements = build_replacements(ReservationRequest("valid-name", "octocat"))
    assert replacements == {"<username>": "octocat", "<package-name>": "valid-name"}


def test_replace_in_text_replaces_every_occurrence() -> None:
    """Replacement is global and literal."""
    content, changed = replace_in_text(
        "<package-name> <package-name> a.b", {"<package-name>": "x", "a.b": "c"}
    )
    assert changed is True
    assert content == "x x c"


def test_replace_in_text_is_not_regex_based() -> None:
    """Regex metacharacters in keys are matched literally."""
    content, changed = replace_in_text("axb", {"a.b": "c"})
    assert (content, changed) == ("axb", False)


def test_substitute_rewrites_matching_files(project: Path) -> None:
    """Every occurrence of each token is replaced in text files."""
    rewritten = substitute_placeholders(
        project, {"<username>": "octocat", "<package-name>": "valid-name"}
    )

    assert (project / "index.js").read_text(encoding="utf-8") == (
        "module.exports = 'valid-name by octocat';\n"
    )
    util = (project / "lib" / "util.js").read_text(encoding="utf-8")
    assert util == "// valid-name\n"
    assert project / "index.js" in rewritten
    assert project / "notes.txt" not in rewritten


def test_substitute_leaves_untouched_files_alone(project: Path) -> None:
    """Files without tokens keep their content and modification time."""
    notes = project / "notes.txt"
    os.utime(notes, ns=(1_000_000_000, 1_000_000_000))
    before = notes.stat().st_mtime_ns

    substitute_placeholders(project, {"<username>": "octocat"})

    assert notes.read_text(encoding="utf-8") == "nothing to replace\n"
    assert notes.stat().st_mtime_ns == before


def test_substitute_skips_binary_files(project: Path) -> None:
    """Undecodable files are treated as binary and never rewritten."""
    substitute_placeholders(project, {"<username>": "octocat"})
    assert (project / "logo.png").read_bytes() == PNG_BYTES


def test_substitute_skips_excluded_directories(project: Path) -> None:
    """``.git`` and ``node_modules`` content is left as-is."""
    substitute_placeholders(project, {"<username>": "octocat", "<package-name>": "x"})

    assert "<username>" in (project / ".git" / "HEAD").read_text(encoding="utf-8")
    assert "<package-name>" in (
        project / "node_modules" / "dep" / "index.js"
    ).read_text(encoding="utf-8")


def test_substitute_preserves_line_endings(tmp_path: Path) -> None:
    """CRLF line endings survive the rewrite unchanged."""
    target = tmp_path / "crlf.txt"
    target.write_bytes(b"<username>\r\nline\r\n")

    substitute_placeholders(tmp_path, {"<username>": "octocat"})

    assert target.read_bytes() == b"octocat\r\nline\r\n"
