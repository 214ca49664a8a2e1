"""Tests for forcing reservation metadata into the staged manifest."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from reserve_common import RESERVED_VERSION, ReservationRequest, finalize_manifest

REQUEST = ReservationRequest("valid-name", "octocat")


def test_finalize_overwrites_identity_fields(project: Path) -> None:
    """Name, author and version are forced regardless of substitution."""
    assert finalize_manifest(project, REQUEST) is True

    manifest = json.loads((project / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "valid-name"
    assert manifest["author"] == "octocat"
    assert manifest["version"] == RESERVED_VERSION == "0.0.0-reserved"
    assert manifest["main"] == "index.js", "unrelated fields must be preserved"


def test_finalize_corrects_mismatched_placeholders(tmp_path: Path) -> None:
    """Manifests using other token spellings still end up correct."""
    (tmp_path / "package.json").write_text(
        '{"name": "{{name}}", "author": {"name": "someone"}}', encoding="utf-8"
    )

    finalize_manifest(tmp_path, REQUEST, version="9.9.9-hold")

    manifest = json.loads((tmp_path / "package.json").read_text(encoding="utf-8"))
    assert manifest == {
        "name": "valid-name",
        "author": "octocat",
        "version": "9.9.9-hold",
    }


def test_finalize_is_idempotent(project: Path) -> None:
    """Running the finalizer twice yields identical content."""
    finalize_manifest(project, REQUEST)
    first = (project / "package.json").read_bytes()
    finalize_manifest(project, REQUEST)
    assert (project / "package.json").read_bytes() == first


def test_finalize_writes_two_space_json(project: Path) -> None:
    """The manifest is serialised with two-space indentation and key order kept."""
    finalize_manifest(project, REQUEST)
    text = (project / "package.json").read_text(encoding="utf-8")
    assert text.startswith('{\n  "name": "valid-name",\n  "version"')


def test_finalize_missing_manifest_is_noop(tmp_path: Path) -> None:
    """Without a manifest nothing is created."""
    assert finalize_manifest(tmp_path, REQUEST) is False
    assert not (tmp_path / "package.json").exists()


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_finalize_unparseable_manifest_is_noop(tmp_path: Path, content: str) -> None:
    """Broken manifests are left for the publish step to reject."""
    manifest = tmp_path / "package.json"
    manifest.write_text(content, encoding="utf-8")

    assert finalize_manifest(tmp_path, REQUEST) is False
    assert manifest.read_text(encoding="utf-8") == content
