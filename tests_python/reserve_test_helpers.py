"""Shared helpers for the reservation test suites."""

from __future__ import annotations

import dataclasses
import json
import typing as typ
from pathlib import Path

from reserve_common import PublishOutcome

if typ.TYPE_CHECKING:
    from plumbum.commands.base import BoundCommand

__all__ = [
    "PNG_BYTES",
    "RecordingRunner",
    "snapshot_tree",
    "write_template_project",
]

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xfe<username>"


def write_template_project(root: Path) -> Path:
    """Populate ``root`` with a template package using placeholder tokens.

    Parameters
    ----------
    root : Path
        Directory that receives the template project.

    Returns
    -------
    Path
        The populated ``root``.
    """
    root.mkdir(parents=True, exist_ok=True)
    manifest = {
        "name": "<package-name>",
        "version": "1.0.0",
        "description": "Placeholder for <package-name>",
        "author": "<username>",
        "main": "index.js",
    }
    (root / "package.json").write_text(
        json.dumps(manifest, indent=2) + "\n", encoding="utf-8"
    )
    (root / "index.js").write_text(
        "module.exports = '<package-name> by <username>';\n", encoding="utf-8"
    )
    (root / "LICENSE").write_text("Copyright <username>\n", encoding="utf-8")
    (root / "README.md").write_text("# <package-name>\n", encoding="utf-8")
    (root / "notes.txt").write_text("nothing to replace\n", encoding="utf-8")
    (root / "logo.png").write_bytes(PNG_BYTES)

    lib = root / "lib"
    lib.mkdir(exist_ok=True)
    (lib / "util.js").write_text("// <package-name>\n", encoding="utf-8")
    (lib / "util.test.js").write_text("// test\n", encoding="utf-8")

    git = root / ".git"
    git.mkdir(exist_ok=True)
    (git / "HEAD").write_text("ref: refs/heads/<username>\n", encoding="utf-8")
    modules = root / "node_modules" / "dep"
    modules.mkdir(parents=True, exist_ok=True)
    (modules / "index.js").write_text("// <package-name>\n", encoding="utf-8")
    return root


def snapshot_tree(root: Path) -> dict[str, tuple[bytes, int]]:
    """Return file contents and modification times keyed by relative path."""
    return {
        path.relative_to(root).as_posix(): (path.read_bytes(), path.stat().st_mtime_ns)
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@dataclasses.dataclass
class RecordingRunner:
    """Stand-in for :func:`reserve_common.publishing.run_tee`.

    Records each invocation together with a view of the staged workspace at
    the moment the publish command would have run.
    """

    outcome: PublishOutcome = dataclasses.field(
        default_factory=lambda: PublishOutcome(0, "+ reserved\n", "")
    )
    calls: list[tuple[list[str], Path]] = dataclasses.field(default_factory=list)
    staged_files: set[str] = dataclasses.field(default_factory=set)
    npmrc: str | None = None
    manifest: dict[str, object] | None = None

    def __call__(self, command: BoundCommand, *, cwd: Path) -> PublishOutcome:
        self.calls.append((list(command.formulate()), cwd))
        self.staged_files = {
            path.relative_to(cwd).as_posix()
            for path in cwd.rglob("*")
            if path.is_file()
        }
        npmrc = cwd / ".npmrc"
        self.npmrc = npmrc.read_text(encoding="utf-8") if npmrc.exists() else None
        manifest = cwd / "package.json"
        if manifest.exists():
            self.manifest = json.loads(manifest.read_text(encoding="utf-8"))
        return self.outcome
