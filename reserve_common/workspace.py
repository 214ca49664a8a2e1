"""Disposable workspace that receives a copy of the template project."""

from __future__ import annotations

import dataclasses
import logging
import shutil
import tempfile
import typing as typ
from pathlib import Path

from .errors import StagingError
from .tree import SKIPPED_DIRECTORIES, TreeEntry, visit_tree

if typ.TYPE_CHECKING:
    from types import TracebackType

__all__ = ["TEMP_PREFIX", "StagedWorkspace", "copy_tree", "stage_workspace"]

LOGGER = logging.getLogger(__name__)

TEMP_PREFIX = "reserve-npm-"


@dataclasses.dataclass(slots=True)
class StagedWorkspace:
    """Temporary copy of a project owned exclusively by one run.

    Attributes
    ----------
    temp_root : Path
        Uniquely named directory allocated by :func:`tempfile.mkdtemp`.
    root : Path
        Copy of the project, nested under :attr:`temp_root` using the
        project's directory name.
    """

    temp_root: Path
    root: Path

    def cleanup(self) -> bool:
        """Remove :attr:`temp_root`; failures are logged rather than raised."""
        try:
            shutil.rmtree(self.temp_root)
        except FileNotFoundError:
            return True
        except OSError as exc:
            LOGGER.warning(
                "Warning: failed to remove temporary workspace %s - %s",
                self.temp_root,
                exc,
            )
            return False
        LOGGER.debug("Removed temporary workspace %s", self.temp_root)
        return True

    def __enter__(self) -> StagedWorkspace:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.cleanup()


def copy_tree(
    source: Path,
    destination: Path,
    *,
    skip: typ.Collection[str] = SKIPPED_DIRECTORIES,
) -> int:
    """Copy regular files and directories from ``source`` into ``destination``.

    Returns the number of entries copied. ``source`` is only ever read.
    """
    destination.mkdir(parents=True, exist_ok=True)

    def _copy(entry: TreeEntry) -> None:
        target = destination / entry.relative
        if entry.is_dir:
            target.mkdir(exist_ok=True)
        else:
            shutil.copy2(entry.path, target)

    return visit_tree(source, _copy, skip=skip)


def stage_workspace(source: Path, *, prefix: str = TEMP_PREFIX) -> StagedWorkspace:
    """Copy ``source`` into a freshly allocated temporary directory.

    Parameters
    ----------
    source : Path
        Project directory to duplicate.
    prefix : str
        Prefix for the temporary directory name.

    Returns
    -------
    StagedWorkspace
        Handle to the copy. Use it as a context manager so the temporary
        directory is removed on every exit path.

    Raises
    ------
    StagingError
        Raised when any part of the copy fails. The partial copy is removed
        before the error propagates.
    """
    source = Path(source).resolve()
    if not source.is_dir():
        message = f"Project directory not found at {source}"
        raise StagingError(message)

    temp_root = Path(tempfile.mkdtemp(prefix=prefix))
    workspace = StagedWorkspace(temp_root=temp_root, root=temp_root / source.name)
    try:
        copied = copy_tree(source, workspace.root)
    except OSError as exc:
        workspace.cleanup()
        message = f"Failed to stage {source} into {workspace.root}: {exc}"
        raise StagingError(message) from exc
    LOGGER.debug("Copied %d entries into %s", copied, workspace.root)
    return workspace
