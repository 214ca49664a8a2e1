"""Invoke ``npm publish`` inside the staged workspace.

The publisher writes a throwaway ``.npmrc`` holding the registry token into
the staged root, runs the publish command there through :mod:`plumbum` and
tees its output to the caller's terminal while keeping a copy for
classification.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import re
import sys
import typing as typ

from plumbum import TEE
from plumbum import local as _default_local
from plumbum.commands import CommandNotFound

if typ.TYPE_CHECKING:
    from pathlib import Path

    from plumbum.commands.base import BoundCommand

__all__ = [
    "CREDENTIAL_FILE",
    "COMMAND_NOT_FOUND_EXIT_CODE",
    "FailureKind",
    "PublishOutcome",
    "RegistryPublisher",
    "classify_failure",
    "credential_line",
    "registry_url",
    "run_tee",
    "write_credentials",
]

LOGGER = logging.getLogger(__name__)

local = _default_local

CREDENTIAL_FILE = ".npmrc"
COMMAND_NOT_FOUND_EXIT_CODE = 127
PUBLISH_ARGS: tuple[str, ...] = ("publish", "--access", "public")

_NAME_REJECTED = re.compile(
    r"too similar|is already in use|403 Forbidden|E403|forbidden",
    re.IGNORECASE,
)


class FailureKind(enum.Enum):
    """Classification of a failed publish."""

    NAME_CONFLICT = "name-conflict"
    OTHER = "other"


@dataclasses.dataclass(slots=True, frozen=True)
class PublishOutcome:
    """Exit status and captured output of one publish invocation."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        """Whether the command exited with status ``0``."""
        return self.exit_code == 0

    @property
    def combined_output(self) -> str:
        """``stderr`` followed by ``stdout``."""
        return f"{self.stderr}\n{self.stdout}"


def classify_failure(outcome: PublishOutcome) -> FailureKind:
    """Return :attr:`FailureKind.NAME_CONFLICT` when the registry refused the name.

    Examples
    --------
    >>> classify_failure(PublishOutcome(1, "", "npm ERR! 403 Forbidden"))
    <FailureKind.NAME_CONFLICT: 'name-conflict'>
    >>> classify_failure(PublishOutcome(1, "", "npm ERR! network"))
    <FailureKind.OTHER: 'other'>
    """
    if _NAME_REJECTED.search(outcome.combined_output):
        return FailureKind.NAME_CONFLICT
    return FailureKind.OTHER


def _registry_host(registry: str) -> str:
    return registry.removeprefix("https://").removeprefix("http://").strip("/")


def registry_url(registry: str) -> str:
    """Return ``registry`` as the URL passed to ``npm --registry``.

    Examples
    --------
    >>> registry_url("registry.npmjs.org")
    'https://registry.npmjs.org/'
    >>> registry_url("http://localhost:4873")
    'http://localhost:4873/'
    """
    if registry.startswith("http://"):
        return f"http://{_registry_host(registry)}/"
    return f"https://{_registry_host(registry)}/"


def credential_line(token: str, registry: str) -> str:
    """Return the ``.npmrc`` auth line for ``registry``.

    Examples
    --------
    >>> credential_line("abc", "registry.npmjs.org")
    '//registry.npmjs.org/:_authToken=abc\\n'
    """
    return f"//{_registry_host(registry)}/:_authToken={token}\n"


def write_credentials(root: Path, token: str, *, registry: str) -> Path:
    """Write the auth-token file into ``root`` and return its path."""
    path = root / CREDENTIAL_FILE
    path.write_text(credential_line(token, registry), encoding="utf-8")
    return path


def run_tee(command: BoundCommand, *, cwd: Path) -> PublishOutcome:
    """Run ``command`` in ``cwd``, echoing and capturing both output streams.

    Parameters
    ----------
    command : BoundCommand
        Bound plumbum command to execute.
    cwd : Path
        Working directory for the child process.

    Returns
    -------
    PublishOutcome
        The exit status with everything the child wrote. Non-zero statuses are
        returned rather than raised and there is no timeout.
    """
    with local.cwd(cwd):
        exit_code, stdout, stderr = command & TEE(retcode=None)
    return PublishOutcome(exit_code, stdout, stderr)


Runner = typ.Callable[..., PublishOutcome]


class RegistryPublisher:
    """Publish a staged workspace with a token captured at construction.

    Parameters
    ----------
    token : str
        Registry auth token, read once at the start of the run.
    registry : str
        Registry host used for both the credential file and the publish
        command.
    npm_binary : str
        Name or path of the npm executable.
    runner : Callable
        Process runner with the signature of :func:`run_tee`.
    """

    def __init__(
        self,
        *,
        token: str,
        registry: str = "registry.npmjs.org",
        npm_binary: str = "npm",
        runner: Runner = run_tee,
    ) -> None:
        self._token = token
        self.registry = registry
        self.npm_binary = npm_binary
        self._runner = runner

    def __repr__(self) -> str:
        return (
            f"RegistryPublisher(registry={self.registry!r}, "
            f"npm_binary={self.npm_binary!r})"
        )

    def command(self) -> BoundCommand:
        """Return the bound publish command.

        Raises
        ------
        CommandNotFound
            Raised when ``npm_binary`` cannot be found on ``PATH``.
        """
        return local[self.npm_binary][
            (*PUBLISH_ARGS, "--registry", registry_url(self.registry))
        ]

    def publish(self, root: Path) -> PublishOutcome:
        """Write credentials into ``root`` and run the publish command there."""
        write_credentials(root, self._token, registry=self.registry)
        try:
            command = self.command()
        except CommandNotFound:
            message = f"{self.npm_binary}: command not found"
            print(message, file=sys.stderr)
            return PublishOutcome(COMMAND_NOT_FOUND_EXIT_CODE, "", message)
        LOGGER.debug("Running %s in %s", " ".join(PUBLISH_ARGS), root)
        return self._runner(command, cwd=root)
