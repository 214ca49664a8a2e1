"""Exception hierarchy shared by the reservation toolchain."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from .publishing import FailureKind, PublishOutcome

__all__ = [
    "ConfigError",
    "PublishError",
    "ReserveError",
    "StagingError",
    "ValidationError",
]


class ReserveError(RuntimeError):
    """Base class for failures that abort a reservation run."""


class ValidationError(ReserveError):
    """Raised when the requested package name or username is malformed."""


class ConfigError(ReserveError):
    """Raised when the secret token or configuration file is unusable."""


class StagingError(ReserveError):
    """Raised when the disposable workspace cannot be prepared."""


class PublishError(ReserveError):
    """Raised when ``npm publish`` exits with a non-zero status.

    Attributes
    ----------
    outcome : PublishOutcome
        Captured exit status and output of the publish command.
    kind : FailureKind
        Classification derived from the publish output.
    """

    def __init__(
        self, message: str, *, outcome: PublishOutcome, kind: FailureKind
    ) -> None:
        super().__init__(message)
        self.outcome = outcome
        self.kind = kind
