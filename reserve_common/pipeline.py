"""Reservation run: stage, rewrite, prune, publish and record."""

from __future__ import annotations

import dataclasses
import logging
import typing as typ
from pathlib import Path

from .errors import PublishError, StagingError
from .manifest import finalize_manifest
from .pruning import load_prune_list, prune_workspace
from .publishing import (
    FailureKind,
    PublishOutcome,
    RegistryPublisher,
    classify_failure,
)
from .recording import record_reservation
from .substitution import build_replacements, substitute_placeholders
from .workspace import TEMP_PREFIX, stage_workspace

if typ.TYPE_CHECKING:
    from .config import ReserveConfig
    from .request import ReservationRequest

__all__ = ["ReservationResult", "publish_failure_message", "reserve"]

LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass(slots=True, frozen=True)
class ReservationResult:
    """Outcome of a successful :func:`reserve` call."""

    package_name: str
    version: str
    outcome: PublishOutcome
    recorded: bool
    rewritten: list[Path]
    pruned: list[Path]


def publish_failure_message(outcome: PublishOutcome, kind: FailureKind) -> str:
    """Describe a failed publish for the user.

    Examples
    --------
    >>> outcome = PublishOutcome(1, "", "boom")
    >>> publish_failure_message(outcome, FailureKind.OTHER)
    'npm publish failed with code 1'
    """
    if kind is FailureKind.NAME_CONFLICT:
        return (
            "Publish was rejected (name already used or too similar). "
            "This tool will not publish as a scoped package; "
            "choose a different package-name."
        )
    return f"npm publish failed with code {outcome.exit_code}"


def _prepare(
    root: Path, request: ReservationRequest, config: ReserveConfig
) -> tuple[list[Path], list[Path]]:
    LOGGER.info("Replacing placeholders in temporary copy...")
    rewritten = substitute_placeholders(root, build_replacements(request))
    finalize_manifest(root, request, version=config.version)
    prune_list = load_prune_list(config.ignore_path, defaults=config.default_prune)
    pruned = prune_workspace(root, prune_list)
    return rewritten, pruned


def reserve(
    request: ReservationRequest,
    config: ReserveConfig,
    *,
    publisher: RegistryPublisher | None = None,
    temp_prefix: str = TEMP_PREFIX,
) -> ReservationResult:
    """Publish a placeholder version of ``request.package_name``.

    The project at ``config.project_root`` is copied into a temporary
    directory and every mutation happens on that copy. The temporary
    directory is removed before this function returns or raises.

    Parameters
    ----------
    request : ReservationRequest
        Validated package name and username.
    config : ReserveConfig
        Run configuration including the registry token.
    publisher : RegistryPublisher, optional
        Publisher to use. Built from ``config`` when omitted.
    temp_prefix : str
        Prefix of the temporary directory name.

    Returns
    -------
    ReservationResult
        Details of the successful publish.

    Raises
    ------
    StagingError
        Raised when the workspace cannot be copied or rewritten.
    PublishError
        Raised when the publish command exits non-zero. No scoped retry is
        attempted.
    """
    if publisher is None:
        publisher = RegistryPublisher(
            token=config.token,
            registry=config.registry,
            npm_binary=config.npm_binary,
        )

    LOGGER.info("Creating temporary workspace...")
    with stage_workspace(config.project_root, prefix=temp_prefix) as workspace:
        try:
            rewritten, pruned = _prepare(workspace.root, request, config)
        except OSError as exc:
            message = f"Failed to prepare temporary workspace: {exc}"
            raise StagingError(message) from exc

        LOGGER.info(
            "Publishing %s@%s (temporary)...", request.package_name, config.version
        )
        try:
            outcome = publisher.publish(workspace.root)
        except OSError as exc:
            message = f"Failed to run {config.npm_binary}: {exc}"
            raise StagingError(message) from exc

        if not outcome.succeeded:
            kind = classify_failure(outcome)
            message = publish_failure_message(outcome, kind)
            raise PublishError(message, outcome=outcome, kind=kind)

        LOGGER.info(
            "Successfully published %s@%s", request.package_name, config.version
        )
        recorded = record_reservation(config.log_path, request.package_name)

    return ReservationResult(
        package_name=request.package_name,
        version=config.version,
        outcome=outcome,
        recorded=recorded,
        rewritten=rewritten,
        pruned=pruned,
    )
