"""Public interface for the package reservation helper."""

from .config import RESERVED_VERSION, ReserveConfig, load_config
from .environment import load_env_file, require_env
from .errors import (
    ConfigError,
    PublishError,
    ReserveError,
    StagingError,
    ValidationError,
)
from .manifest import finalize_manifest
from .pipeline import ReservationResult, reserve
from .pruning import PruneList, load_prune_list, prune_workspace
from .publishing import (
    FailureKind,
    PublishOutcome,
    RegistryPublisher,
    classify_failure,
)
from .recording import record_reservation
from .request import ReservationRequest, resolve_request, validate_package_name
from .substitution import build_replacements, substitute_placeholders
from .workspace import StagedWorkspace, stage_workspace

__all__ = [
    "build_replacements",
    "classify_failure",
    "ConfigError",
    "FailureKind",
    "finalize_manifest",
    "load_config",
    "load_env_file",
    "load_prune_list",
    "prune_workspace",
    "PruneList",
    "PublishError",
    "PublishOutcome",
    "record_reservation",
    "RegistryPublisher",
    "require_env",
    "reserve",
    "RESERVED_VERSION",
    "ReservationRequest",
    "ReservationResult",
    "ReserveConfig",
    "ReserveError",
    "resolve_request",
    "stage_workspace",
    "StagedWorkspace",
    "StagingError",
    "substitute_placeholders",
    "validate_package_name",
    "ValidationError",
]
