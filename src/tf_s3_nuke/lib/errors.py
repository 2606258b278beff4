"""Error types for terraform-s3-nuke.

All errors are frozen dataclasses returned inside Err - business logic does
not raise. The CLI layer pattern matches on them to print messages.
"""

from dataclasses import dataclass
from pathlib import Path

# =============================================================================
# Storage Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class SessionError:
    """AWS session or client could not be created (e.g. unknown profile)."""

    profile: str | None
    reason: str


@dataclass(frozen=True, slots=True)
class ListingError:
    """Listing objects in the state bucket failed."""

    bucket: str
    reason: str


@dataclass(frozen=True, slots=True)
class S3DeleteError:
    """Deleting an object from S3 failed."""

    bucket: str
    key: str
    reason: str


# =============================================================================
# Workspace Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class WorkspaceError:
    """Temporary workspace could not be created."""

    reason: str


@dataclass(frozen=True, slots=True)
class DescriptorWriteError:
    """Backend descriptor could not be written into the workspace."""

    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class CleanupError:
    """Temporary workspace could not be removed."""

    path: Path
    reason: str


# =============================================================================
# Terraform Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class InitError:
    """`terraform init` failed."""

    key: str
    reason: str


@dataclass(frozen=True, slots=True)
class DestroyError:
    """The terminal terraform step (plan -destroy or destroy) failed."""

    key: str
    step: str
    reason: str


# =============================================================================
# State Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class StatePruneError:
    """State file could not be deleted after destroy."""

    bucket: str
    key: str
    reason: str


# =============================================================================
# Type Aliases for Error Unions
# =============================================================================

type ExecutorError = InitError | DestroyError
type IterationError = WorkspaceError | DescriptorWriteError | ExecutorError | StatePruneError
