"""Data models for a nuke run.

Pure data structures. No AWS or subprocess coupling.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from tf_s3_nuke.lib.errors import CleanupError, IterationError

# =============================================================================
# Run configuration
# =============================================================================


class TerminalStep(StrEnum):
    """The terraform command run after init."""

    PLAN_DESTROY = "plan-destroy"
    DESTROY_AUTO_APPROVE = "destroy-auto-approve"
    DESTROY = "destroy"

    @property
    def args(self) -> tuple[str, ...]:
        """Arguments passed to terraform for this step."""
        match self:
            case TerminalStep.PLAN_DESTROY:
                return ("plan", "-destroy")
            case TerminalStep.DESTROY_AUTO_APPROVE:
                return ("destroy", "-auto-approve")
            case TerminalStep.DESTROY:
                return ("destroy",)

    @classmethod
    def for_mode(cls, dry_run: bool, auto_approve: bool) -> TerminalStep:
        """Pick the step for the run mode. Dry run wins over auto approve."""
        if dry_run:
            return cls.PLAN_DESTROY
        if auto_approve:
            return cls.DESTROY_AUTO_APPROVE
        return cls.DESTROY


@dataclass(frozen=True)
class NukeConfig:
    """Everything a run needs besides the AWS context."""

    bucket: str
    region: str
    profile: str | None = None
    keys: tuple[str, ...] = ()
    patterns: tuple[re.Pattern[str], ...] = ()
    delete_state: bool = False
    auto_approve: bool = False
    dry_run: bool = False
    fail_fast: bool = False
    terraform_bin: str = "terraform"

    @property
    def terminal_step(self) -> TerminalStep:
        return TerminalStep.for_mode(self.dry_run, self.auto_approve)


# =============================================================================
# S3 listing
# =============================================================================


@dataclass(frozen=True, slots=True)
class ListingPage:
    """One list_objects_v2 response."""

    keys: tuple[str, ...]
    next_token: str | None = None
    truncated: bool = False

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> ListingPage:
        # Empty buckets have no Contents entry at all
        return cls(
            keys=tuple(obj["Key"] for obj in response.get("Contents", [])),
            next_token=response.get("NextContinuationToken"),
            truncated=response.get("IsTruncated", False),
        )


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True)
class KeyOutcome:
    """What happened to one state key."""

    key: str
    error: IterationError | None = None
    cleanup_error: CleanupError | None = None
    state_deleted: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.cleanup_error is None


@dataclass(frozen=True)
class RunReport:
    """Aggregated result of a run, in processing order."""

    keys: tuple[str, ...] = ()
    outcomes: tuple[KeyOutcome, ...] = ()
    aborted: bool = False

    @property
    def skipped(self) -> tuple[str, ...]:
        """Resolved keys never attempted because the run stopped early."""
        return self.keys[len(self.outcomes) :]

    @property
    def succeeded(self) -> tuple[str, ...]:
        return tuple(o.key for o in self.outcomes if o.ok)

    @property
    def failed(self) -> tuple[KeyOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.ok)

    @property
    def ok(self) -> bool:
        return not self.failed and not self.aborted

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


# =============================================================================
# Progress events
# =============================================================================


@dataclass(frozen=True, slots=True)
class KeyStarted:
    key: str
    dry_run: bool


@dataclass(frozen=True, slots=True)
class StateDeleted:
    key: str
    dry_run: bool


@dataclass(frozen=True, slots=True)
class KeySucceeded:
    key: str


@dataclass(frozen=True, slots=True)
class KeyFailed:
    key: str
    error: IterationError | CleanupError


type RunEvent = KeyStarted | StateDeleted | KeySucceeded | KeyFailed

