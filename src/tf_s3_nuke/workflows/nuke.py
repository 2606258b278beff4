"""Nuke workflow - destroy every deployment whose state key was selected."""

import logging
from collections.abc import Callable
from pathlib import Path

from tf_s3_nuke.lib.aws import AwsContext
from tf_s3_nuke.lib.backend import write_descriptor
from tf_s3_nuke.lib.errors import IterationError, ListingError
from tf_s3_nuke.lib.result import Err, Ok, Result
from tf_s3_nuke.lib.terraform import TerraformRunner
from tf_s3_nuke.lib.workspace import Workspace, acquire
from tf_s3_nuke.models import (
    KeyFailed,
    KeyOutcome,
    KeyStarted,
    KeySucceeded,
    NukeConfig,
    RunEvent,
    RunReport,
    StateDeleted,
)
from tf_s3_nuke.operations.destroy import destroy_deployment
from tf_s3_nuke.operations.keys import resolve_keys
from tf_s3_nuke.operations.state import prune_state

type EventHandler = Callable[[RunEvent], None]

logger = logging.getLogger(__name__)


def _ignore(event: RunEvent) -> None:
    pass


def _destroy_in(
    ctx: AwsContext, config: NukeConfig, key: str, workdir: Path, emit: EventHandler
) -> Result[bool, IterationError]:
    """Steps that run inside an acquired workspace.

    Returns Ok(True) if the state file was deleted.
    """
    match write_descriptor(workdir, config.region, config.bucket, key):
        case Err() as e:
            return e
        case Ok(_):
            pass

    runner = TerraformRunner(workdir, profile=config.profile, terraform_bin=config.terraform_bin)
    match destroy_deployment(runner, key, config.terminal_step):
        case Err() as e:
            return e
        case Ok(_):
            pass

    if not config.delete_state:
        return Ok(False)

    match prune_state(ctx, config.bucket, key, dry_run=config.dry_run):
        case Err() as e:
            return e
        case Ok(deleted):
            emit(StateDeleted(key, dry_run=config.dry_run))
            return Ok(deleted)


def destroy_key(
    ctx: AwsContext, config: NukeConfig, key: str, on_event: EventHandler | None = None
) -> KeyOutcome:
    """Destroy one deployment in its own workspace.

    1. Create workspace
    2. Write main.tf.json
    3. terraform init + plan -destroy / destroy
    4. Delete state file (if requested)
    5. Remove workspace (always, once acquired)
    """
    emit = on_event or _ignore
    emit(KeyStarted(key, dry_run=config.dry_run))

    match acquire():
        case Err(error):
            emit(KeyFailed(key, error))
            return KeyOutcome(key, error=error)
        case Ok(workdir):
            pass

    with Workspace(workdir) as ws:
        result = _destroy_in(ctx, config, key, workdir, emit)

    match result:
        case Err(error):
            outcome = KeyOutcome(key, error=error, cleanup_error=ws.cleanup_error)
        case Ok(deleted):
            outcome = KeyOutcome(key, cleanup_error=ws.cleanup_error, state_deleted=deleted)

    if outcome.error:
        emit(KeyFailed(key, outcome.error))
    if outcome.cleanup_error:
        emit(KeyFailed(key, outcome.cleanup_error))
    if outcome.ok:
        emit(KeySucceeded(key))
    return outcome


def nuke(
    ctx: AwsContext, config: NukeConfig, on_event: EventHandler | None = None
) -> Result[RunReport, ListingError]:
    """Destroy every deployment selected by config.keys and config.patterns.

    Keys are processed one at a time. A failed key does not stop the run
    unless config.fail_fast is set; a workspace that cannot be removed
    always stops it.
    """
    match resolve_keys(ctx, config.bucket, config.keys, config.patterns):
        case Err() as e:
            return e
        case Ok(keys):
            pass

    logger.debug("Resolved %d state keys in s3://%s", len(keys), config.bucket)

    outcomes: list[KeyOutcome] = []
    for index, key in enumerate(keys):
        outcome = destroy_key(ctx, config, key, on_event)
        outcomes.append(outcome)

        remaining = len(keys) - index - 1
        if remaining and (outcome.cleanup_error or (config.fail_fast and not outcome.ok)):
            logger.warning("Stopping after %s, %d keys not attempted", key, remaining)
            return Ok(RunReport(keys, tuple(outcomes), aborted=True))

    return Ok(RunReport(keys, tuple(outcomes)))
