"""State operations - remove a state file once its resources are gone."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tf_s3_nuke.lib.errors import StatePruneError
from tf_s3_nuke.lib.result import Err, Ok, Result, map_err
from tf_s3_nuke.lib.storage.s3 import delete_object

if TYPE_CHECKING:
    from tf_s3_nuke.lib.aws import AwsContext


def prune_state(
    ctx: AwsContext, bucket: str, key: str, dry_run: bool = False
) -> Result[bool, StatePruneError]:
    """Delete the state object. Returns Ok(True) if it was deleted.

    In dry-run mode nothing is deleted, no client is created and Ok(False)
    is returned.
    """
    if dry_run:
        return Ok(False)

    match map_err(ctx.s3_client(), lambda e: StatePruneError(bucket, key, e.reason)):
        case Err() as e:
            return e
        case Ok(s3):
            pass

    result = map_err(
        delete_object(s3, bucket, key),
        lambda e: StatePruneError(e.bucket, e.key, e.reason),
    )
    match result:
        case Ok(_):
            return Ok(True)
        case _:
            return result
