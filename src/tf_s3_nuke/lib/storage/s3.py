"""S3 storage operations.

Low-level helpers that work with the S3 client.
Returns Result types for error handling.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from tf_s3_nuke.lib.errors import ListingError, S3DeleteError
from tf_s3_nuke.lib.result import Err, Ok, Result
from tf_s3_nuke.models import ListingPage

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


def list_page(
    s3: S3Client, bucket: str, continuation_token: str | None = None
) -> Result[ListingPage, ListingError]:
    """Fetch one page of object keys, starting at continuation_token."""
    kwargs: dict[str, Any] = {"Bucket": bucket}
    if continuation_token:
        kwargs["ContinuationToken"] = continuation_token

    try:
        response = s3.list_objects_v2(**kwargs)
    except ClientError as e:
        if e.response["Error"]["Code"] == "NoSuchBucket":
            return Err(ListingError(bucket, "Bucket not found"))
        return Err(ListingError(bucket, str(e)))
    except BotoCoreError as e:
        return Err(ListingError(bucket, str(e)))

    page = ListingPage.from_response(response)
    logger.debug(
        "Listed %d keys from s3://%s (next token: %s)", len(page.keys), bucket, page.next_token
    )
    return Ok(page)


def delete_object(s3: S3Client, bucket: str, key: str) -> Result[None, S3DeleteError]:
    """Delete object from S3."""
    try:
        s3.delete_object(Bucket=bucket, Key=key)
        return Ok(None)
    except (ClientError, BotoCoreError) as e:
        return Err(S3DeleteError(bucket, key, str(e)))
