"""Key resolution - turn --key/--pattern input into the keys to destroy."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from tf_s3_nuke.lib.errors import ListingError
from tf_s3_nuke.lib.result import Err, Ok, Result, map_err
from tf_s3_nuke.lib.storage.s3 import list_page

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

    from tf_s3_nuke.lib.aws import AwsContext


def matches_any(key: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    """True if any pattern matches anywhere in the key."""
    return any(pattern.search(key) for pattern in patterns)


def list_matching_keys(
    s3: S3Client, bucket: str, patterns: Sequence[re.Pattern[str]]
) -> Result[list[str], ListingError]:
    """List every key in the bucket matching at least one pattern.

    Follows continuation tokens until the last page. Keys keep listing order.
    """
    matched: list[str] = []
    token: str | None = None
    while True:
        match list_page(s3, bucket, token):
            case Err() as e:
                return e
            case Ok(page):
                matched.extend(k for k in page.keys if matches_any(k, patterns))
                if not page.next_token:
                    return Ok(matched)
                token = page.next_token


def resolve_keys(
    ctx: AwsContext,
    bucket: str,
    keys: Sequence[str] = (),
    patterns: Sequence[re.Pattern[str]] = (),
) -> Result[tuple[str, ...], ListingError]:
    """Resolve the ordered, de-duplicated list of state keys.

    Explicit keys come first in the order given, then pattern matches in
    listing order. The S3 client is only created, and the bucket only
    listed, when patterns are given.
    """
    resolved = list(keys)
    if patterns:
        match map_err(ctx.s3_client(), lambda e: ListingError(bucket, e.reason)):
            case Err() as e:
                return e
            case Ok(s3):
                pass

        match list_matching_keys(s3, bucket, patterns):
            case Err() as e:
                return e
            case Ok(matched):
                resolved.extend(matched)

    # dict keeps first-seen order
    return Ok(tuple(dict.fromkeys(resolved)))
