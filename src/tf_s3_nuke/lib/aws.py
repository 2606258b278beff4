"""AWS session and client management.

AwsContext is created once at CLI entry and passed to the workflow.
The S3 client is created lazily on first access, so runs that never
touch S3 never need working credentials.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import BotoCoreError

from tf_s3_nuke.lib.errors import SessionError
from tf_s3_nuke.lib.result import Err, Ok, Result

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


@dataclass
class AwsContext:
    """AWS session and clients for one run.

    Example:
        ctx = AwsContext(region="us-east-1", profile="sandbox")
        match ctx.s3_client():
            case Ok(s3):
                s3.list_objects_v2(Bucket="tf-state")
    """

    region: str
    profile: str | None = None

    @cached_property
    def session(self) -> boto3.Session:
        """Boto3 session configured with region and profile."""
        return boto3.Session(region_name=self.region, profile_name=self.profile)

    @cached_property
    def s3(self) -> S3Client:
        """S3 client. Raises BotoCoreError if the session cannot be built."""
        return self.session.client("s3")

    def s3_client(self) -> Result[S3Client, SessionError]:
        """S3 client, or the reason it could not be created."""
        try:
            return Ok(self.s3)
        except BotoCoreError as e:
            return Err(SessionError(self.profile, str(e)))
