"""Tests for lib/storage/s3.py - S3 listing and deletion with moto."""

from unittest.mock import MagicMock

from botocore.exceptions import ClientError, EndpointConnectionError

from tf_s3_nuke.lib.result import Err, Ok
from tf_s3_nuke.lib.storage.s3 import delete_object, list_page


def _object_exists(s3, bucket: str, key: str) -> bool:
    response = s3.list_objects_v2(Bucket=bucket, Prefix=key)
    return any(obj["Key"] == key for obj in response.get("Contents", []))


class TestListPage:
    """Tests for list_page function."""

    def test_lists_keys_in_order(self, state_bucket) -> None:
        s3, bucket = state_bucket
        for key in ("alpha", "bravo", "zulu"):
            s3.put_object(Bucket=bucket, Key=key, Body=b"{}")

        result = list_page(s3, bucket)

        assert isinstance(result, Ok)
        assert result.value.keys == ("alpha", "bravo", "zulu")
        assert result.value.next_token is None
        assert result.value.truncated is False

    def test_empty_bucket_has_no_keys(self, state_bucket) -> None:
        s3, bucket = state_bucket

        result = list_page(s3, bucket)

        assert isinstance(result, Ok)
        assert result.value.keys == ()

    def test_nonexistent_bucket(self, s3_client) -> None:
        result = list_page(s3_client, "nonexistent-bucket")

        assert isinstance(result, Err)
        assert result.error.bucket == "nonexistent-bucket"
        assert "not found" in result.error.reason.lower()

    def test_passes_continuation_token(self) -> None:
        s3 = MagicMock()
        s3.list_objects_v2.return_value = {
            "IsTruncated": True,
            "NextContinuationToken": "xyz",
            "Contents": [{"Key": "bravo"}],
        }

        result = list_page(s3, "foo", "abc")

        s3.list_objects_v2.assert_called_once_with(Bucket="foo", ContinuationToken="abc")
        assert isinstance(result, Ok)
        assert result.value.keys == ("bravo",)
        assert result.value.next_token == "xyz"
        assert result.value.truncated is True

    def test_first_page_sends_no_token(self) -> None:
        s3 = MagicMock()
        s3.list_objects_v2.return_value = {"IsTruncated": False, "Contents": []}

        list_page(s3, "foo")

        s3.list_objects_v2.assert_called_once_with(Bucket="foo")

    def test_access_denied(self) -> None:
        s3 = MagicMock()
        s3.list_objects_v2.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "ListObjectsV2"
        )

        result = list_page(s3, "foo")

        assert isinstance(result, Err)
        assert "AccessDenied" in result.error.reason

    def test_connection_error(self) -> None:
        s3 = MagicMock()
        s3.list_objects_v2.side_effect = EndpointConnectionError(endpoint_url="https://s3")

        result = list_page(s3, "foo")

        assert isinstance(result, Err)
        assert result.error.bucket == "foo"


class TestDeleteObject:
    """Tests for delete_object function."""

    def test_delete_existing_object(self, state_bucket) -> None:
        s3, bucket = state_bucket
        s3.put_object(Bucket=bucket, Key="env/terraform.tfstate", Body=b"{}")

        result = delete_object(s3, bucket, "env/terraform.tfstate")

        assert isinstance(result, Ok)
        assert _object_exists(s3, bucket, "env/terraform.tfstate") is False

    def test_delete_nonexistent_object_succeeds(self, state_bucket) -> None:
        """S3 delete is idempotent - deleting non-existent key succeeds."""
        s3, bucket = state_bucket

        result = delete_object(s3, bucket, "nonexistent-key")

        assert isinstance(result, Ok)

    def test_delete_from_nonexistent_bucket(self, s3_client) -> None:
        result = delete_object(s3_client, "nonexistent-bucket", "any-key")

        assert isinstance(result, Err)
        assert result.error.bucket == "nonexistent-bucket"
        assert result.error.key == "any-key"
