"""Shared pytest fixtures for terraform-s3-nuke tests."""

import json
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from moto import mock_aws

REGION = "us-east-1"
BUCKET = "tf-state"


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def empty_aws_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point boto3 at empty config files so no named profile exists."""
    files = {"AWS_CONFIG_FILE": "config", "AWS_SHARED_CREDENTIALS_FILE": "credentials"}
    for var, name in files.items():
        path = tmp_path / name
        path.write_text("")
        monkeypatch.setenv(var, str(path))


@pytest.fixture
def s3_client(aws_credentials: None):
    """Create mocked S3 client."""
    import boto3

    with mock_aws():
        client = boto3.client("s3", region_name=REGION)
        yield client


@pytest.fixture
def state_bucket(s3_client):
    """Create the state bucket. Returns (client, bucket)."""
    s3_client.create_bucket(Bucket=BUCKET)
    return s3_client, BUCKET


@pytest.fixture
def mock_aws_context(aws_credentials: None):
    """Create a mocked AwsContext with the state bucket already present."""
    from tf_s3_nuke.lib.aws import AwsContext

    with mock_aws():
        ctx = AwsContext(region=REGION, profile=None)
        ctx.s3.create_bucket(Bucket=BUCKET)
        yield ctx


@pytest.fixture
def temp_root(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point tempfile.mkdtemp at a per-test directory."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@dataclass
class TerraformCall:
    """One recorded terraform invocation."""

    args: list[str]
    cwd: Path
    env: dict[str, str] | None
    descriptor: dict[str, Any] | None


@dataclass
class FakeTerraform:
    """Stands in for subprocess.run inside lib/terraform.py.

    Records every call and the main.tf.json present at the time.
    Calls whose index is in fail_on exit with status 1.
    """

    fail_on: set[int] = field(default_factory=set)
    calls: list[TerraformCall] = field(default_factory=list)

    def __call__(self, cmd, cwd=None, env=None, check=False, **kwargs):
        descriptor_path = Path(cwd) / "main.tf.json"
        descriptor = json.loads(descriptor_path.read_text()) if descriptor_path.exists() else None
        self.calls.append(TerraformCall(list(cmd), Path(cwd), env, descriptor))
        returncode = 1 if len(self.calls) - 1 in self.fail_on else 0
        if check and returncode:
            raise subprocess.CalledProcessError(returncode, cmd)
        return subprocess.CompletedProcess(cmd, returncode)

    @property
    def commands(self) -> list[str]:
        return [" ".join(call.args) for call in self.calls]


@pytest.fixture
def fake_terraform():
    """Patch subprocess.run for terraform calls."""
    fake = FakeTerraform()
    with patch("tf_s3_nuke.lib.terraform.subprocess.run", side_effect=fake):
        yield fake


@dataclass
class EventLog:
    """Collects workflow progress events; pass as on_event."""

    events: list = field(default_factory=list)

    def __call__(self, event) -> None:
        self.events.append(event)


@pytest.fixture
def events() -> EventLog:
    return EventLog()
