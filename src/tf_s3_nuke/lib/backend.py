"""Terraform backend descriptor.

The only file in a nuke workspace: an AWS provider plus an S3 backend
pointing at the state object to destroy.
"""

import json
from pathlib import Path
from typing import Any

from tf_s3_nuke.lib.errors import DescriptorWriteError
from tf_s3_nuke.lib.result import Err, Ok, Result

DESCRIPTOR_FILENAME = "main.tf.json"


def backend_descriptor(region: str, bucket: str, key: str) -> dict[str, Any]:
    """Build the terraform JSON configuration for a state key."""
    return {
        "provider": {
            "aws": {
                "region": region,
            },
        },
        "terraform": {
            "backend": {
                "s3": {
                    "region": region,
                    "bucket": bucket,
                    "key": key,
                },
            },
        },
    }


def write_descriptor(
    workspace: Path, region: str, bucket: str, key: str
) -> Result[Path, DescriptorWriteError]:
    """Write main.tf.json into the workspace. Returns the file path."""
    path = workspace / DESCRIPTOR_FILENAME
    try:
        path.write_text(json.dumps(backend_descriptor(region, bucket, key), indent=2))
    except OSError as e:
        return Err(DescriptorWriteError(path, str(e)))
    return Ok(path)
