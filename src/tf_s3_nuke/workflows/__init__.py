"""Workflows layer - orchestrate operations into user intents."""

from tf_s3_nuke.workflows.nuke import destroy_key, nuke

__all__ = [
    "nuke",
    "destroy_key",
]
