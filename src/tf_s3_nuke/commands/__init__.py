"""Commands layer - CLI facade over workflows."""

from tf_s3_nuke.commands.nuke import nuke

__all__ = [
    "nuke",
]
