"""Operations layer - atomic operations that return Result types."""

from tf_s3_nuke.operations.destroy import destroy_deployment
from tf_s3_nuke.operations.keys import list_matching_keys, resolve_keys
from tf_s3_nuke.operations.state import prune_state

__all__ = [
    # keys
    "resolve_keys",
    "list_matching_keys",
    # destroy
    "destroy_deployment",
    # state
    "prune_state",
]
