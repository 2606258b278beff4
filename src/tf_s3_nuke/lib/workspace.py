"""Temporary terraform workspaces.

Each state key gets its own empty directory under the system temp root.
The process working directory is never changed; callers hand the path to
subprocesses as their cwd.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from types import TracebackType

from tf_s3_nuke.lib.errors import CleanupError, WorkspaceError
from tf_s3_nuke.lib.result import Err, Ok, Result

WORKSPACE_PREFIX = "terraform-s3-nuke-"

logger = logging.getLogger(__name__)


def acquire(prefix: str = WORKSPACE_PREFIX) -> Result[Path, WorkspaceError]:
    """Create a new, empty, uniquely named directory."""
    try:
        path = Path(tempfile.mkdtemp(prefix=prefix))
    except OSError as e:
        return Err(WorkspaceError(str(e)))
    logger.debug("Created workspace %s", path)
    return Ok(path)


def release(path: Path) -> Result[None, CleanupError]:
    """Recursively remove a workspace. Failures are reported, not ignored."""
    try:
        shutil.rmtree(path)
    except OSError as e:
        logger.warning("Failed to remove workspace %s: %s", path, e)
        return Err(CleanupError(path, str(e)))
    logger.debug("Removed workspace %s", path)
    return Ok(None)


class Workspace:
    """
    Context manager that releases an acquired workspace on exit.

    The release result is kept on the instance so the caller can inspect
    it after the with block, whether the block raised or not:

        with Workspace(path) as ws:
            ...
        if ws.cleanup_error:
            ...
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.cleanup: Result[None, CleanupError] | None = None

    @property
    def cleanup_error(self) -> CleanupError | None:
        match self.cleanup:
            case Err(error):
                return error
            case _:
                return None

    def __enter__(self) -> Workspace:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        self.cleanup = release(self.path)
        return False
