"""Destroy operations - terraform init followed by the terminal step."""

import logging
import subprocess

from tf_s3_nuke.lib.errors import DestroyError, ExecutorError, InitError
from tf_s3_nuke.lib.result import Err, Ok, Result
from tf_s3_nuke.lib.terraform import TerraformRunner
from tf_s3_nuke.models import TerminalStep

logger = logging.getLogger(__name__)


def _failure_reason(e: subprocess.CalledProcessError | OSError) -> str:
    match e:
        case subprocess.CalledProcessError(returncode=code):
            return f"exited with status {code}"
        case FileNotFoundError():
            return f"executable not found: {e.filename}"
        case _:
            return str(e)


def destroy_deployment(
    runner: TerraformRunner, key: str, step: TerminalStep
) -> Result[None, ExecutorError]:
    """Run terraform init, then the terminal step.

    The terminal step is skipped when init fails.
    """
    try:
        runner.init()
    except (subprocess.CalledProcessError, OSError) as e:
        logger.warning("terraform init failed for %s: %s", key, e)
        return Err(InitError(key, _failure_reason(e)))

    command = " ".join(step.args)
    try:
        runner.run(step)
    except (subprocess.CalledProcessError, OSError) as e:
        logger.warning("terraform %s failed for %s: %s", command, key, e)
        return Err(DestroyError(key, command, _failure_reason(e)))

    return Ok(None)
