"""Terraform CLI helpers for terraform-s3-nuke."""

import logging
import os
import subprocess
from pathlib import Path

from tf_s3_nuke.models import TerminalStep

logger = logging.getLogger(__name__)


class TerraformRunner:
    """
    Helper class to run terraform commands inside one workspace.

    Commands run synchronously and inherit the console, so terraform can
    print its plan and prompt for confirmation. Every command gets the
    workspace as its cwd; the caller's working directory is left alone.
    """

    def __init__(
        self,
        workdir: Path,
        profile: str | None = None,
        terraform_bin: str = "terraform",
    ) -> None:
        """
        Initialize terraform runner.

        Args:
            workdir: Workspace holding main.tf.json
            profile: Optional AWS profile, exported as AWS_PROFILE
            terraform_bin: Terraform executable name or path
        """
        self.workdir = workdir
        self.profile = profile
        self.terraform_bin = terraform_bin

    def _env(self) -> dict[str, str] | None:
        """Child environment, or None to inherit ours unchanged."""
        if not self.profile:
            return None
        return {**os.environ, "AWS_PROFILE": self.profile}

    def _run(self, *args: str) -> subprocess.CompletedProcess[bytes]:
        cmd = [self.terraform_bin, *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.workdir)
        return subprocess.run(cmd, cwd=self.workdir, env=self._env(), check=True)

    def init(self) -> subprocess.CompletedProcess[bytes]:
        """
        Run terraform init against the S3 backend.

        Returns:
            CompletedProcess result

        Raises:
            subprocess.CalledProcessError: terraform exited non-zero
            FileNotFoundError: terraform executable not found
        """
        return self._run("init")

    def run(self, step: TerminalStep) -> subprocess.CompletedProcess[bytes]:
        """
        Run the terminal step (plan -destroy, destroy -auto-approve or destroy).

        Returns:
            CompletedProcess result

        Raises:
            subprocess.CalledProcessError: terraform exited non-zero
            FileNotFoundError: terraform executable not found
        """
        return self._run(*step.args)
