"""Destroy Terraform deployments from their S3 state files."""

__version__ = "0.1.0"
