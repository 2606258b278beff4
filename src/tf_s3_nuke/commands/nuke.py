"""Nuke command - destroy Terraform deployments from their S3 state files."""

import re
import sys

import click

from tf_s3_nuke import __version__
from tf_s3_nuke.commands.common import (
    DEFAULT_TERRAFORM_BIN,
    TERRAFORM_BIN_ENVVAR,
    aws_options,
    compile_patterns,
    configure_logging,
    echo_error,
    handle_result,
    make_context,
    verbose_option,
)
from tf_s3_nuke.models import (
    KeyFailed,
    KeyStarted,
    KeySucceeded,
    NukeConfig,
    RunEvent,
    RunReport,
    StateDeleted,
)
from tf_s3_nuke.workflows import nuke as nuke_workflow


def echo_event(event: RunEvent) -> None:
    """Render workflow progress on the console."""
    match event:
        case KeyStarted(key, dry_run=True):
            click.echo()
            click.secho(f"Would destroy resources for {key}...", bold=True)
            click.echo()
        case KeyStarted(key):
            click.echo()
            click.secho(f"Destroying resources for {key}...", bold=True)
            click.echo()
        case StateDeleted(key, dry_run=True):
            click.echo(f"Would delete state file {key}")
        case StateDeleted(key):
            click.secho(f"Deleted state file {key}", fg="green")
        case KeySucceeded():
            pass
        case KeyFailed(_, error):
            echo_error(error)


def echo_summary(report: RunReport) -> None:
    """Print the run summary."""
    if not report.outcomes:
        click.echo("No state files matched.")
        return

    total = len(report.keys)
    click.echo()
    if report.ok:
        click.secho(f"Processed {total} state file(s) successfully!", fg="green", bold=True)
        return

    failed = report.failed
    click.secho(f"{len(failed)} of {total} state file(s) failed:", fg="red", bold=True, err=True)
    for outcome in failed:
        click.secho(f"  - {outcome.key}", fg="red", err=True)
    if report.skipped:
        skipped = len(report.skipped)
        click.secho(f"Stopped early, {skipped} state file(s) not attempted.", fg="red", err=True)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="terraform-s3-nuke")
@aws_options
@click.option(
    "--bucket",
    "-b",
    required=True,
    help="Name of S3 bucket containing Terraform state files",
)
@click.option(
    "--key",
    "-k",
    "keys",
    multiple=True,
    help="Key of a Terraform state file in the bucket (repeatable)",
)
@click.option(
    "--pattern",
    "patterns",
    multiple=True,
    callback=compile_patterns,
    help="Regex matched against keys in the bucket (repeatable)",
)
@click.option(
    "--delete-state",
    is_flag=True,
    help="Delete the Terraform state file from S3 when complete",
)
@click.option(
    "--auto-approve",
    is_flag=True,
    help="Do not ask terraform for confirmation",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Do not destroy anything, just show what would be done",
)
@click.option(
    "--fail-fast/--keep-going",
    default=False,
    show_default=True,
    help="Stop at the first state file that fails",
)
@click.option(
    "--terraform-bin",
    default=DEFAULT_TERRAFORM_BIN,
    show_default=True,
    envvar=TERRAFORM_BIN_ENVVAR,
    help="Terraform executable",
)
@verbose_option
def nuke(
    region: str,
    profile: str | None,
    bucket: str,
    keys: tuple[str, ...],
    patterns: tuple[re.Pattern[str], ...],
    delete_state: bool,
    auto_approve: bool,
    dry_run: bool,
    fail_fast: bool,
    terraform_bin: str,
    verbose: bool,
) -> None:
    """Destroy Terraform deployments using only their S3 state files.

    Each state file is destroyed from an empty temporary workspace whose
    only configuration is an S3 backend pointing at the state key.

    \b
    Examples:
      terraform-s3-nuke --bucket tf-state --key sandbox/terraform.tfstate
      terraform-s3-nuke -b tf-state --pattern '^pr-\\d+/' --dry-run
      terraform-s3-nuke -b tf-state --pattern '^pr-' --auto-approve --delete-state
    """
    if not keys and not patterns:
        raise click.UsageError("Must specify either --key or --pattern")

    configure_logging(verbose)

    config = NukeConfig(
        bucket=bucket,
        region=region,
        profile=profile,
        keys=keys,
        patterns=patterns,
        delete_state=delete_state,
        auto_approve=auto_approve,
        dry_run=dry_run,
        fail_fast=fail_fast,
        terraform_bin=terraform_bin,
    )
    ctx = make_context(region, profile)

    report = handle_result(nuke_workflow(ctx, config, on_event=echo_event))
    echo_summary(report)
    sys.exit(report.exit_code)
