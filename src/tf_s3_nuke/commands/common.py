"""Shared CLI utilities.

Common options, AwsContext creation, error handling, logging setup.
"""

import logging
import re
import sys
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

import click

from tf_s3_nuke.lib.aws import AwsContext
from tf_s3_nuke.lib.errors import (
    CleanupError,
    DescriptorWriteError,
    DestroyError,
    InitError,
    ListingError,
    StatePruneError,
    WorkspaceError,
)
from tf_s3_nuke.lib.result import Err, Ok, Result

# Default values
DEFAULT_REGION = "us-east-1"
DEFAULT_TERRAFORM_BIN = "terraform"
TERRAFORM_BIN_ENVVAR = "TERRAFORM_S3_NUKE_TERRAFORM"

# Type variables for decorators
P = ParamSpec("P")
T = TypeVar("T")


# Common CLI options as decorators
def region_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --region/-r option."""
    return click.option(
        "--region",
        "-r",
        default=DEFAULT_REGION,
        show_default=True,
        help="AWS region to use",
    )(fn)


def profile_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --profile/-p option."""
    return click.option(
        "--profile",
        "-p",
        default=None,
        help="AWS profile to use from your credential file",
    )(fn)


def verbose_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --verbose/-v flag for debug logging."""
    return click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Log debug output to stderr",
    )(fn)


def aws_options(fn: Callable[P, T]) -> Callable[P, T]:
    """Add all AWS-related options (region, profile)."""
    fn = region_option(fn)
    fn = profile_option(fn)
    return fn


def compile_patterns(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> tuple[re.Pattern[str], ...]:
    """Click callback turning --pattern values into compiled regexes."""
    compiled = []
    for raw in value:
        try:
            compiled.append(re.compile(raw))
        except re.error as e:
            raise click.BadParameter(f"invalid regular expression {raw!r}: {e}") from e
    return tuple(compiled)


def make_context(region: str, profile: str | None) -> AwsContext:
    """Create AwsContext from CLI options."""
    return AwsContext(region=region, profile=profile)


def configure_logging(verbose: bool) -> None:
    """Send library logging to stderr; debug level with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if verbose:
        # botocore debug output drowns everything else
        logging.getLogger("botocore").setLevel(logging.INFO)


def handle_result(result: Result[T, Any], success_message: str | None = None) -> T:
    """Handle a Result, exiting on error with appropriate message.

    On Ok: returns the value, optionally prints success message
    On Err: prints error and exits with code 1
    """
    match result:
        case Ok(value):
            if success_message:
                click.secho(success_message, fg="green", bold=True)
            return value
        case Err(error):
            handle_error(error)
            sys.exit(1)  # Should never reach here, but for type checker


def handle_error(error: Any) -> None:
    """Print error message and exit."""
    echo_error(error)
    sys.exit(1)


def echo_error(error: Any) -> None:
    """Print error message to stderr without exiting."""
    click.secho(f"Error: {_format_error(error)}", fg="red", err=True)


def _format_error(error: Any) -> str:
    """Format error for display."""
    match error:
        case ListingError(bucket, reason):
            return f"Failed to list state files in bucket '{bucket}': {reason}"

        case WorkspaceError(reason):
            return f"Failed to create temporary workspace: {reason}"

        case DescriptorWriteError(path, reason):
            return f"Failed to write backend configuration {path}: {reason}"

        case InitError(key, reason):
            return f"terraform init failed for '{key}': {reason}"

        case DestroyError(key, step, reason):
            return f"terraform {step} failed for '{key}': {reason}"

        case StatePruneError(bucket, key, reason):
            return f"Failed to delete state file s3://{bucket}/{key}: {reason}"

        case CleanupError(path, reason):
            return f"Failed to remove temporary workspace {path}: {reason}"

        case _:
            return str(error)
