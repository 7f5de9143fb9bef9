"""Shared CLI utilities.

Wrapper options, error handling, output formatting.
"""

import shlex
import sys
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

import click

from tf_cli.lib.errors import (
    CommandFailedError,
    ConfigurationNotFoundError,
    CredentialAccountMismatchError,
    CredentialIssueError,
    MissingDependencyError,
    MissingRequiredOptionError,
    NetworkError,
    WorkspaceError,
    ZoneAttributeNotFoundError,
    ZoneDocumentError,
    ZoneNotFoundError,
)
from tf_cli.lib.result import Err, Ok, Result
from tf_cli.lib.settings import ENV_CONFIGURATION, ENV_ENVIRONMENT

# Type variables for decorators
P = ParamSpec("P")
T = TypeVar("T")


def settings_options(fn: Callable[P, T]) -> Callable[P, T]:
    """Add -c/-e/-l/-r/-d. Unset options stay None so lower-precedence sources apply."""
    fn = click.option(
        "--debug",
        "-d",
        is_flag=True,
        help="Trace external commands (env: TF_DEBUG)",
    )(fn)
    fn = click.option(
        "--revision",
        "-r",
        default=None,
        metavar="REF",
        help="Library git revision (env: TF_GIT_REVISION, default: master)",
    )(fn)
    fn = click.option(
        "--lib-url",
        "-l",
        default=None,
        metavar="URL-OR-PATH",
        help="Library git URL or local path (env: TF_LIB_URL)",
    )(fn)
    fn = click.option(
        "--environment",
        "-e",
        default=None,
        metavar="NAME",
        help="Target environment (env: TF_ENVIRONMENT)",
    )(fn)
    fn = click.option(
        "--configuration",
        "-c",
        default=None,
        metavar="NAME",
        help="Configuration name in the library (env: TF_CONFIGURATION)",
    )(fn)
    return fn


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
    """Print error message (and usage for missing options) and exit 1."""
    if isinstance(error, MissingRequiredOptionError):
        ctx = click.get_current_context(silent=True)
        if ctx is not None:
            click.echo(ctx.get_usage(), err=True)
    message = _format_error(error)
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def _format_error(error: Any) -> str:
    """Format error for display."""
    match error:
        case MissingRequiredOptionError("configuration"):
            return f"Missing configuration. Use -c/--configuration or set {ENV_CONFIGURATION}."

        case MissingRequiredOptionError("environment"):
            return f"Missing environment. Use -e/--environment or set {ENV_ENVIRONMENT}."

        case MissingRequiredOptionError(option):
            return f"Missing required option '{option}'."

        case ConfigurationNotFoundError(configuration, lib_url):
            return f"Configuration '{configuration}' not found in library {lib_url}."

        case MissingDependencyError(name, hint):
            suffix = f": {hint}" if hint else ""
            return f"Missing dependency '{name}'{suffix}"

        case CommandFailedError(command, returncode, stderr):
            message = f"Command failed with exit code {returncode}: {shlex.join(command)}"
            return f"{message}\n{stderr}" if stderr else message

        case NetworkError(url, reason):
            return f"Could not download zone document {url}: {reason}"

        case ZoneDocumentError(url, reason):
            return f"Invalid zone document {url}: {reason}"

        case ZoneNotFoundError(environment, url):
            return f"Zone '{environment}' not found in {url}."

        case ZoneAttributeNotFoundError(environment, path):
            return f"Zone '{environment}' has no attribute '{path}'."

        case CredentialIssueError(vault_addr, reason):
            return f"Could not obtain credentials from {vault_addr}: {reason}"

        case CredentialAccountMismatchError(expected, actual):
            return f"Credentials belong to account {actual}, expected {expected}."

        case WorkspaceError(path, reason):
            return f"Workspace error on {path}: {reason}"

        case _:
            return str(error)


def echo_step(message: str) -> None:
    """Print a progress line."""
    click.secho(f"==> {message}", bold=True)
