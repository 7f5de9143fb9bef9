"""External command execution.

Every external tool (git, terraform, nix-shell, vault) goes through run(),
which checks the binary exists, optionally traces the command and turns a
non-zero exit into a CommandFailedError.
"""

import shlex
import shutil
import subprocess
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import click

from tf_cli.lib.errors import CommandError, CommandFailedError, MissingDependencyError
from tf_cli.lib.result import Err, Ok, Result

MASK = "****"


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Exit status and captured output of a finished command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""


def which(binary: str) -> str | None:
    """Full path of binary on PATH, or None."""
    return shutil.which(binary)


def _mask(text: str, secrets: Iterable[str]) -> str:
    for secret in secrets:
        if secret:
            text = text.replace(secret, MASK)
    return text


def redact(cmd: Sequence[str], secrets: Iterable[str] = ()) -> str:
    """Shell-quoted command line with every secret value masked."""
    return _mask(shlex.join(cmd), secrets)


def run(
    cmd: Sequence[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    capture: bool = False,
    debug: bool = False,
    secrets: Iterable[str] = (),
) -> Result[CommandOutput, CommandError]:
    """Run cmd to completion.

    With capture=False output streams to the terminal, as terraform needs
    for its prompts and progress. With capture=True stdout/stderr are
    returned in CommandOutput.
    """
    if which(cmd[0]) is None:
        return Err(MissingDependencyError(cmd[0], f"'{cmd[0]}' was not found on PATH"))

    secrets = tuple(secrets)
    if debug:
        click.secho(f"+ {redact(cmd, secrets)}", dim=True, err=True)

    completed = subprocess.run(
        list(cmd),
        cwd=cwd,
        env=dict(env) if env is not None else None,
        capture_output=capture,
        text=True,
        check=False,
    )

    if completed.returncode != 0:
        stderr = (completed.stderr or "") if capture else ""
        masked = tuple(_mask(arg, secrets) for arg in cmd)
        return Err(CommandFailedError(masked, completed.returncode, stderr.strip()))

    return Ok(
        CommandOutput(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
    )
