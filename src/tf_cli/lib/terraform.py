"""Terraform invocation helpers.

Terraform is taken from a nix shell when a shell.nix descriptor is found,
otherwise from PATH.
"""

import shlex
from collections.abc import Iterable, Sequence
from pathlib import Path

from tf_cli.lib import process
from tf_cli.lib.errors import CommandError, MissingDependencyError
from tf_cli.lib.process import CommandOutput
from tf_cli.lib.result import Err, Ok, Result

SHELL_DESCRIPTOR = "shell.nix"


def find_shell_descriptor(search_dirs: Iterable[Path]) -> Path | None:
    """First shell.nix found in search_dirs, in order."""
    for directory in search_dirs:
        candidate = directory / SHELL_DESCRIPTOR
        if candidate.is_file():
            return candidate
    return None


class TerraformRunner:
    """
    Run terraform commands in a configuration's work dir.

    Example:
        runner = TerraformRunner(work_dir, search_dirs=[work_dir, lib_dir])
        runner.init(["-upgrade"])
        runner.run("plan", ["-out", "plan.out"])
    """

    def __init__(
        self,
        work_dir: Path,
        search_dirs: Sequence[Path] = (),
        debug: bool = False,
    ):
        """
        Initialize the runner.

        Args:
            work_dir: Directory terraform runs in
            search_dirs: Directories searched for a shell.nix descriptor
            debug: Trace commands on stderr
        """
        self.work_dir = work_dir
        self.search_dirs = tuple(search_dirs)
        self.debug = debug

    def command(self, args: Sequence[str]) -> Result[list[str], MissingDependencyError]:
        """Build the full command line for `terraform <args>`."""
        terraform_cmd = ["terraform", *args]

        descriptor = find_shell_descriptor(self.search_dirs)
        if descriptor is not None:
            if process.which("nix-shell") is None:
                return Err(MissingDependencyError("nix-shell", f"required by {descriptor}"))
            return Ok(["nix-shell", str(descriptor), "--run", shlex.join(terraform_cmd)])

        if process.which("terraform") is None:
            return Err(
                MissingDependencyError(
                    "terraform", f"not on PATH and no {SHELL_DESCRIPTOR} found"
                )
            )
        return Ok(terraform_cmd)

    def run(
        self,
        verb: str,
        args: Sequence[str] = (),
        secrets: Iterable[str] = (),
    ) -> Result[CommandOutput, CommandError]:
        """Run `terraform <verb> <args>` with output streamed to the terminal."""
        match self.command([verb, *args]):
            case Err() as e:
                return e
            case Ok(cmd):
                pass

        return process.run(cmd, cwd=self.work_dir, debug=self.debug, secrets=secrets)

    def init(
        self,
        extra_args: Sequence[str] = (),
        backend_args: Sequence[str] = (),
        secrets: Iterable[str] = (),
    ) -> Result[CommandOutput, CommandError]:
        """Run `terraform init` non-interactively, reconfiguring the backend."""
        args = ["-input=false", "-reconfigure", *backend_args, *extra_args]
        return self.run("init", args, secrets=secrets)
