"""Template operations - placeholder substitution and bootstrap copies."""

from collections.abc import Iterable
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path

from tf_cli.lib import files
from tf_cli.lib.errors import WorkspaceError
from tf_cli.lib.result import Err, Ok, Result

PLACEHOLDER = "__ENVIRONMENT__"

# Variable-definition and environment-setup files
SUBSTITUTION_PATTERNS = ("*.tfvars", "*.tfvars.json", ".envrc", "*.env")

TEMPLATE_SUFFIX = ".example"
DOCUMENTATION_PATTERNS = ("*.md",)


@dataclass(frozen=True)
class CopyReport:
    """Files copied into the project, and those left alone because they existed."""

    copied: tuple[Path, ...] = ()
    skipped: tuple[Path, ...] = ()


def is_substitution_target(path: Path) -> bool:
    """True if path's name matches a substitution pattern."""
    return any(fnmatch(path.name, pattern) for pattern in SUBSTITUTION_PATTERNS)


def substitute_file(path: Path, environment: str) -> bool:
    """Replace every placeholder occurrence in path. Returns True if it changed.

    Operates on bytes: the rest of the file is kept as-is whatever its encoding.
    """
    content = path.read_bytes()
    token = PLACEHOLDER.encode()
    if token not in content:
        return False
    path.write_bytes(content.replace(token, environment.encode()))
    return True


def substitute(paths: Iterable[Path], environment: str) -> Result[list[Path], WorkspaceError]:
    """Substitute the environment in every targeted file among paths.

    Non-targeted files are never read or written. Returns the changed files.
    """
    changed = []
    for path in paths:
        if not path.is_file() or not is_substitution_target(path):
            continue
        try:
            if substitute_file(path, environment):
                changed.append(path)
        except OSError as e:
            return Err(WorkspaceError(path, str(e)))
    return Ok(changed)


def substitute_tree(directory: Path, environment: str) -> Result[list[Path], WorkspaceError]:
    """Substitute the environment in targeted files anywhere under directory."""
    return substitute(sorted(directory.rglob("*")), environment)


def template_destination(source: Path, project: Path) -> Path | None:
    """Where a library file lands in the project, or None if it is not copied."""
    if source.name.endswith(TEMPLATE_SUFFIX) and source.name != TEMPLATE_SUFFIX:
        return project / source.name.removesuffix(TEMPLATE_SUFFIX)
    if any(fnmatch(source.name, pattern) for pattern in DOCUMENTATION_PATTERNS):
        return project / source.name
    return None


def copy_templates(source_dir: Path, project: Path) -> Result[CopyReport, WorkspaceError]:
    """Copy template and documentation files from source_dir into project.

    `foo.example` lands as `foo`; `*.md` is copied as-is. Existing project
    files are never overwritten.
    """
    copied: list[Path] = []
    skipped: list[Path] = []
    for source in sorted(source_dir.iterdir()):
        if not source.is_file():
            continue
        destination = template_destination(source, project)
        if destination is None:
            continue
        try:
            if files.copy_if_missing(source, destination):
                copied.append(destination)
            else:
                skipped.append(destination)
        except OSError as e:
            return Err(WorkspaceError(destination, str(e)))

    return Ok(CopyReport(copied=tuple(copied), skipped=tuple(skipped)))
