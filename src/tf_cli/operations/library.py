"""Library operations - fetch the configuration library into the scratch workspace."""

from pathlib import Path

from tf_cli.lib import files, paths, process
from tf_cli.lib.errors import (
    ConfigurationNotFoundError,
    FetchError,
    WorkspaceError,
)
from tf_cli.lib.result import Err, Ok, Result
from tf_cli.models import Settings

# Project files overlaid on the library configuration in the work dir
OVERLAY_PATTERNS = ("*.tf", "*.tfvars", "*.tfvars.json", ".envrc")

# Never copied out of a local library
COPY_IGNORE = (".git", ".terraform", paths.SCRATCH_DIR)


def git_commands(lib_url: str, revision: str) -> list[list[str]]:
    """Commands, run inside the library dir, that check out exactly revision."""
    return [
        ["git", "init", "--quiet"],
        ["git", "remote", "add", "origin", lib_url],
        ["git", "fetch", "--quiet", "--depth", "1", "origin", revision],
        ["git", "reset", "--quiet", "--hard", "FETCH_HEAD"],
    ]


def fetch_library(settings: Settings, root: Path) -> Result[Path, FetchError]:
    """Populate <root>/.tf/lib with the library at settings.git_revision.

    The whole scratch workspace is recreated first. A local library is
    copied as-is; a remote one is cloned fresh at the requested revision.
    Returns the library directory.
    """
    scratch = paths.scratch_dir(root)
    library = paths.library_dir(root)

    try:
        files.recreate_dir(scratch)
    except OSError as e:
        return Err(WorkspaceError(scratch, str(e)))

    if settings.is_local_library:
        source = Path(settings.lib_url).expanduser()
        try:
            files.copy_tree(source, library, ignore=COPY_IGNORE)
        except OSError as e:
            return Err(WorkspaceError(library, str(e)))
        return Ok(library)

    library.mkdir()
    for cmd in git_commands(settings.lib_url, settings.git_revision):
        match process.run(cmd, cwd=library, capture=True, debug=settings.debug):
            case Err() as e:
                return e
            case Ok(_):
                pass

    return Ok(library)


def prepare_work_dir(
    settings: Settings, root: Path
) -> Result[Path, ConfigurationNotFoundError | WorkspaceError]:
    """Build the configuration's work dir from the fetched library.

    Copies lib/<configuration> and overlays the project's own terraform
    and variable files on top. Returns the work dir.
    """
    source = paths.library_dir(root) / settings.configuration
    if not source.is_dir():
        return Err(ConfigurationNotFoundError(settings.configuration, settings.lib_url))

    work_dir = paths.work_dir(root, settings.configuration)
    try:
        files.copy_tree(source, work_dir, ignore=COPY_IGNORE)
        for pattern in OVERLAY_PATTERNS:
            for local_file in sorted(root.glob(pattern)):
                if local_file.is_file():
                    files.copy_file(local_file, work_dir / local_file.name)
    except OSError as e:
        return Err(WorkspaceError(work_dir, str(e)))

    return Ok(work_dir)
