"""Clean workflow - delete the scratch workspace."""

from pathlib import Path

from tf_cli.lib import files, paths
from tf_cli.lib.errors import WorkspaceError
from tf_cli.lib.result import Err, Ok, Result


def clean(root: Path) -> Result[bool, WorkspaceError]:
    """Remove <root>/.tf. Returns Ok(False) if there was nothing to remove."""
    scratch = paths.scratch_dir(root)
    try:
        return Ok(files.remove_tree(scratch))
    except OSError as e:
        return Err(WorkspaceError(scratch, str(e)))
