"""Bootstrap workflow - populate a new configuration directory."""

from dataclasses import dataclass
from pathlib import Path

from tf_cli.lib import files, paths
from tf_cli.lib.errors import BootstrapError, ConfigurationNotFoundError, WorkspaceError
from tf_cli.lib.result import Err, Ok, Result
from tf_cli.lib.settings import render_persisted
from tf_cli.models import Settings
from tf_cli.operations.library import fetch_library
from tf_cli.operations.templates import copy_templates, substitute


@dataclass(frozen=True)
class BootstrapResult:
    """What bootstrap did to the project directory.

    Never fails on existing files - they are reported in skipped instead.
    """

    copied: tuple[Path, ...]
    skipped: tuple[Path, ...]
    substituted: tuple[Path, ...]
    settings_file: Path
    settings_written: bool


def bootstrap(settings: Settings, root: Path) -> Result[BootstrapResult, BootstrapError]:
    """Fetch the library and copy the configuration's templates into root.

    1. Fetch the library
    2. Copy *.example templates (suffix stripped) and *.md docs, keeping existing files
    3. Substitute the environment placeholder in the newly copied files
    4. Write the persisted settings file unless it exists
    """
    match fetch_library(settings, root):
        case Err() as e:
            return e
        case Ok(library):
            pass

    source = library / settings.configuration
    if not source.is_dir():
        return Err(ConfigurationNotFoundError(settings.configuration, settings.lib_url))

    match copy_templates(source, root):
        case Err() as e:
            return e
        case Ok(report):
            pass

    match substitute(report.copied, settings.environment):
        case Err() as e:
            return e
        case Ok(substituted):
            pass

    settings_path = paths.settings_file(root)
    settings_written = False
    if not settings_path.exists():
        try:
            files.write(settings_path, render_persisted(settings))
        except OSError as e:
            return Err(WorkspaceError(settings_path, str(e)))
        settings_written = True

    return Ok(
        BootstrapResult(
            copied=report.copied,
            skipped=report.skipped,
            substituted=tuple(substituted),
            settings_file=settings_path,
            settings_written=settings_written,
        )
    )
