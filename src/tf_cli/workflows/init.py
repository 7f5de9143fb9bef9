"""Init workflow - prepare the work dir and run `terraform init`."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from tf_cli.lib import files, paths
from tf_cli.lib.backend import backend_config_args, build_backend, render_backend
from tf_cli.lib.errors import InitError, WorkspaceError
from tf_cli.lib.result import Err, Ok, Result
from tf_cli.lib.terraform import TerraformRunner
from tf_cli.models import Backend, Credentials, Settings
from tf_cli.operations.credentials import issue_credentials
from tf_cli.operations.library import fetch_library, prepare_work_dir
from tf_cli.operations.templates import substitute_tree
from tf_cli.operations.zones import (
    ACCOUNT_ID_PATH,
    DOMAIN_NAME_PATH,
    REGION_PATH,
    ZoneDirectory,
)

type Reporter = Callable[[str], None]


def quiet(_: str) -> None:
    pass


@dataclass(frozen=True)
class InitResult:
    """Outcome of a successful init."""

    work_dir: Path
    backend: Backend | None


def make_runner(settings: Settings, root: Path) -> TerraformRunner:
    """TerraformRunner for the configuration's work dir."""
    work_dir = paths.work_dir(root, settings.configuration)
    return TerraformRunner(
        work_dir,
        search_dirs=[work_dir, paths.library_dir(root), root],
        debug=settings.debug,
    )


def zone_requirements(settings: Settings) -> tuple[str, ...]:
    """Zone attributes read by the enabled init steps."""
    required = [ACCOUNT_ID_PATH]
    if not settings.backend_region:
        required.append(REGION_PATH)
    if settings.vault_enabled and not settings.vault_addr:
        required.append(DOMAIN_NAME_PATH)
    return tuple(required)


def is_initialized(settings: Settings, root: Path) -> bool:
    """True if terraform has already been initialized in the work dir."""
    return (paths.work_dir(root, settings.configuration) / ".terraform").is_dir()


def init(
    settings: Settings,
    root: Path,
    zones: ZoneDirectory,
    extra_args: Sequence[str] = (),
    report: Reporter = quiet,
) -> Result[InitResult, InitError]:
    """Fetch the library and initialize terraform for settings.configuration.

    1. Fetch the library into a fresh scratch workspace
    2. Build the work dir and substitute the environment placeholder
    3. Resolve the zone and write backend.tf (if backend generation is on)
    4. Issue credentials from Vault (if the broker is on)
    5. Run `terraform init` with the assembled backend options
    """
    if settings.is_local_library:
        report(f"Copying library from {settings.lib_url}")
    else:
        report(f"Fetching library {settings.lib_url} at {settings.git_revision}")
    match fetch_library(settings, root):
        case Err() as e:
            return e
        case Ok(_):
            pass

    match prepare_work_dir(settings, root):
        case Err() as e:
            return e
        case Ok(work_dir):
            pass

    match substitute_tree(work_dir, settings.environment):
        case Err() as e:
            return e
        case Ok(_):
            pass

    backend: Backend | None = None
    if settings.backend_enabled:
        report(f"Resolving zone '{settings.environment}'")
        match zones.get_zone(settings.environment, zone_requirements(settings)):
            case Err() as e:
                return e
            case Ok(zone):
                pass

        credentials: Credentials | None = None
        if settings.vault_enabled:
            report("Requesting backend credentials from Vault")
            match issue_credentials(settings, zone):
                case Err() as e:
                    return e
                case Ok(credentials):
                    pass

        backend = build_backend(settings, zone, credentials)
        backend_path = paths.backend_file(root, settings.configuration)
        try:
            files.write(backend_path, render_backend(backend))
        except OSError as e:
            return Err(WorkspaceError(backend_path, str(e)))
        report(f"Backend: s3://{backend.bucket}/{backend.key} (lock table {backend.lock_table})")

    backend_args = backend_config_args(backend) if backend else []
    secrets = (
        [backend.credentials.secret_key, backend.credentials.session_token]
        if backend and backend.credentials
        else []
    )

    report("Running terraform init")
    match make_runner(settings, root).init(extra_args, backend_args, secrets=secrets):
        case Err() as e:
            return e
        case Ok(_):
            pass

    return Ok(InitResult(work_dir=work_dir, backend=backend))
