"""Settings resolution.

Merges, field by field, in decreasing precedence:
1. Explicit CLI flags
2. Process environment (TF_* variables)
3. The persisted settings file (.tf.env)
4. Built-in defaults
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from tf_cli.lib.errors import MissingRequiredOptionError, WorkspaceError
from tf_cli.lib.result import Err, Ok, Result
from tf_cli.models import LOCAL_REVISION, Settings

DEFAULT_LIB_URL = "https://github.com/Caascad/terraform-lib.git"
DEFAULT_GIT_REVISION = "master"
DEFAULT_ZONES_URL = "https://raw.githubusercontent.com/Caascad/zones/master/zones.json"

ENV_CONFIGURATION = "TF_CONFIGURATION"
ENV_ENVIRONMENT = "TF_ENVIRONMENT"
ENV_LIB_URL = "TF_LIB_URL"
ENV_GIT_REVISION = "TF_GIT_REVISION"
ENV_DEBUG = "TF_DEBUG"
ENV_VAULT_ENABLED = "TF_VAULT_ENABLED"
ENV_BACKEND_ENABLED = "TF_BACKEND_ENABLED"
ENV_ZONES_URL = "TF_ZONES_URL"
ENV_BACKEND_REGION = "TF_BACKEND_REGION"
ENV_BUCKET_SUFFIX = "TF_BACKEND_BUCKET_SUFFIX"
ENV_LOCK_SUFFIX = "TF_BACKEND_LOCK_SUFFIX"
ENV_VAULT_ADDR = "TF_VAULT_ADDR"
ENV_VAULT_STS_PATH = "TF_VAULT_STS_PATH"
ENV_VERIFY_CREDENTIALS = "TF_VERIFY_CREDENTIALS"

# Keys read from and written to the persisted settings file
PERSISTED_KEYS = (ENV_CONFIGURATION, ENV_ENVIRONMENT, ENV_LIB_URL, ENV_GIT_REVISION)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class Flags:
    """Values given on the command line. None means not given."""

    configuration: str | None = None
    environment: str | None = None
    lib_url: str | None = None
    git_revision: str | None = None
    debug: bool | None = None


def parse_bool(value: str | None, default: bool) -> bool:
    """Parse a boolean environment value, falling back to default if unset or unknown."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    return default


def is_local_path(url: str) -> bool:
    """True if the library URL points at an existing local directory."""
    return Path(url).expanduser().is_dir()


def read_persisted(path: Path) -> Result[dict[str, str], WorkspaceError]:
    """Read KEY=value lines from the persisted settings file.

    Missing file yields an empty mapping. Comments, blank lines and keys
    outside PERSISTED_KEYS are ignored.
    """
    if not path.is_file():
        return Ok({})

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(WorkspaceError(path, str(e)))

    values: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip().removeprefix("export ").strip()
        if key not in PERSISTED_KEYS:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key] = value
    return Ok(values)


def render_persisted(settings: Settings) -> str:
    """Render the persisted settings file content for settings.

    The revision of a local library is not a git ref and is left out.
    """
    lines = [
        f"{ENV_CONFIGURATION}={settings.configuration}",
        f"{ENV_ENVIRONMENT}={settings.environment}",
        f"{ENV_LIB_URL}={settings.lib_url}",
    ]
    if not settings.is_local_library:
        lines.append(f"{ENV_GIT_REVISION}={settings.git_revision}")
    return "\n".join(lines) + "\n"


def _pick(
    flag: str | None,
    env_key: str,
    environ: Mapping[str, str],
    persisted: Mapping[str, str],
    ignore: str | None = None,
) -> str | None:
    """First non-empty value among flag, environment and persisted file, skipping ignore."""
    for candidate in (flag, environ.get(env_key), persisted.get(env_key)):
        if candidate and candidate != ignore:
            return candidate
    return None


def resolve_settings(
    flags: Flags,
    environ: Mapping[str, str],
    persisted: Mapping[str, str],
    require: bool = True,
) -> Result[Settings, MissingRequiredOptionError]:
    """Resolve the effective settings.

    With require=True a missing configuration or environment is an error.
    Verbs that need neither (clean) pass require=False and get empty strings.
    """
    configuration = _pick(flags.configuration, ENV_CONFIGURATION, environ, persisted)
    environment = _pick(flags.environment, ENV_ENVIRONMENT, environ, persisted)

    if require:
        if not configuration:
            return Err(MissingRequiredOptionError("configuration"))
        if not environment:
            return Err(MissingRequiredOptionError("environment"))

    lib_url = _pick(flags.lib_url, ENV_LIB_URL, environ, persisted) or DEFAULT_LIB_URL

    if is_local_path(lib_url):
        git_revision = LOCAL_REVISION
    else:
        git_revision = (
            _pick(flags.git_revision, ENV_GIT_REVISION, environ, persisted, ignore=LOCAL_REVISION)
            or DEFAULT_GIT_REVISION
        )

    if flags.debug is not None:
        debug = flags.debug
    else:
        debug = parse_bool(environ.get(ENV_DEBUG), False)

    return Ok(
        Settings(
            configuration=configuration or "",
            environment=environment or "",
            lib_url=lib_url,
            git_revision=git_revision,
            debug=debug,
            vault_enabled=parse_bool(environ.get(ENV_VAULT_ENABLED), True),
            backend_enabled=parse_bool(environ.get(ENV_BACKEND_ENABLED), True),
            zones_url=environ.get(ENV_ZONES_URL) or DEFAULT_ZONES_URL,
            backend_region=environ.get(ENV_BACKEND_REGION) or None,
            bucket_suffix=environ.get(ENV_BUCKET_SUFFIX) or "tf-states",
            lock_suffix=environ.get(ENV_LOCK_SUFFIX) or "tf-locks",
            vault_addr=environ.get(ENV_VAULT_ADDR) or None,
            vault_sts_path=environ.get(ENV_VAULT_STS_PATH) or "aws/sts/terraform",
            verify_credentials=parse_bool(environ.get(ENV_VERIFY_CREDENTIALS), False),
        )
    )
