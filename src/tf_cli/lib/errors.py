"""Error types for the tf wrapper.

All errors are frozen dataclasses returned inside Err. The CLI layer
pattern matches on them to print a message and exit 1.
"""

from dataclasses import dataclass
from pathlib import Path

# =============================================================================
# Configuration Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class MissingRequiredOptionError:
    """A required setting (configuration or environment) was not supplied."""

    option: str


@dataclass(frozen=True, slots=True)
class ConfigurationNotFoundError:
    """The library has no subdirectory for the requested configuration."""

    configuration: str
    lib_url: str


# =============================================================================
# External Command Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class MissingDependencyError:
    """A required external binary or shell descriptor is not available."""

    name: str
    hint: str = ""


@dataclass(frozen=True, slots=True)
class CommandFailedError:
    """An external command exited non-zero."""

    command: tuple[str, ...]
    returncode: int
    stderr: str = ""


# =============================================================================
# Zone Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class NetworkError:
    """The zone document could not be downloaded."""

    url: str
    reason: str


@dataclass(frozen=True, slots=True)
class ZoneDocumentError:
    """The zone document is not a JSON object."""

    url: str
    reason: str


@dataclass(frozen=True, slots=True)
class ZoneNotFoundError:
    """No zone record for the environment."""

    environment: str
    url: str


@dataclass(frozen=True, slots=True)
class ZoneAttributeNotFoundError:
    """A dotted-path attribute is missing from a zone record."""

    environment: str
    path: str


# =============================================================================
# Credential Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class CredentialIssueError:
    """Vault did not return a usable credential triple."""

    vault_addr: str
    reason: str


@dataclass(frozen=True, slots=True)
class CredentialAccountMismatchError:
    """Issued credentials belong to another cloud account than the zone."""

    expected: str
    actual: str


# =============================================================================
# Workspace Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class WorkspaceError:
    """Filesystem operation on the project or scratch workspace failed."""

    path: Path
    reason: str


# =============================================================================
# Type Aliases for Error Unions
# =============================================================================

type CommandError = MissingDependencyError | CommandFailedError
type FetchError = CommandError | WorkspaceError
type ZoneError = NetworkError | ZoneDocumentError | ZoneNotFoundError | ZoneAttributeNotFoundError
type CredentialError = CommandError | CredentialIssueError | CredentialAccountMismatchError
type InitError = FetchError | ConfigurationNotFoundError | ZoneError | CredentialError
type BootstrapError = FetchError | ConfigurationNotFoundError
