"""tf data models.

Pure data structures. Resolution and I/O live in lib/ and operations/.
"""

from __future__ import annotations

from dataclasses import dataclass

LOCAL_REVISION = "local"


@dataclass(frozen=True)
class Settings:
    """Effective configuration for one invocation.

    Built once by lib.settings.resolve_settings and passed to every
    workflow and operation.
    """

    configuration: str
    environment: str
    lib_url: str
    git_revision: str
    debug: bool = False
    vault_enabled: bool = True
    backend_enabled: bool = True
    zones_url: str = ""
    backend_region: str | None = None
    bucket_suffix: str = "tf-states"
    lock_suffix: str = "tf-locks"
    vault_addr: str | None = None
    vault_sts_path: str = "aws/sts/terraform"
    verify_credentials: bool = False

    @property
    def is_local_library(self) -> bool:
        return self.git_revision == LOCAL_REVISION


@dataclass(frozen=True)
class Zone:
    """One entry of the zone document.

    Attributes absent from the document are empty strings.
    """

    name: str
    account_id: str
    domain_name: str = ""
    region: str = ""


@dataclass(frozen=True)
class Credentials:
    """Short-lived cloud credential triple issued by Vault."""

    access_key: str
    secret_key: str
    session_token: str

    def __repr__(self) -> str:
        return f"Credentials(access_key={self.access_key!r}, secret_key='****', session_token='****')"


@dataclass(frozen=True)
class Backend:
    """Terraform S3 backend declaration."""

    bucket: str
    key: str
    region: str
    lock_table: str
    encrypt: bool = True
    credentials: Credentials | None = None
