"""Credential operations - short-lived cloud credentials from Vault."""

import json
import os

from botocore.exceptions import BotoCoreError, ClientError

from tf_cli.lib import process
from tf_cli.lib.aws import AwsContext
from tf_cli.lib.errors import (
    CredentialAccountMismatchError,
    CredentialError,
    CredentialIssueError,
)
from tf_cli.lib.result import Err, Ok, Result
from tf_cli.models import Credentials, Settings, Zone


def vault_address(settings: Settings, zone: Zone) -> str:
    """Vault address: explicit override, else https://vault.<domain_name>."""
    return settings.vault_addr or f"https://vault.{zone.domain_name}"


def parse_credentials(vault_addr: str, output: str) -> Result[Credentials, CredentialIssueError]:
    """Parse `vault read -format=json` output of an STS endpoint."""
    try:
        data = json.loads(output)["data"]
        return Ok(
            Credentials(
                access_key=data["access_key"],
                secret_key=data["secret_key"],
                session_token=data["security_token"],
            )
        )
    except json.JSONDecodeError as e:
        return Err(CredentialIssueError(vault_addr, f"invalid JSON from vault: {e}"))
    except (KeyError, TypeError) as e:
        return Err(CredentialIssueError(vault_addr, f"missing field in vault response: {e}"))


def issue_credentials(settings: Settings, zone: Zone) -> Result[Credentials, CredentialError]:
    """Request a fresh credential triple for the zone from Vault.

    Nothing is cached: every call issues new credentials.
    """
    vault_addr = vault_address(settings, zone)
    env = {**os.environ, "VAULT_ADDR": vault_addr}
    cmd = ["vault", "read", "-format=json", settings.vault_sts_path]

    match process.run(cmd, env=env, capture=True, debug=settings.debug):
        case Err() as e:
            return e
        case Ok(output):
            pass

    match parse_credentials(vault_addr, output.stdout):
        case Err() as e:
            return e
        case Ok(credentials):
            pass

    if settings.verify_credentials:
        match verify_account(credentials, zone, settings.backend_region):
            case Err() as e:
                return e
            case Ok(_):
                pass

    return Ok(credentials)


def verify_account(
    credentials: Credentials, zone: Zone, region: str | None = None
) -> Result[None, CredentialAccountMismatchError | CredentialIssueError]:
    """Check with STS that credentials belong to the zone's account.

    region defaults to the zone's region.
    """
    ctx = AwsContext(region=region or zone.region, credentials=credentials)
    try:
        account_id = ctx.account_id
    except (BotoCoreError, ClientError) as e:
        return Err(CredentialIssueError("sts", str(e)))

    if account_id != zone.account_id:
        return Err(CredentialAccountMismatchError(zone.account_id, account_id))
    return Ok(None)
