"""Terraform backend generation.

All functions are pure - they derive names and render HCL from inputs.
"""

from tf_cli.models import Backend, Credentials, Settings, Zone


def bucket_name(zone: Zone, suffix: str) -> str:
    """State bucket name: <zone>-<account_id>-<suffix>."""
    return f"{zone.name}-{zone.account_id}-{suffix}"


def lock_table_name(zone: Zone, suffix: str) -> str:
    """Lock table name: <zone>-<account_id>-<suffix>."""
    return f"{zone.name}-{zone.account_id}-{suffix}"


def state_key(configuration: str) -> str:
    """Object key of the configuration's state inside the bucket."""
    return f"{configuration}/terraform.tfstate"


def build_backend(settings: Settings, zone: Zone, credentials: Credentials | None = None) -> Backend:
    """Derive the backend for a configuration deployed to zone."""
    return Backend(
        bucket=bucket_name(zone, settings.bucket_suffix),
        key=state_key(settings.configuration),
        region=settings.backend_region or zone.region,
        lock_table=lock_table_name(zone, settings.lock_suffix),
        credentials=credentials,
    )


def render_backend(backend: Backend) -> str:
    """Render the backend declaration.

    Credentials are never written to the file; backend_config_args
    passes them on the `terraform init` command line.
    """
    encrypt = "true" if backend.encrypt else "false"
    return f"""terraform {{
  backend "s3" {{
    bucket         = "{backend.bucket}"
    key            = "{backend.key}"
    region         = "{backend.region}"
    dynamodb_table = "{backend.lock_table}"
    encrypt        = {encrypt}
  }}
}}
"""


def backend_config_args(backend: Backend) -> list[str]:
    """`-backend-config` arguments carrying the injected credentials, if any."""
    if backend.credentials is None:
        return []
    creds = backend.credentials
    return [
        f"-backend-config=access_key={creds.access_key}",
        f"-backend-config=secret_key={creds.secret_key}",
        f"-backend-config=token={creds.session_token}",
    ]
