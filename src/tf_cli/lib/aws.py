"""AWS session management.

AwsContext wraps a boto3 session built from explicit credentials, such as
the short-lived triple issued by Vault.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

import boto3

from tf_cli.models import Credentials

if TYPE_CHECKING:
    from mypy_boto3_sts import STSClient


@dataclass
class AwsContext:
    """AWS session and clients, created lazily on first access.

    Example:
        ctx = AwsContext(region="eu-west-3", credentials=creds)
        ctx.account_id
    """

    region: str
    credentials: Credentials | None = None

    @cached_property
    def session(self) -> boto3.Session:
        """Boto3 session configured with region and, if given, credentials."""
        if self.credentials is None:
            return boto3.Session(region_name=self.region)
        return boto3.Session(
            region_name=self.region,
            aws_access_key_id=self.credentials.access_key,
            aws_secret_access_key=self.credentials.secret_key,
            aws_session_token=self.credentials.session_token,
        )

    @cached_property
    def sts(self) -> STSClient:
        """STS client."""
        return self.session.client("sts")

    @cached_property
    def account_id(self) -> str:
        """AWS account ID the session's credentials belong to."""
        return self.sts.get_caller_identity()["Account"]
