"""Tests for operations/credentials.py - Vault issued credentials."""

import json

import pytest
from moto import mock_aws

from tf_cli.lib.errors import (
    CommandFailedError,
    CredentialAccountMismatchError,
    CredentialIssueError,
)
from tf_cli.lib.result import Err, Ok, unwrap
from tf_cli.models import Credentials, Zone
from tf_cli.operations.credentials import (
    issue_credentials,
    parse_credentials,
    vault_address,
    verify_account,
)

from .conftest import ACCOUNT_ID, VAULT_RESPONSE

ZONE = Zone(
    name="client1",
    domain_name="client1.caascad.com",
    account_id=ACCOUNT_ID,
    region="eu-west-3",
)

EXPECTED = Credentials(
    access_key="AKIATESTACCESSKEY",
    secret_key="test-secret-key",
    session_token="test-session-token",
)


class TestParse:
    """Parsing `vault read -format=json` output."""

    def test_parse(self) -> None:
        result = parse_credentials("https://vault", json.dumps(VAULT_RESPONSE))
        assert result == Ok(EXPECTED)

    def test_invalid_json(self) -> None:
        match parse_credentials("https://vault", "Error reading aws/sts/terraform"):
            case Err(CredentialIssueError(addr, reason)):
                assert addr == "https://vault"
                assert "invalid JSON" in reason
            case other:
                pytest.fail(f"unexpected {other}")

    def test_missing_field(self) -> None:
        output = json.dumps({"data": {"access_key": "AK"}})
        assert isinstance(parse_credentials("https://vault", output), Err)


class TestIssue:
    """Requesting credentials from Vault."""

    def test_vault_address_derived_from_zone(self, make_settings) -> None:
        assert vault_address(make_settings(), ZONE) == "https://vault.client1.caascad.com"

    def test_vault_address_override(self, make_settings) -> None:
        settings = make_settings(vault_addr="https://vault.example")
        assert vault_address(settings, ZONE) == "https://vault.example"

    def test_issue(self, make_settings, fake_process) -> None:
        result = issue_credentials(make_settings(vault_enabled=True), ZONE)

        assert result == Ok(EXPECTED)
        assert fake_process.calls == [["vault", "read", "-format=json", "aws/sts/terraform"]]
        assert fake_process.envs[0]["VAULT_ADDR"] == "https://vault.client1.caascad.com"

    def test_issue_custom_path(self, make_settings, fake_process) -> None:
        unwrap(issue_credentials(make_settings(vault_sts_path="aws/sts/admin"), ZONE))
        assert fake_process.calls[0][-1] == "aws/sts/admin"

    def test_issue_is_not_cached(self, make_settings, fake_process) -> None:
        settings = make_settings()
        unwrap(issue_credentials(settings, ZONE))
        unwrap(issue_credentials(settings, ZONE))
        assert len(fake_process.commands("vault")) == 2

    def test_vault_failure(self, make_settings, fake_process) -> None:
        fake_process.failures["vault"] = 2

        result = issue_credentials(make_settings(), ZONE)

        assert isinstance(result, Err)
        assert isinstance(result.error, CommandFailedError)
        assert result.error.returncode == 2


class TestVerifyAccount:
    """STS account check of issued credentials."""

    def test_matching_account(self, aws_credentials) -> None:
        with mock_aws():
            assert verify_account(EXPECTED, ZONE) == Ok(None)

    def test_mismatching_account(self, aws_credentials) -> None:
        other = Zone(
            name="client9",
            domain_name="client9.caascad.com",
            account_id="999999999999",
            region="eu-west-3",
        )
        with mock_aws():
            result = verify_account(EXPECTED, other)

        assert result == Err(CredentialAccountMismatchError("999999999999", ACCOUNT_ID))

    def test_issue_with_verification(self, make_settings, fake_process, aws_credentials) -> None:
        with mock_aws():
            result = issue_credentials(make_settings(verify_credentials=True), ZONE)
        assert result == Ok(EXPECTED)
