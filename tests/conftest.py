"""Shared pytest fixtures for tf tests."""

import json
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from tf_cli.lib.settings import PERSISTED_KEYS
from tf_cli.models import LOCAL_REVISION, Settings

ACCOUNT_ID = "123456789012"

ZONES = {
    "client1": {
        "domain_name": "client1.caascad.com",
        "infra": {"provider": "aws", "region": "eu-west-3", "account_id": ACCOUNT_ID},
    },
    "client2": {
        "domain_name": "client2.caascad.com",
        "infra": {"provider": "aws", "region": "eu-west-1"},
    },
    "client3": {"infra": {"account_id": ACCOUNT_ID}},
}

VAULT_RESPONSE = {
    "data": {
        "access_key": "AKIATESTACCESSKEY",
        "secret_key": "test-secret-key",
        "security_token": "test-session-token",
    }
}

ENV_KEYS = (
    *PERSISTED_KEYS,
    "TF_DEBUG",
    "TF_VAULT_ENABLED",
    "TF_BACKEND_ENABLED",
    "TF_ZONES_URL",
    "TF_BACKEND_REGION",
    "TF_BACKEND_BUCKET_SUFFIX",
    "TF_BACKEND_LOCK_SUFFIX",
    "TF_VAULT_ADDR",
    "TF_VAULT_STS_PATH",
    "TF_VERIFY_CREDENTIALS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every TF_* setting from the environment."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def library(tmp_path: Path) -> Path:
    """A local configuration library with a 'base' configuration."""
    lib = tmp_path / "library"
    base = lib / "base"
    base.mkdir(parents=True)

    (base / "main.tf").write_text('variable "environment" {}\n')
    (base / "vars.tfvars").write_text('environment = "__ENVIRONMENT__"\n')
    (base / "notes.txt").write_text("deployed to __ENVIRONMENT__\n")
    (base / "terraform.tfvars.example").write_text(
        'environment = "__ENVIRONMENT__"\ndomain = "__ENVIRONMENT__.caascad.com"\n'
    )
    (base / ".envrc.example").write_text("export TF_ENVIRONMENT=__ENVIRONMENT__\n")
    (base / "README.md").write_text("# base\n")
    (base / "modules").mkdir()
    (base / "modules" / "network.tf").write_text("# network\n")

    (lib / "other").mkdir()
    (lib / "other" / "main.tf").write_text("# other\n")
    return lib


@pytest.fixture
def zones_file(tmp_path: Path) -> Path:
    """Local zone document."""
    path = tmp_path / "zones.json"
    path.write_text(json.dumps(ZONES))
    return path


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory, also the current directory."""
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def make_settings(library: Path, zones_file: Path):
    """Factory for Settings pointing at the local library and zone document."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "configuration": "base",
            "environment": "client1",
            "lib_url": str(library),
            "git_revision": LOCAL_REVISION,
            "vault_enabled": False,
            "zones_url": str(zones_file),
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@dataclass
class FakeProcess:
    """Stand-in for subprocess.run recording every external command.

    - `git reset` populates the checkout from git_source
    - `terraform init` creates .terraform in its cwd
    - `vault read` prints VAULT_RESPONSE
    """

    available: set[str] = field(default_factory=lambda: {"git", "terraform", "vault"})
    failures: dict[str, int] = field(default_factory=dict)
    git_source: Path | None = None
    calls: list[list[str]] = field(default_factory=list)
    cwds: list[Path | None] = field(default_factory=list)
    envs: list[dict[str, str] | None] = field(default_factory=list)

    def which(self, binary: str) -> str | None:
        return f"/usr/bin/{binary}" if binary in self.available else None

    def run(
        self,
        cmd: list[str],
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
        text: bool = True,
        check: bool = False,
    ) -> subprocess.CompletedProcess:
        self.calls.append(list(cmd))
        self.cwds.append(cwd)
        self.envs.append(env)

        returncode = self.failures.get(cmd[0], 0)
        stdout = ""
        if returncode == 0:
            stdout = self._effect(cmd, cwd)

        return subprocess.CompletedProcess(
            cmd,
            returncode,
            stdout=stdout if capture_output else None,
            stderr=("boom" if returncode else "") if capture_output else None,
        )

    def _effect(self, cmd: list[str], cwd: Path | None) -> str:
        if cmd[:2] == ["git", "reset"] and self.git_source is not None and cwd is not None:
            shutil.copytree(self.git_source, cwd, dirs_exist_ok=True)
        if cmd[:2] == ["terraform", "init"] and cwd is not None:
            (Path(cwd) / ".terraform").mkdir(exist_ok=True)
        if cmd[:2] == ["vault", "read"]:
            return json.dumps(VAULT_RESPONSE)
        return ""

    def commands(self, binary: str) -> list[list[str]]:
        """Recorded commands for one binary."""
        return [c for c in self.calls if c[0] == binary]


@pytest.fixture
def fake_process(monkeypatch: pytest.MonkeyPatch) -> FakeProcess:
    """Patch external command execution with a FakeProcess."""
    fake = FakeProcess()
    monkeypatch.setattr("tf_cli.lib.process.which", fake.which)
    monkeypatch.setattr("tf_cli.lib.process.subprocess.run", fake.run)
    return fake


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-3")
