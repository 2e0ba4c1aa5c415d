from __future__ import annotations

import sys
from pathlib import Path

import pytest
import respx
from typer.testing import CliRunner


# Ensure the repository-local ``src`` directory is importable when the project is
# not installed as a package.
SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from sonarcx.client import SonarCloudClient  # noqa: E402

API = "https://sonarcloud.io/api"


@pytest.fixture
def token() -> str:
    return "secret-token"


@pytest.fixture
def client(token):
    with SonarCloudClient(token) as sonar:
        yield sonar


@pytest.fixture
def respx_mock():
    with respx.mock(assert_all_called=False) as respx_mgr:
        yield respx_mgr


@pytest.fixture
def cli_runner(monkeypatch):
    """Provide a CLI runner with a dummy token and no inherited SonarCloud env."""

    for name in (
        "SONARCLOUD_HOST",
        "SONARCLOUD_API",
        "SONARCLOUD_TIMEOUT",
        "SONARCLOUD_ORGANIZATION",
        "SONARCLOUD_KEY_PREFIX",
        "SONARCLOUD_INSECURE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SONARCLOUD_TOKEN", "test-token")
    return CliRunner()
