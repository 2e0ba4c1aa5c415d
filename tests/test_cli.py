from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest

from sonarcx.cli import app
from sonarcx.config import ClientSettings
from sonarcx.errors import BadRequestError, TransportError
from sonarcx.models import Metric, NewProject

SVG = "<svg>badge</svg>"


class StubSonarCloudClient:
    def __init__(self, responses: dict[str, object] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[str, tuple[object, ...]]] = []
        self.key_prefix = "PavedRoad_"

    def _reply(self, name: str, *args: object) -> httpx.Response:
        self.calls.append((name, args))
        result = self.responses[name]
        if isinstance(result, Exception):
            raise result
        return result  # type: ignore[return-value]

    def project_key(self, key: str) -> str:
        return self.key_prefix + key

    def get_project(self, organization: str, key: str) -> httpx.Response:
        return self._reply("get_project", organization, key)

    def create_project(self, project: NewProject) -> httpx.Response:
        return self._reply("create_project", project)

    def delete_project(self, key: str) -> httpx.Response:
        return self._reply("delete_project", key)

    def get_tokens(self, login: str = "") -> httpx.Response:
        return self._reply("get_tokens", login)

    def create_token(self, name: str) -> httpx.Response:
        return self._reply("create_token", name)

    def revoke_token(self, name: str) -> httpx.Response:
        return self._reply("revoke_token", name)

    def get_metric(self, metric: Metric, project: str, branch: str = "") -> httpx.Response:
        return self._reply("get_metric", metric, project, branch)

    def get_quality_gate(self, project: str, branch: str = "") -> httpx.Response:
        return self._reply("get_quality_gate", project, branch)

    def close(self) -> None:
        pass


def invoke(cli_runner, args: list[str], stub: StubSonarCloudClient, **obj):
    return cli_runner.invoke(app, args, obj={"client": stub, **obj})


def test_project_show_lists_components(cli_runner) -> None:
    stub = StubSonarCloudClient(
        {
            "get_project": httpx.Response(
                200,
                json={
                    "components": [
                        {"key": "PavedRoad_test123", "name": "Test", "organization": "acme-demo"}
                    ]
                },
            )
        }
    )

    result = invoke(cli_runner, ["project", "show", "PavedRoad_test123", "--org", "acme-demo"], stub)

    assert result.exit_code == 0, result.stdout
    assert "PavedRoad_test123" in result.stdout
    assert "never analysed" in result.stdout
    assert stub.calls == [("get_project", ("acme-demo", "PavedRoad_test123"))]


def test_project_show_uses_organization_from_env(cli_runner, monkeypatch) -> None:
    monkeypatch.setenv("SONARCLOUD_ORGANIZATION", "from-env")
    stub = StubSonarCloudClient({"get_project": httpx.Response(200, json={"components": []})})

    result = invoke(cli_runner, ["project", "show", "missing"], stub)

    assert result.exit_code == 0
    assert "No project 'missing'" in result.stdout
    assert stub.calls[0][1][0] == "from-env"


def test_project_show_without_organization_fails(cli_runner) -> None:
    stub = StubSonarCloudClient()

    result = invoke(cli_runner, ["project", "show", "demo"], stub)

    assert result.exit_code != 0
    assert stub.calls == []


def test_project_create_prints_key(cli_runner) -> None:
    stub = StubSonarCloudClient(
        {
            "create_project": httpx.Response(
                200, json={"project": {"key": "PavedRoad_test123", "visibility": "private"}}
            )
        }
    )

    result = invoke(
        cli_runner,
        ["project", "create", "test123", "--name", "Test", "--org", "acme-demo", "--visibility", "private"],
        stub,
    )

    assert result.exit_code == 0, result.stdout
    assert "PavedRoad_test123" in result.stdout
    payload = stub.calls[0][1][0]
    assert isinstance(payload, NewProject)
    assert payload.visibility == "private"
    assert payload.project == "test123"


def test_project_create_reports_bad_request(cli_runner) -> None:
    stub = StubSonarCloudClient(
        {"create_project": BadRequestError("key already exists")}
    )

    result = invoke(
        cli_runner, ["project", "create", "test123", "--name", "Test", "--org", "acme-demo"], stub
    )

    assert result.exit_code == 1
    assert "already exists" in result.stdout
    assert "Traceback" not in result.stdout


def test_project_delete_requires_confirmation(cli_runner) -> None:
    stub = StubSonarCloudClient({"delete_project": httpx.Response(204)})

    declined = cli_runner.invoke(
        app, ["project", "delete", "test123"], input="n\n", obj={"client": stub}
    )
    assert declined.exit_code == 1
    assert stub.calls == []

    accepted = invoke(cli_runner, ["project", "delete", "test123", "--yes"], stub)
    assert accepted.exit_code == 0
    assert "PavedRoad_test123" in accepted.stdout
    assert stub.calls == [("delete_project", ("test123",))]


def test_token_list(cli_runner) -> None:
    stub = StubSonarCloudClient(
        {
            "get_tokens": httpx.Response(
                200,
                json={
                    "login": "alice",
                    "userTokens": [{"name": "ci", "createdAt": "2020-01-01T00:00:00+0000"}],
                },
            )
        }
    )

    result = invoke(cli_runner, ["token", "list", "--login", "alice"], stub)

    assert result.exit_code == 0
    assert "ci" in result.stdout
    assert "last used=never" in result.stdout
    assert stub.calls == [("get_tokens", ("alice",))]


def test_token_create_prints_secret(cli_runner) -> None:
    stub = StubSonarCloudClient(
        {"create_token": httpx.Response(200, json={"name": "ci", "token": "s3cr3t"})}
    )

    result = invoke(cli_runner, ["token", "create", "ci"], stub)

    assert result.exit_code == 0
    assert "s3cr3t" in result.stdout


def test_token_revoke_unexpected_status(cli_runner) -> None:
    stub = StubSonarCloudClient({"revoke_token": httpx.Response(401, text="Unauthorized")})

    result = invoke(cli_runner, ["token", "revoke", "ci"], stub)

    assert result.exit_code == 1
    assert "HTTP 401" in result.stdout


def test_transport_error_is_friendly(cli_runner) -> None:
    stub = StubSonarCloudClient({"get_tokens": TransportError("connection refused")})

    result = invoke(cli_runner, ["token", "list"], stub)

    assert result.exit_code == 1
    assert "Unable to reach SonarCloud" in result.stdout


def test_badge_metric_to_stdout(cli_runner) -> None:
    stub = StubSonarCloudClient({"get_metric": httpx.Response(200, text=SVG)})

    result = invoke(
        cli_runner, ["badge", "metric", "PavedRoad_x", "code-smells", "--branch", "dev"], stub
    )

    assert result.exit_code == 0
    assert result.stdout.startswith("<svg")
    assert stub.calls == [("get_metric", (Metric.CODE_SMELLS, "PavedRoad_x", "dev"))]


def test_badge_metric_rejects_unknown_metric(cli_runner) -> None:
    stub = StubSonarCloudClient()

    result = invoke(cli_runner, ["badge", "metric", "PavedRoad_x", "lines"], stub)

    assert result.exit_code != 0
    assert stub.calls == []


def test_badge_quality_gate_to_file(cli_runner, tmp_path) -> None:
    stub = StubSonarCloudClient({"get_quality_gate": httpx.Response(200, text=SVG)})
    target = tmp_path / "gate.svg"

    result = invoke(
        cli_runner, ["badge", "quality-gate", "PavedRoad_x", "--output", str(target)], stub
    )

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == SVG


def test_missing_token_guidance(cli_runner, monkeypatch) -> None:
    monkeypatch.delenv("SONARCLOUD_TOKEN", raising=False)

    result = cli_runner.invoke(app, ["token", "list"])

    assert result.exit_code == 1
    assert "token is required" in result.stdout
    assert "SONARCLOUD_TOKEN" in result.stdout


def test_global_options_override_settings(cli_runner, respx_mock) -> None:
    route = respx_mock.post(host="sonar.example", path="/api/user_tokens/revoke").mock(
        return_value=httpx.Response(204)
    )

    result = cli_runner.invoke(
        app, ["--token", "cli-token", "--host", "sonar.example", "token", "revoke", "ci"]
    )

    assert result.exit_code == 0, result.stdout
    request = route.calls.last.request
    assert parse_qs(request.content.decode()) == {"name": ["ci"]}
    assert request.url.host == "sonar.example"


def test_invalid_timeout_env(cli_runner, monkeypatch) -> None:
    monkeypatch.setenv("SONARCLOUD_TIMEOUT", "abc")

    result = cli_runner.invoke(app, ["token", "list"])

    assert result.exit_code == 1
    assert "SONARCLOUD_TIMEOUT" in result.stdout


def test_settings_from_obj_are_respected(cli_runner) -> None:
    stub = StubSonarCloudClient({"get_project": httpx.Response(200, json={"components": []})})
    settings = ClientSettings(token="t", organization="preset-org")

    result = invoke(cli_runner, ["project", "show", "k"], stub, settings=settings)

    assert result.exit_code == 0
    assert stub.calls[0][1][0] == "preset-org"


def test_project_create_rejects_unknown_visibility(cli_runner) -> None:
    stub = StubSonarCloudClient()

    result = invoke(
        cli_runner,
        ["project", "create", "x", "--name", "X", "--org", "acme-demo", "--visibility", "internal"],
        stub,
    )

    assert result.exit_code != 0
    assert stub.calls == []


@pytest.mark.parametrize("value", ["0", "-5"])
def test_non_positive_timeout_option_is_rejected(cli_runner, value: str) -> None:
    stub = StubSonarCloudClient({"get_tokens": httpx.Response(200, json={"userTokens": []})})

    result = invoke(cli_runner, ["--timeout", value, "token", "list"], stub)

    assert result.exit_code == 1
    assert "--timeout must be positive" in result.stdout
    assert stub.calls == []


def test_timeout_option_reaches_settings(cli_runner) -> None:
    stub = StubSonarCloudClient({"get_tokens": httpx.Response(200, json={"userTokens": []})})
    obj: dict[str, object] = {"client": stub}

    result = cli_runner.invoke(app, ["--timeout", "2.5", "token", "list"], obj=obj)

    assert result.exit_code == 0
    settings = obj["settings"]
    assert isinstance(settings, ClientSettings)
    assert settings.timeout == 2.5
