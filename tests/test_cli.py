import warnings

import httpx
import pytest
from typer.testing import CliRunner

from hrsystem.cli import keycloak as cli
from hrsystem.services.jwt_service import DEFAULT_MOCK_SECRET, mock_keycloak_payload, sign_mock_token
from hrsystem.services.keycloak_client import KeycloakClient

runner = CliRunner()


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TOKEN_URL", "http://keycloak.local/token")
    monkeypatch.setenv("CLIENT_ID", "hr-client")
    monkeypatch.setenv("USERNAME", "amy")
    monkeypatch.setenv("PASSWORD", "correct")
    monkeypatch.setenv("LOGGING_ENABLED", "false")
    return monkeypatch


def use_handler(monkeypatch, handler):
    def build(settings):
        return KeycloakClient(settings.TOKEN_URL, settings.CLIENT_ID, transport=httpx.MockTransport(handler))
    monkeypatch.setattr(cli, "build_client", build)


def keycloak(request):
    body = request.content.decode()
    if "password=correct" in body:
        token = sign_mock_token(mock_keycloak_payload(username="amy", roles=["employee"]))
        return httpx.Response(200, json={"access_token": token, "token_type": "Bearer", "expires_in": 300})
    if "grant_type" not in body:
        return httpx.Response(400, json={"error": "invalid_request"})
    return httpx.Response(401, json={"error": "invalid_grant", "error_description": "Invalid user credentials"})


def test_login_prints_claims(env):
    use_handler(env, keycloak)
    result = runner.invoke(cli.app, ["login"])
    assert result.exit_code == 0, result.output
    assert "Login succeeded" in result.output
    assert "employee" in result.output


def test_login_wrong_password_exits_1(env):
    use_handler(env, keycloak)
    result = runner.invoke(cli.app, ["login", "--password", "wrong"])
    assert result.exit_code == 1
    assert "invalid_grant" in result.output


def test_login_missing_config_exits_1(env):
    env.delenv("TOKEN_URL")
    result = runner.invoke(cli.app, ["login"])
    assert result.exit_code == 1
    assert "TOKEN_URL" in result.output


def test_login_unreachable_exits_1(env):
    def down(request):
        raise httpx.ConnectError("refused", request=request)

    use_handler(env, down)
    result = runner.invoke(cli.app, ["login"])
    assert result.exit_code == 1
    assert "unavailable" in result.output


def test_mock_token(env):
    result = runner.invoke(cli.app, ["mock-token", "--username", "bob", "--role", "admin"])
    assert result.exit_code == 0, result.output
    assert "bob" in result.output
    assert "admin" in result.output


def test_probe_passes(env):
    use_handler(env, keycloak)
    result = runner.invoke(cli.app, ["probe"])
    assert result.exit_code == 0, result.output
    assert "FAIL" not in result.output


def test_probe_fails_against_permissive_server(env):
    use_handler(env, lambda request: httpx.Response(200, json={"access_token": "t"}))
    result = runner.invoke(cli.app, ["probe"])
    assert result.exit_code == 1


def test_login_with_opaque_access_token_reports_decode_failure(env):
    use_handler(env, lambda request: httpx.Response(200, json={"access_token": "opaque-token"}))
    result = runner.invoke(cli.app, ["login"])
    assert result.exit_code == 0, result.output
    assert "Login succeeded" in result.output
    assert "Failed to decode JWT token" in result.output


def test_login_prints_full_claim_set(env):
    def handler(request):
        payload = mock_keycloak_payload(username="amy", roles=["employee"])
        payload.update({"given_name": "Amy", "family_name": "Chen", "iat": 1761609600, "exp": 1761609900})
        return httpx.Response(200, json={
            "access_token": sign_mock_token(payload),
            "refresh_token": "refresh-token-value",
            "expires_in": 300,
        })

    use_handler(env, handler)
    result = runner.invoke(cli.app, ["login"])
    assert result.exit_code == 0, result.output
    assert "refresh_token: refresh-token-value" in result.output
    assert "HS256" in result.output
    assert "Amy" in result.output
    assert "Chen" in result.output
    assert "2025-10-28 00:00:00 UTC" in result.output


def test_mock_token_default_secret_is_long_enough(env):
    assert len(DEFAULT_MOCK_SECRET.encode()) >= 32
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        result = runner.invoke(cli.app, ["mock-token"])
    assert result.exit_code == 0, result.output
    assert not [w for w in caught if w.category.__name__ == "InsecureKeyLengthWarning"]
