from urllib.parse import parse_qs

import httpx
import pytest

from hrsystem.core.exceptions import IdentityProviderError, IdentityProviderUnavailable, LoginRequestError
from hrsystem.services.keycloak_client import KeycloakClient

TOKEN_URL = "http://keycloak.local/realms/hr/protocol/openid-connect/token"


def fake_keycloak(request: httpx.Request) -> httpx.Response:
    form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
    if form.get("grant_type") != "password":
        return httpx.Response(400, json={"error": "unsupported_grant_type"})
    if form.get("username") == "amy" and form.get("password") == "correct":
        return httpx.Response(200, json={
            "access_token": "header.payload.sig",
            "refresh_token": "refresh",
            "token_type": "Bearer",
            "expires_in": 300,
            "refresh_expires_in": 1800,
            "scope": "openid email profile",
        })
    return httpx.Response(401, json={"error": "invalid_grant", "error_description": "Invalid user credentials"})


def client(handler=fake_keycloak, **kwargs):
    return KeycloakClient(TOKEN_URL, "hr-client", transport=httpx.MockTransport(handler), **kwargs)


def test_password_login_success():
    tokens = client().password_login("amy", "correct")
    assert tokens.access_token == "header.payload.sig"
    assert tokens.expires_in == 300
    assert tokens.scope == "openid email profile"


def test_password_login_posts_form_encoded_grant():
    seen = {}

    def handler(request):
        seen["content_type"] = request.headers["content-type"]
        seen["form"] = parse_qs(request.content.decode())
        return fake_keycloak(request)

    client(handler, client_secret="s3cret").password_login("amy", "correct")
    assert seen["content_type"] == "application/x-www-form-urlencoded"
    assert seen["form"]["client_id"] == ["hr-client"]
    assert seen["form"]["client_secret"] == ["s3cret"]


def test_wrong_password_yields_invalid_grant():
    with pytest.raises(IdentityProviderError) as exc_info:
        client().password_login("amy", "wrong")
    error = exc_info.value
    assert error.error == "invalid_grant"
    assert error.error_description == "Invalid user credentials"
    assert error.response_status == 401
    assert error.status_code == 401
    assert error.details["error"] == "invalid_grant"


def test_non_json_error_body():
    handler = lambda request: httpx.Response(502, text="<html>Bad Gateway</html>")
    with pytest.raises(IdentityProviderError) as exc_info:
        client(handler).password_login("amy", "correct")
    assert exc_info.value.error == "http_502"


def test_network_failure_is_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(IdentityProviderUnavailable) as exc_info:
        client(handler).password_login("amy", "correct")
    assert exc_info.value.status_code == 503


def test_timeout_is_unavailable():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(IdentityProviderUnavailable):
        client(handler).password_login("amy", "correct")


def test_missing_configuration_is_request_error():
    with pytest.raises(LoginRequestError):
        KeycloakClient("", "hr-client").password_login("amy", "correct")


def test_unsupported_scheme_is_request_error():
    with pytest.raises(LoginRequestError):
        KeycloakClient("ftp://keycloak.local/token", "hr-client").password_login("amy", "correct")


def test_probe_endpoint_passes_against_sane_server():
    results = client().probe_endpoint()
    assert [passed for _, passed, _ in results] == [True, True]


def test_probe_endpoint_flags_permissive_server():
    handler = lambda request: httpx.Response(200, json={"access_token": "t"})
    results = client(handler).probe_endpoint()
    assert [passed for _, passed, _ in results] == [False, False]
