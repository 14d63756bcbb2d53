"""
Keycloak Client - Resource-owner password grant against an OIDC token endpoint
"""
from typing import Any, Dict, List, Optional, Tuple

import httpx

from hrsystem.core.exceptions import (
    IdentityProviderError,
    IdentityProviderUnavailable,
    LoginRequestError,
)
from hrsystem.schemas.auth import TokenResponse
from atams.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0
FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


class KeycloakClient:
    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self.transport)

    def _post_form(self, data: Dict[str, str]) -> httpx.Response:
        """
        POST a form body to the token endpoint

        Raises:
            LoginRequestError: If the request cannot be built
            IdentityProviderUnavailable: If no response arrives
        """
        if not self.token_url or not self.client_id:
            raise LoginRequestError(
                "Token URL and client id must be configured",
                details={"token_url": self.token_url, "client_id": self.client_id}
            )
        try:
            with self._client() as client:
                return client.post(self.token_url, data=data, headers=FORM_HEADERS)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise LoginRequestError(f"Invalid token URL: {str(e)}", details={"token_url": self.token_url})
        except httpx.TransportError as e:
            logger.error(
                f"Identity provider unreachable: {str(e)}",
                extra={'extra_data': {'token_url': self.token_url, 'error_type': type(e).__name__}}
            )
            raise IdentityProviderUnavailable(
                "Identity provider did not respond",
                details={"token_url": self.token_url, "reason": str(e)}
            )

    @staticmethod
    def _error_payload(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {"error": f"http_{response.status_code}", "error_description": response.text[:200]}
        if not isinstance(body, dict):
            return {"error": f"http_{response.status_code}"}
        return body

    def password_login(self, username: str, password: str) -> TokenResponse:
        """
        Exchange username/password for tokens

        Raises:
            IdentityProviderError: Token endpoint answered with an error payload
            IdentityProviderUnavailable: No response from the token endpoint
            LoginRequestError: Request could not be constructed
        """
        data = {
            "grant_type": "password",
            "client_id": self.client_id,
            "username": username,
            "password": password,
        }
        if self.client_secret:
            data["client_secret"] = self.client_secret

        response = self._post_form(data)
        if response.is_success:
            try:
                tokens = TokenResponse.model_validate(response.json())
            except ValueError as e:
                raise IdentityProviderError(
                    "invalid_response",
                    f"Unexpected token response: {str(e)}",
                    status_code=response.status_code,
                )
            logger.info(
                f"Password login succeeded for {username}",
                extra={'extra_data': {'expires_in': tokens.expires_in, 'scope': tokens.scope}}
            )
            return tokens

        body = self._error_payload(response)
        logger.warning(
            f"Password login rejected for {username}",
            extra={'extra_data': {'status': response.status_code, 'error': body.get("error")}}
        )
        raise IdentityProviderError(
            body.get("error") or f"http_{response.status_code}",
            body.get("error_description"),
            status_code=response.status_code,
            payload=body,
        )

    def probe_endpoint(self) -> List[Tuple[str, bool, str]]:
        """
        Smoke-check the token endpoint without real credentials

        Returns:
            list of (check name, passed, detail)
        """
        results: List[Tuple[str, bool, str]] = []

        response = self._post_form({})
        results.append((
            "empty body is rejected",
            response.status_code in (400, 401),
            f"HTTP {response.status_code}",
        ))

        try:
            self.password_login("probe-invalid-user", "probe-invalid-password")
            results.append(("fake credentials are rejected", False, "login unexpectedly succeeded"))
        except IdentityProviderError as e:
            results.append(("fake credentials are rejected", e.error == "invalid_grant", e.error))
        return results
