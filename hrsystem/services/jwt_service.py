"""
JWT Service for Keycloak access tokens
"""
import jwt
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from hrsystem.core.config import OidcSettings
from hrsystem.schemas.auth import TokenClaims
from atams.exceptions import BadRequestException, UnauthorizedException
from atams.logging import get_logger

logger = get_logger(__name__)

MOCK_ALGORITHM = "HS256"
# HS256 keys shorter than 32 bytes trigger InsecureKeyLengthWarning
DEFAULT_MOCK_SECRET = "hrsystem-local-dev-mock-signing-secret"


class OidcTokenService:
    def __init__(self, oidc: OidcSettings, jwks_client: Optional[jwt.PyJWKClient] = None) -> None:
        self.oidc = oidc
        self.algorithms = ["RS256"]
        self._jwks_client = jwks_client

    @property
    def jwks_client(self) -> jwt.PyJWKClient:
        if self._jwks_client is None:
            self._jwks_client = jwt.PyJWKClient(self.oidc.jwks_url)
        return self._jwks_client

    def decode_unverified(self, token: str) -> TokenClaims:
        """
        Read claims without checking the signature

        Only for debugging and display. Never trust the result for authorization.

        Raises:
            BadRequestException: If token is not a well-formed JWT
        """
        logger.warning("Decoding access token without signature verification")
        try:
            payload = jwt.decode(
                token,
                options={"verify_signature": False, "verify_exp": False}
            )
        except jwt.InvalidTokenError as e:
            raise BadRequestException(f"Invalid token format: {str(e)}")
        return TokenClaims.from_payload(payload)

    def header_unverified(self, token: str) -> Dict[str, Any]:
        """
        JOSE header (alg, typ, kid) of a token

        Raises:
            BadRequestException: If token is not a well-formed JWT
        """
        try:
            return jwt.get_unverified_header(token)
        except jwt.InvalidTokenError as e:
            raise BadRequestException(f"Invalid token format: {str(e)}")

    def verify(self, token: str) -> TokenClaims:
        """
        Verify signature, expiry, audience and issuer against the realm JWKS

        Raises:
            UnauthorizedException: If token is invalid or expired
        """
        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=self.algorithms,
                audience=self.oidc.client_id,
                issuer=self.oidc.authority.rstrip("/"),
                options={"require": ["exp", "iat", "sub"]}
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedException("Token expired")
        except jwt.PyJWKClientError as e:
            raise UnauthorizedException(f"Unable to resolve signing key: {str(e)}")
        except jwt.InvalidTokenError as e:
            raise UnauthorizedException(f"Invalid token: {str(e)}")

        claims = TokenClaims.from_payload(payload)
        logger.info(
            "Access token verified",
            extra={'extra_data': {'sub': claims.sub, 'roles': claims.roles}}
        )
        return claims


def mock_keycloak_payload(
    username: str = "test.user",
    email: str = "test.user@example.com",
    roles: Optional[List[str]] = None,
    issuer: str = "http://localhost:8080/realms/hr",
    audience: str = "hr-client",
    lifetime: int = 300,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Claims shaped like a Keycloak password-grant access token"""
    now = now or datetime.now(timezone.utc)
    return {
        "iss": issuer,
        "aud": audience,
        "sub": f"mock-{username}",
        "typ": "Bearer",
        "azp": audience,
        "preferred_username": username,
        "email": email,
        "name": username,
        "realm_access": {"roles": roles if roles is not None else ["user"]},
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=lifetime)).timestamp()),
    }


def sign_mock_token(payload: Dict[str, Any], secret: str = DEFAULT_MOCK_SECRET) -> str:
    return jwt.encode(payload, secret, algorithm=MOCK_ALGORITHM)
