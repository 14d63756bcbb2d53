"""
Identity provider exceptions

Three failure shapes when talking to the OIDC token endpoint:
- the server answered with an error payload (e.g. invalid_grant)
- the server never answered (network error, timeout)
- the request could not be built locally (bad URL, missing config)
"""
from typing import Any, Dict, Optional

from atams.exceptions import (
    BadRequestException,
    ServiceUnavailableException,
    UnauthorizedException,
)


class IdentityProviderError(UnauthorizedException):
    """Token endpoint returned an error payload"""

    def __init__(
        self,
        error: str,
        error_description: Optional[str] = None,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        self.error = error
        self.error_description = error_description
        self.response_status = status_code
        self.payload = payload or {}
        super().__init__(
            f"Identity provider rejected the request: {error}",
            details={
                "error": error,
                "error_description": error_description,
                "status": status_code,
            },
        )


class IdentityProviderUnavailable(ServiceUnavailableException):
    """No response received from the identity provider"""


class LoginRequestError(BadRequestException):
    """Login request could not be constructed"""
