"""
Auth Schemas for identity-provider login and HR account status
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field, computed_field

from hrsystem.schemas.common import CamelModel

# tb_usermain.uwork
STATUS_ACTIVE = "W"
STATUS_SUSPENDED = "S"
STATUS_BANNED = "X"


class _AccountStatusMixin(CamelModel):
    """isActive is always derived from status"""
    status: str = ""

    @computed_field(alias="isActive")
    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class LoginResponse(_AccountStatusMixin):
    token_id: str = ""  # nn + HHmmss + nn
    access_token: str = ""
    refresh_token: str = ""
    expires_in: int = 0
    uid: str = ""  # EMPLOYEE_NO
    employee_no: str = ""
    employee_name: str = ""
    email: str = ""


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class UserInfo(_AccountStatusMixin):
    uid: str = ""
    employee_no: str = ""
    employee_name: str = ""
    email: str = ""
    company_name: Optional[str] = None
    department_name: Optional[str] = None
    job_title: Optional[str] = None


class EmployeeStatusResponse(_AccountStatusMixin):
    uid: str = ""
    status_name: str = ""


class TokenValidationRequest(CamelModel):
    token_id: str = Field(min_length=1)


class TokenResponse(BaseModel):
    """OIDC token endpoint response (snake_case on the wire)"""
    access_token: str
    refresh_token: Optional[str] = None
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    refresh_expires_in: Optional[int] = None
    scope: Optional[str] = None


class TokenClaims(BaseModel):
    """User-facing claims carried by a Keycloak access token"""
    sub: Optional[str] = None
    email: Optional[str] = None
    preferred_username: Optional[str] = None
    name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    roles: List[str] = Field(default_factory=list)
    iat: Optional[int] = None
    exp: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TokenClaims":
        realm_access = payload.get("realm_access") or {}
        return cls(
            sub=payload.get("sub"),
            email=payload.get("email"),
            preferred_username=payload.get("preferred_username"),
            name=payload.get("name"),
            given_name=payload.get("given_name"),
            family_name=payload.get("family_name"),
            roles=list(realm_access.get("roles") or []),
            iat=payload.get("iat"),
            exp=payload.get("exp"),
        )
