from functools import lru_cache

from pydantic import BaseModel
from atams import AtamsBaseSettings


class BpmSettings(BaseModel):
    """BPM workflow engine endpoint"""
    api_base_url: str = ""
    api_token: str = ""


class FtpSettings(BaseModel):
    """FTP attachment store"""
    host: str = ""
    port: int = 21
    username: str = ""
    password: str = ""
    upload_path: str = "/uploads/attachments/"


class OidcSettings(BaseModel):
    """OIDC identity provider (Keycloak realm)"""
    authority: str = ""
    client_id: str = ""
    client_secret: str = ""
    token_endpoint: str = "/protocol/openid-connect/token"
    userinfo_endpoint: str = "/protocol/openid-connect/userinfo"
    jwks_endpoint: str = "/protocol/openid-connect/certs"

    def _join(self, endpoint: str) -> str:
        return f"{self.authority.rstrip('/')}/{endpoint.lstrip('/')}"

    @property
    def token_url(self) -> str:
        return self._join(self.token_endpoint)

    @property
    def userinfo_url(self) -> str:
        return self._join(self.userinfo_endpoint)

    @property
    def jwks_url(self) -> str:
        return self._join(self.jwks_endpoint)


class Settings(AtamsBaseSettings):
    """
    Application Settings

    Inherits from AtamsBaseSettings which includes:
    - DATABASE_URL (required, HR store connection)
    - ATLAS_SSO_URL, ATLAS_APP_CODE, ATLAS_ENCRYPTION_KEY, ATLAS_ENCRYPTION_IV
    - LOGGING_ENABLED, LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH
    - DEBUG

    External systems are configured with flat BPM_*, FTP_* and OIDC_*
    variables and read back through the typed `bpm`, `ftp` and `oidc`
    properties.
    """
    APP_NAME: str = "HRSystemAPI"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # BPM
    BPM_API_BASE_URL: str = ""
    BPM_API_TOKEN: str = ""

    # FTP attachment store
    FTP_HOST: str = ""
    FTP_PORT: int = 21
    FTP_USERNAME: str = ""
    FTP_PASSWORD: str = ""
    FTP_UPLOAD_PATH: str = "/uploads/attachments/"

    # Keycloak OIDC
    OIDC_AUTHORITY: str = ""
    OIDC_CLIENT_ID: str = ""
    OIDC_CLIENT_SECRET: str = ""
    OIDC_TOKEN_ENDPOINT: str = "/protocol/openid-connect/token"
    OIDC_USERINFO_ENDPOINT: str = "/protocol/openid-connect/userinfo"
    OIDC_JWKS_ENDPOINT: str = "/protocol/openid-connect/certs"

    @property
    def bpm(self) -> BpmSettings:
        return BpmSettings(api_base_url=self.BPM_API_BASE_URL, api_token=self.BPM_API_TOKEN)

    @property
    def ftp(self) -> FtpSettings:
        return FtpSettings(
            host=self.FTP_HOST,
            port=self.FTP_PORT,
            username=self.FTP_USERNAME,
            password=self.FTP_PASSWORD,
            upload_path=self.FTP_UPLOAD_PATH,
        )

    @property
    def oidc(self) -> OidcSettings:
        return OidcSettings(
            authority=self.OIDC_AUTHORITY,
            client_id=self.OIDC_CLIENT_ID,
            client_secret=self.OIDC_CLIENT_SECRET,
            token_endpoint=self.OIDC_TOKEN_ENDPOINT,
            userinfo_endpoint=self.OIDC_USERINFO_ENDPOINT,
            jwks_endpoint=self.OIDC_JWKS_ENDPOINT,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
