"""
Keycloak password-grant demo CLI

    hrsystem-keycloak login      # real login, prints tokens and claims
    hrsystem-keycloak mock-token # signed HS256 token, no server needed
    hrsystem-keycloak probe      # checks the token endpoint rejects bad requests

Configuration comes from the environment or a .env file:
TOKEN_URL, CLIENT_ID, USERNAME, PASSWORD and optionally REALM.
"""
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import typer
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console
from rich.table import Table

from hrsystem.core.config import OidcSettings
from hrsystem.core.exceptions import (
    IdentityProviderError,
    IdentityProviderUnavailable,
    LoginRequestError,
)
from hrsystem.schemas.auth import TokenClaims
from hrsystem.services.jwt_service import (
    DEFAULT_MOCK_SECRET,
    OidcTokenService,
    mock_keycloak_payload,
    sign_mock_token,
)
from hrsystem.services.keycloak_client import KeycloakClient
from atams.exceptions import BadRequestException
from atams.logging import get_logger, setup_logging_from_settings

app = typer.Typer(help="Keycloak password-grant demo tools", no_args_is_help=True)
console = Console()
logger = get_logger(__name__)


class KeycloakLoginSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    TOKEN_URL: str = ""
    CLIENT_ID: str = ""
    CLIENT_SECRET: str = ""
    USERNAME: str = ""
    PASSWORD: str = ""
    REALM: str = ""

    DEBUG: bool = False
    LOGGING_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/hrsystem-keycloak.log"

    def missing(self, *names: str) -> List[str]:
        return [name for name in names if not getattr(self, name)]


def load_settings() -> KeycloakLoginSettings:
    settings = KeycloakLoginSettings()
    setup_logging_from_settings(settings)
    return settings


def build_client(settings: KeycloakLoginSettings) -> KeycloakClient:
    return KeycloakClient(
        settings.TOKEN_URL,
        settings.CLIENT_ID,
        client_secret=settings.CLIENT_SECRET or None,
    )


def _require(settings: KeycloakLoginSettings, *names: str) -> None:
    missing = settings.missing(*names)
    if missing:
        console.print(f"[red]Missing configuration:[/red] {', '.join(missing)}")
        raise typer.Exit(code=1)


def _timestamp(value: Optional[int]) -> str:
    if value is None:
        return ""
    return datetime.fromtimestamp(value, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _print_claims(claims: TokenClaims, header: Dict[str, Any]) -> None:
    console.print(f"JWT header: {json.dumps(header)}")
    table = Table(title="Token claims (unverified)")
    table.add_column("Claim")
    table.add_column("Value")
    table.add_row("sub", claims.sub or "")
    table.add_row("email", claims.email or "")
    table.add_row("preferred_username", claims.preferred_username or "")
    table.add_row("name", claims.name or "")
    table.add_row("given_name", claims.given_name or "")
    table.add_row("family_name", claims.family_name or "")
    table.add_row("roles", ", ".join(claims.roles))
    table.add_row("iat", _timestamp(claims.iat))
    table.add_row("exp", _timestamp(claims.exp))
    console.print(table)


def _show_token(service: OidcTokenService, token: str) -> bool:
    """Print header and claims; False when the token is not a JWT"""
    try:
        header = service.header_unverified(token)
        claims = service.decode_unverified(token)
    except BadRequestException as e:
        logger.error(f"Failed to decode JWT token: {e.message}")
        console.print(f"[yellow]Failed to decode JWT token:[/yellow] {e.message}")
        return False
    _print_claims(claims, header)
    return True


@app.command()
def login(
    username: Optional[str] = typer.Option(None, help="Overrides USERNAME"),
    password: Optional[str] = typer.Option(None, help="Overrides PASSWORD"),
):
    """Log in with the resource-owner password grant."""
    settings = load_settings()
    if username:
        settings.USERNAME = username
    if password:
        settings.PASSWORD = password
    _require(settings, "TOKEN_URL", "CLIENT_ID", "USERNAME", "PASSWORD")

    if settings.REALM:
        console.print(f"Realm: {settings.REALM}")
    console.print(f"POST {settings.TOKEN_URL}")

    try:
        tokens = build_client(settings).password_login(settings.USERNAME, settings.PASSWORD)
    except IdentityProviderError as e:
        logger.error(f"Login rejected: {e.error}", extra={'extra_data': e.details})
        console.print(f"[red]Login failed:[/red] {e.error} {e.error_description or ''}")
        raise typer.Exit(code=1)
    except IdentityProviderUnavailable as e:
        logger.error(e.message, extra={'extra_data': e.details})
        console.print(f"[red]Identity provider unavailable:[/red] {e.details.get('reason', '')}")
        raise typer.Exit(code=1)
    except LoginRequestError as e:
        logger.error(e.message, extra={'extra_data': e.details})
        console.print(f"[red]Bad login request:[/red] {e.message}")
        raise typer.Exit(code=1)

    console.print("[green]Login succeeded[/green]")
    console.print(f"token_type: {tokens.token_type}")
    console.print(f"expires_in: {tokens.expires_in}")
    console.print(f"refresh_expires_in: {tokens.refresh_expires_in}")
    console.print(f"scope: {tokens.scope}")
    console.print(f"access_token: {tokens.access_token[:40]}...")
    if tokens.refresh_token:
        console.print(f"refresh_token: {tokens.refresh_token[:40]}...")

    _show_token(OidcTokenService(OidcSettings(client_id=settings.CLIENT_ID)), tokens.access_token)


@app.command("mock-token")
def mock_token(
    secret: str = typer.Option(DEFAULT_MOCK_SECRET, help="HS256 signing secret, at least 32 bytes"),
    username: str = typer.Option("test.user"),
    email: str = typer.Option("test.user@example.com"),
    role: List[str] = typer.Option(["user"], help="Realm role, repeatable"),
):
    """Sign a Keycloak-shaped token locally."""
    token = sign_mock_token(mock_keycloak_payload(username=username, email=email, roles=role), secret)
    console.print(token)
    _show_token(OidcTokenService(OidcSettings()), token)


@app.command()
def probe():
    """Check the token endpoint rejects empty and fake logins."""
    settings = load_settings()
    _require(settings, "TOKEN_URL", "CLIENT_ID")

    try:
        results = build_client(settings).probe_endpoint()
    except (IdentityProviderUnavailable, LoginRequestError) as e:
        logger.error(e.message, extra={'extra_data': e.details})
        console.print(f"[red]Probe aborted:[/red] {e.message}")
        raise typer.Exit(code=1)

    table = Table(title=f"Probe {settings.TOKEN_URL}")
    table.add_column("Check")
    table.add_column("Result")
    table.add_column("Detail")
    for name, passed, detail in results:
        table.add_row(name, "[green]PASS[/green]" if passed else "[red]FAIL[/red]", detail)
    console.print(table)

    if not all(passed for _, passed, _ in results):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
