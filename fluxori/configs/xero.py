"""
Xero accounting connector configuration.

OAuth application credentials and API endpoints.

Dependencies: pydantic, pydantic_settings
System role: Accounting connector configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from fluxori.configs.base import BaseSettings


class XeroSettings(BaseSettings):
    """Xero OAuth and API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="XERO_",
        case_sensitive=False,
        extra="ignore",
    )

    client_id: str = Field(default="", description="Xero OAuth client id")
    client_secret: str = Field(default="", description="Xero OAuth client secret")
    redirect_uri: str = Field(
        default="http://localhost:8000/api/v1/xero/auth/callback",
        description="OAuth callback registered with Xero",
    )
    scopes: str = Field(
        default="openid profile email offline_access accounting.transactions "
        "accounting.contacts accounting.settings",
        description="Space separated OAuth scopes",
    )
    authorize_url: str = Field(
        default="https://login.xero.com/identity/connect/authorize",
        description="Authorization endpoint",
    )
    token_url: str = Field(
        default="https://identity.xero.com/connect/token",
        description="Token endpoint",
    )
    revoke_url: str = Field(
        default="https://identity.xero.com/connect/revocation",
        description="Token revocation endpoint",
    )
    connections_url: str = Field(
        default="https://api.xero.com/connections",
        description="Tenant connections endpoint",
    )
    api_base_url: str = Field(
        default="https://api.xero.com/api.xro/2.0",
        description="Accounting API base URL",
    )
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    success_redirect_url: str = Field(
        default="/api/v1/xero/auth/success",
        description="Where the callback sends users when no redirect URL was given",
    )
