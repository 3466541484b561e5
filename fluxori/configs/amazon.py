"""
Amazon Selling Partner API configuration.

Login With Amazon (LWA) credentials, regional endpoint selection and
request tuning for the SP-API client.

Dependencies: pydantic, pydantic_settings
System role: Marketplace client configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from fluxori.configs.base import BaseSettings

SP_API_ENDPOINTS = {
    "na": "https://sellingpartnerapi-na.amazon.com",
    "eu": "https://sellingpartnerapi-eu.amazon.com",
    "fe": "https://sellingpartnerapi-fe.amazon.com",
}


class AmazonSettings(BaseSettings):
    """SP-API and LWA configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AMAZON_SP_",
        case_sensitive=False,
        extra="ignore",
    )

    client_id: str = Field(default="", description="LWA application client id")
    client_secret: str = Field(default="", description="LWA application client secret")
    refresh_token: str = Field(default="", description="LWA refresh token for the seller")
    token_url: str = Field(
        default="https://api.amazon.com/auth/o2/token",
        description="LWA token endpoint",
    )
    region: str = Field(default="na", description="SP-API region (na, eu, fe)")
    marketplace_id: str = Field(
        default="ATVPDKIKX0DER",
        description="Default marketplace id used when a call omits one",
    )
    seller_id: str = Field(default="", description="Selling partner id")

    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    max_retries: int = Field(default=3, description="Retries for throttled or 5xx responses")
    max_pages: int = Field(default=10, description="Default page cap for get_all_* helpers")

    @property
    def endpoint(self) -> str:
        """
        Resolve the regional SP-API endpoint.

        Returns:
            str: Base URL for the configured region (falls back to NA)
        """
        return SP_API_ENDPOINTS.get(self.region.lower(), SP_API_ENDPOINTS["na"])
