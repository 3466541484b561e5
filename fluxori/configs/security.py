"""
Security configuration settings.

Holds the symmetric key used to encrypt vendor refresh tokens at rest.

Dependencies: pydantic, pydantic_settings
System role: Secret material configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from fluxori.configs.base import BaseSettings


class SecuritySettings(BaseSettings):
    """Token encryption configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FLUXORI_",
        case_sensitive=False,
        extra="ignore",
    )

    encryption_key: str = Field(
        default="",
        description="AES-256 key: 64 hex characters or a 32 character string",
    )
