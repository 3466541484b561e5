"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from fluxori.configs.amazon import AmazonSettings
from fluxori.configs.base import BaseSettings
from fluxori.configs.database import DatabaseSettings
from fluxori.configs.security import SecuritySettings
from fluxori.configs.xero import XeroSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    amazon: AmazonSettings = Field(default_factory=AmazonSettings)
    xero: XeroSettings = Field(default_factory=XeroSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from fluxori.configs import get_settings
        settings = get_settings()
    """
    return Settings()
