"""
Shared settings base.

Every settings section reads ``.env`` and ignores unknown keys so one
environment file can serve the API, workers and tests.

Dependencies: pydantic, pydantic_settings
System role: Foundation for all configuration classes
"""

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Process-wide settings plus the ``.env`` behaviour sections inherit."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "test", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = Field(default="INFO", description="Root logger level name")
    cors_origins: list[str] = Field(default=["*"], description="Origins allowed by CORS")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
