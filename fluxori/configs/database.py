"""
PostgreSQL settings.

Read from ``POSTGRES_*`` variables. ``POSTGRES_URL`` wins over the
discrete fields, which is how tests and local runs point the engine at
SQLite.

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL

from fluxori.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Connection target and pool sizing for the async engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = "postgres"
    db: str = "fluxori"
    url: str | None = Field(default=None, description="Complete async SQLAlchemy URL")
    sslmode: str = Field(default="prefer", description="Passed to asyncpg as its ssl mode")

    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    pool_recycle: int = Field(default=1800, description="Seconds before a pooled connection is replaced")
    echo_sql: bool = False

    @property
    def async_database_url(self) -> str:
        """``postgresql+asyncpg`` URL with credentials quoted, or the ``url`` override."""
        if self.url:
            return self.url
        url = URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db,
            query={"ssl": self.sslmode},
        )
        return url.render_as_string(hide_password=False)
