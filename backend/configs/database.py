"""
Database configuration settings.

Manages PostgreSQL connection parameters for SQLAlchemy.
Supports connection pooling and async operations.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the job store
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="austen", description="PostgreSQL user")
    password: str = Field(default="", description="PostgreSQL password")
    db: str = Field(default="recipe_api", description="PostgreSQL database name")

    database_url: str | None = Field(
        default=None,
        description="Full SQLAlchemy async URL; overrides host/port/user/password/db",
    )

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")
    create_tables: bool = Field(
        default=True,
        description="Create missing tables on application startup",
    )

    @property
    def async_database_url(self) -> str:
        """
        Construct async PostgreSQL connection URL.

        Returns:
            str: SQLAlchemy async-compatible database URL
        """
        if self.database_url:
            return self.database_url
        credentials = self.user if not self.password else f"{self.user}:{self.password}"
        return f"postgresql+asyncpg://{credentials}@{self.host}:{self.port}/{self.db}"

    @property
    def is_sqlite(self) -> bool:
        """True when the configured URL targets SQLite (local runs and tests)."""
        return self.async_database_url.startswith("sqlite")
