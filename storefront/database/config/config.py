"""
Configuration — Pydantic v2 Settings (env / .env)
=================================================

Purpose
-------
Centralized, strongly-typed database and application configuration using:
- Pydantic v2 `BaseSettings` for environment-driven values
- `pydantic-settings` v2 for `.env` loading and model config

Load Order & Behavior
---------------------
- Values are read from the environment; if not present, `.env` is used.
- Every field has a default, so the package imports without a `.env` and
  falls back to an in-memory SQLite database.
- `extra="ignore"`: unknown env vars are ignored (not an error).

Usage
-----
from storefront.database.config.config import settings

# Example
driver = settings.DB_DRIVER_NAME
echo_sql = settings.DB_ECHO

Security
--------
- Never commit credentials or the `.env` file to source control.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

INIT_MODES = ("create", "migrate", "none")


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file. Provides strongly typed access to environment values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DB_DRIVER_NAME: str = Field("sqlite", description="Sync SQLAlchemy driver (e.g., `sqlite`, `postgresql+psycopg`).")
    DB_ASYNC_DRIVER_NAME: Optional[str] = Field(None, description="Async driver; derived from DB_DRIVER_NAME when unset.")
    DB_USERNAME: Optional[str] = Field(None, description="Database username credential.")
    DB_PASSWORD: Optional[str] = Field(None, description="Database password credential.")
    DB_HOST: Optional[str] = Field(None, description="Hostname or IP address of the database server.")
    DB_PORT: Optional[int] = Field(None, description="Port of the database server.")
    DB_DATABASE_NAME: str = Field(":memory:", description="Database name, SQLite file path, or `:memory:`.")
    DB_ECHO: bool = Field(False, description="Echo every emitted SQL statement through the SQLAlchemy logger.")
    INIT_MODE: str = Field("create", description="Schema bootstrap on startup: `create`, `migrate` or `none`.")
    LOG_LEVEL: str = Field("INFO", description="Log level for the `storefront` logger.")

    @field_validator("INIT_MODE")
    @classmethod
    def _check_init_mode(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in INIT_MODES:
            raise ValueError(f"INIT_MODE must be one of {', '.join(INIT_MODES)}, got {value!r}")
        return value


# Singleton instance of Settings, ready to be imported across the app
settings = Settings()
"""Settings object populated from the environment and the .env file"""
