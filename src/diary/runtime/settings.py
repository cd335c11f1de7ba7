"""Process-level settings read from the environment and .env files."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Environment and deployment
    environment: Literal["development", "production", "test"] = Field(
        default="development", validation_alias="APP_ENVIRONMENT"
    )

    # Where config.yaml lives
    config_file: str = Field(default="config.yaml", validation_alias="DIARY_CONFIG")

    # Overrides database.url from config.yaml when set
    database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")
