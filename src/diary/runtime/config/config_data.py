"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str = Field(
        default="logs/diary.log", description="Log file path (empty disables file logging)"
    )
    console: bool = Field(
        default=False,
        description="Also log to stderr (interleaves with the interactive UI)",
    )
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./diary.db",
        description="Database connection URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @computed_field
    @property
    def password(self) -> str | None:
        """Get the database password from the URL, a secrets file or an environment variable.

        The URL wins when it already carries a password; otherwise the file is
        read, then the environment variable.
        """
        from sqlalchemy.engine import make_url

        url_obj = make_url(self.url)
        if url_obj.password:
            return url_obj.password

        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e

        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if password:
                return password
            raise ValueError(f"Environment variable {self.password_env_var} not set")

        return None

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with password if provided."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)

        if base_url.drivername.startswith("sqlite"):
            return self.url

        if base_url.password:
            return self.url

        resolved_password = self.password
        if resolved_password:
            # render_as_string keeps the password instead of masking it
            return base_url.set(password=resolved_password).render_as_string(
                hide_password=False
            )

        logger.debug("No database password configured; using URL as-is")
        return self.url

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_memory(self) -> bool:
        """True for in-memory SQLite databases (``sqlite://`` or ``:memory:``)."""
        return self.is_sqlite and (self.url in ("sqlite://", "sqlite:///") or ":memory:" in self.url)


class UIConfig(BaseModel):
    """Console user interface configuration."""

    page_size: int = Field(default=9, description="Items shown per page in lists")
    preview_length: int = Field(
        default=40, description="Characters of content shown in list previews"
    )
    date_format: str = Field(
        default="%d-%m-%Y", description="strptime format for dates typed by the user"
    )
    timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M", description="strftime format for displayed timestamps"
    )
    color: bool = Field(default=True, description="Enable colored output")

    @field_validator("page_size")
    @classmethod
    def _check_page_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError("page_size must be at least 1")
        return value


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    name: str = Field(default="Diary", description="Title shown on the main menu")


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    ui: UIConfig = Field(default_factory=UIConfig, description="User interface configuration")
