"""12-factor configuration adapter using environment variables and an optional TOML roster."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=5000, description="Port to bind the server to")
    log_level: str = Field(default="INFO", description="Root logging level")

    # Campus origin shared by every route
    campus_name: str = Field(
        default="Federal Urdu University of Arts, Sciences & Technology, Islamabad",
        description="Display name of the campus origin",
    )
    campus_address: str = Field(default="", description="Street address of the campus")
    # Kept as raw text so an invalid value falls back instead of aborting startup
    campus_lat: str | None = Field(default=None, description="Campus latitude")
    campus_lng: str | None = Field(default=None, description="Campus longitude")

    # MongoDB holding buses, assignments, announcements and chat
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017/campus_shuttle",
        description="MongoDB connection string",
    )
    mongodb_database: str = Field(
        default="campus_shuttle",
        description="Database used when the connection string names none",
    )
    mongodb_timeout_ms: int = Field(
        default=3000, description="Server selection timeout in milliseconds"
    )

    # User roster (TOML file with [[users]] tables)
    config_file: str | None = Field(
        default=DEFAULT_CONFIG_FILE,
        description="Path to TOML file listing users and their bearer tokens",
    )

    # Writes (POST/PUT/DELETE) per caller per minute; polling reads are not limited
    rate_limit_per_minute: int = Field(
        default=60, description="Maximum write requests per caller per minute"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    @field_validator("mongodb_timeout_ms")
    @classmethod
    def validate_mongodb_timeout(cls, v: int) -> int:
        """Validate the server selection timeout is positive."""
        if v < 1:
            raise ValueError("mongodb_timeout_ms must be at least 1")
        return v

    @field_validator("rate_limit_per_minute")
    @classmethod
    def validate_rate_limit(cls, v: int) -> int:
        """Validate the rate limit is positive."""
        if v < 1:
            raise ValueError("rate_limit_per_minute must be at least 1")
        return v

    def get_users_config(self) -> list[dict[str, Any]]:
        """Parse and return the [[users]] tables of the TOML file.

        A missing default file yields an empty roster; an explicitly
        configured file that does not exist is an error.
        """
        if not self.config_file:
            return []

        config_path = Path(self.config_file)
        if not config_path.exists():
            if self.config_file == DEFAULT_CONFIG_FILE:
                return []
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        users = toml_data.get("users", [])
        if not isinstance(users, list):
            raise ValueError("TOML config 'users' must be a list")
        return users
