"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here; no scattered magic strings.
"""

import math
from dataclasses import dataclass, field
from typing import Literal
from urllib.parse import quote

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

REQUIRED_DB_VARIABLES = ("DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME")


class ConfigurationError(RuntimeError):
    """Raised when the process environment cannot produce valid settings."""


@dataclass(frozen=True)
class ConnectionConfig:
    """Connection parameters for the employees database.

    Built once at startup and passed by value into directory providers.
    """

    host: str
    port: int
    user: str
    password: str = field(repr=False)
    dbname: str

    def dsn(self) -> str:
        """Return a libpq keyword/value connection string."""
        parts = {
            "host": self.host,
            "port": str(self.port),
            "user": self.user,
            "password": self.password,
            "dbname": self.dbname,
        }
        return " ".join(f"{key}={_quote_libpq(value)}" for key, value in parts.items())

    def sqlalchemy_url(self) -> str:
        """Return a SQLAlchemy URL for the psycopg2 dialect."""
        return (
            f"postgresql+psycopg2://{quote(self.user, safe='')}:"
            f"{quote(self.password, safe='')}@{quote(self.host, safe='')}:"
            f"{self.port}/{quote(self.dbname, safe='')}"
        )


def _quote_libpq(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        db_host: Database host (``DB_HOST``). Required.
        db_port: Database port (``DB_PORT``). Required.
        db_user: Database user (``DB_USER``). Required.
        db_password: Database password (``DB_PASSWORD``). Required.
        db_name: Database name (``DB_NAME``). Required.
        storage_backend: Which directory provider serves requests.
        connect_timeout_s: Upper bound on establishing a connection.
        pool_min_size: Connections opened when the shared pool is built.
        pool_max_size: Upper bound of the shared pool.
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode (exposes /docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        http_host: Interface the HTTP server binds to.
        http_port: Port the HTTP server listens on.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    db_host: str
    db_port: int
    db_user: str
    db_password: str = Field(repr=False)
    db_name: str

    storage_backend: Literal["pool", "per_request", "orm"] = "pool"
    connect_timeout_s: float = Field(default=1.0, gt=0)
    pool_min_size: int = Field(default=1, ge=0)
    pool_max_size: int = Field(default=10, ge=1)

    project_name: str = "Email Hint"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    http_host: str = "0.0.0.0"
    http_port: int = 8080

    def connection_config(self) -> ConnectionConfig:
        """Build the immutable connection parameters for the providers."""
        return ConnectionConfig(
            host=self.db_host,
            port=self.db_port,
            user=self.db_user,
            password=self.db_password,
            dbname=self.db_name,
        )

    def connect_timeout_whole_seconds(self) -> int:
        """libpq only accepts whole seconds; round up, never below 1."""
        return max(1, math.ceil(self.connect_timeout_s))


def load_settings(**overrides) -> Settings:
    """Load settings from the environment.

    Args:
        **overrides: Explicit values taking precedence over the environment.

    Returns:
        Validated settings.

    Raises:
        ConfigurationError: If a required variable is missing or invalid.
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        problems = []
        for error in exc.errors():
            name = "_".join(str(part) for part in error["loc"]).upper()
            problems.append(f"{name} ({error['msg']})")
        raise ConfigurationError(
            "Invalid configuration: " + ", ".join(problems)
        ) from exc
