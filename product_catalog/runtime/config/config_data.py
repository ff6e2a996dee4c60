"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy.engine import make_url


class AppConfig(BaseModel):
    """Application configuration model."""

    name: str = Field(default="product-catalog", description="Service name")
    version: str = Field(default="1.0.0", description="Service version")
    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )


class ServerConfig(BaseModel):
    """gRPC server configuration model."""

    host: str = Field(default="[::]", description="Address the server listens on")
    port: int = Field(default=50051, description="Port the server listens on")
    max_workers: int = Field(
        default=10, description="Thread pool size used to serve concurrent calls"
    )
    shutdown_grace_seconds: float = Field(
        default=5.0, description="Grace period for in-flight calls on shutdown"
    )
    reflection: bool = Field(default=True, description="Enable server reflection")

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


class UserCredentialConfig(BaseModel):
    """A username/password pair seeded into the credential store at startup."""

    username: str = Field(description="Login name")
    password: str = Field(description="Plaintext password, hashed when loaded")


class AuthConfig(BaseModel):
    """Basic authentication configuration."""

    users: list[UserCredentialConfig] = Field(
        default_factory=list, description="Users allowed to call the service"
    )
    bypass_suffixes: list[str] = Field(
        default_factory=lambda: ["/Health", ".Health/Check", ".Health/Watch"],
        description="Method-name suffixes that skip authentication",
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./catalog.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    environment_mode: str = Field(
        default="development", description="Environment mode: development or production"
    )
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.url).get_backend_name() == "sqlite"

    @property
    def password(self) -> str | None:
        """
        Get the database password from the appropriate source.
        1. If in development or test mode, parse it from the URL
        2. If in production mode, read it from the mounted secrets file named by
           `password_file` or the environment variable named by `password_env_var`
        """
        if self.environment_mode in ("development", "test"):
            return make_url(self.url).password
        elif self.environment_mode == "production":
            if self.password_file:
                try:
                    with open(self.password_file) as f:
                        return f.read().strip()
                except OSError as e:
                    raise ValueError(
                        "Failed to read database password from file."
                    ) from e
            elif self.password_env_var:
                password = os.getenv(self.password_env_var)
                if password:
                    return password
                raise ValueError(
                    f"Environment variable {self.password_env_var} not set"
                )
            elif self.is_sqlite:
                return None
            else:
                raise ValueError(
                    "In production mode, either password_file or password_env_var must be set"
                )
        else:
            raise ValueError(
                "Invalid environment_mode; must be 'development', 'production', or 'test'"
            )

    @property
    def connection_string(self) -> str:
        """Construct the database connection string with the resolved password."""
        base_url = make_url(self.url)
        if self.is_sqlite:
            return self.url

        if base_url.password and self.environment_mode == "production":
            logger.warning(
                "Database URL contains a password in production mode; "
                "consider using a secrets file or environment variable."
            )

        resolved_password = self.password
        if resolved_password and resolved_password != base_url.password:
            base_url = base_url.set(password=resolved_password)

        # render_as_string keeps the password, str() would mask it
        return base_url.render_as_string(hide_password=False)


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    server: ServerConfig = Field(
        default_factory=ServerConfig, description="gRPC server configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    auth: AuthConfig = Field(
        default_factory=AuthConfig, description="Authentication configuration"
    )
