"""
Configuration management for Doctor Connect.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.
"""

from typing import List, Optional

import json
import logging
import os
import secrets
from pathlib import Path

from pydantic import Field, model_validator, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(env_prefix="MONGO_")

    uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    db_name: str = Field(default="doctorconnect", description="MongoDB database name")
    server_selection_timeout_ms: int = Field(
        default=15000, description="Server selection timeout in milliseconds"
    )

    @validator("uri")
    def validate_mongo_uri(cls, v: str) -> str:
        """Validate MongoDB URI format."""
        if not v:
            raise ValueError("MongoDB URI is required. Please set MONGO_URI environment variable.")
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "MongoDB URI must start with 'mongodb://' or 'mongodb+srv://'"
            )
        return v


class SecuritySettings(BaseSettings):
    """Security configuration settings."""

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    secret_key: Optional[str] = Field(
        default=None, description="JWT signing key; required outside development and testing"
    )
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(
        default=24 * 60, description="Access token expiration time (24h)"
    )
    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor")

    @validator("secret_key")
    def validate_secret_key(cls, v: Optional[str]) -> Optional[str]:
        """Validate secret key strength."""
        if v is not None and len(v) < 32:
            raise ValueError("Secret key must be at least 32 characters long")
        return v

    @validator("bcrypt_rounds")
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        return v


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    allowed_headers: List[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    @validator("allowed_origins", pre=True)
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v.strip()]
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")
    file_path: Optional[str] = Field(default=None, description="Log file path")

    @validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @validator("format")
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class CertificateSettings(BaseSettings):
    """Service certificate generation settings."""

    model_config = SettingsConfigDict(env_prefix="CERTIFICATE_")

    storage_path: str = Field(default="./storage/certificates", description="Directory for generated PDFs")
    issuer_name: str = Field(
        default="Doctor Connect - Government Hospital Service",
        description="Organisation line printed under the certificate title",
    )
    contact_email: str = Field(default="info@doctorconnect.com", description="Verification contact address")
    number_max_attempts: int = Field(default=5, description="Attempts to allocate a unique certificate number")

    @validator("number_max_attempts")
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("number_max_attempts must be at least 1")
        return v


class PaginationSettings(BaseSettings):
    """List endpoint paging limits."""

    model_config = SettingsConfigDict(env_prefix="PAGINATION_")

    default_limit: int = Field(default=20, description="Page size when none is requested")
    max_limit: int = Field(default=100, description="Largest page size a client may request")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Doctor Connect", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=8000, description="Application port")
    host: str = Field(default="0.0.0.0", description="Application host")
    api_prefix: str = Field(default="/api", description="Prefix for versionless API routes")

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    certificates: CertificateSettings = Field(default_factory=CertificateSettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)

    @validator("app_env")
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @validator("port")
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @model_validator(mode="after")
    def ensure_signing_key(self) -> "Settings":
        """Require a signing key outside development and testing.

        Local runs without SECURITY_SECRET_KEY get a random per-process key,
        so tokens do not survive a restart and cannot be forged from a
        published default.
        """
        if self.security.secret_key is None:
            if not (self.is_development or self.is_testing):
                raise ValueError(
                    f"SECURITY_SECRET_KEY must be set when APP_ENV is {self.app_env}"
                )
            logger.warning("SECURITY_SECRET_KEY not set; using an ephemeral signing key")
            self.security.secret_key = secrets.token_urlsafe(48)
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"

    @property
    def expose_error_details(self) -> bool:
        """Whether unexpected error messages may be shown to clients."""
        return self.debug or self.is_development


# Global settings instance (loaded after attempting to read .env)
_settings: Optional[Settings] = None


def _load_env_file_if_available() -> None:
    """Best-effort load of .env by searching current and parent directories.

    This helps in environments where the working directory isn't the project
    root and pydantic's env_file doesn't get resolved as expected.
    """
    try:
        from dotenv import load_dotenv
    except ImportError:
        return

    cwd = Path(os.getcwd()).resolve()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / ".env"
        if candidate.exists():
            # Do not override already-set environment variables
            load_dotenv(dotenv_path=str(candidate), override=False)
            break


def get_settings() -> Settings:
    """Get application settings instance (lazy-init with .env discovery)."""
    global _settings
    if _settings is None:
        _load_env_file_if_available()
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
