"""Configuration management for taskflow."""

import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # SQLite Configuration
    sqlite_db_path: str = Field(default="./data/taskflow.db", description="Path to the SQLite database file")

    # Token Signing Configuration
    secret_key: str | None = Field(default=None, description="Secret key used to sign authentication tokens")
    token_max_age_seconds: int = Field(
        default=7 * 24 * 60 * 60, description="Maximum age of an authentication token (in seconds)"
    )
    auth_cookie_name: str = Field(default="auth_token", description="Cookie carrying the authentication token")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name")
    log_level: str = Field(default="INFO", description="Root log level")

    # Pagination Configuration
    default_page_limit: int = Field(default=10, description="Page size used when a list request does not set one")

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value

    @property
    def is_production(self) -> bool:
        """Whether the app runs in production."""
        return self.environment.lower() == "production"


# Application Constants
class Constants:
    """Application-wide constants."""

    # HTTP Status Codes
    HTTP_OK: int = 200
    HTTP_CREATED: int = 201
    HTTP_BAD_REQUEST: int = 400
    HTTP_UNAUTHORIZED: int = 401
    HTTP_NOT_FOUND: int = 404
    HTTP_SERVER_ERROR: int = 500

    # Pagination Bounds
    MIN_PAGE: int = 1
    MIN_PAGE_LIMIT: int = 1
    MAX_PAGE_LIMIT: int = 100  # Larger requests are silently capped
    MAX_PAGE: int = sys.maxsize // MAX_PAGE_LIMIT  # Keeps the row offset inside SQLite INTEGER range

    # Task Validation
    MIN_TITLE_LENGTH: int = 3

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent.parent


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
