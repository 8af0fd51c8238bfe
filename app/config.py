# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   print(get_settings().MONGO_URI)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal
from urllib.parse import unquote, urlsplit

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Gateway settings loaded from environment variables.

    Only MONGO_URI is required. Everything else has a default that is
    fine for local development.
    """

    # -------------------------------------------------------------------------
    # MongoDB Configuration
    # -------------------------------------------------------------------------

    MONGO_URI: str = Field(
        ...,
        description="MongoDB connection URI (e.g., mongodb://localhost:27017/app)"
    )

    MONGO_DB_NAME: str | None = Field(
        default=None,
        description="Database used when a request does not name one"
    )

    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=5000,
        ge=1,
        description="How long the driver waits for a reachable server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    # Comma-separated string that gets parsed
    ALLOWED_TOKENS: str = Field(
        default="",
        description="Bearer tokens accepted by the gateway (comma-separated)"
    )

    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Document Handling
    # -------------------------------------------------------------------------

    DEFAULT_PAGE_SIZE: int = Field(
        default=10,
        ge=1,
        description="Page size for /find when the request gives none"
    )

    TIMESTAMP_DOCUMENTS: bool = Field(
        default=True,
        description="Stamp createdAt/updatedAt on inserts and updatedAt on updates"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def allowed_tokens_list(self) -> list[str]:
        """
        Parse ALLOWED_TOKENS into a list.

        Whitespace around tokens is stripped and empty entries are dropped,
        so "a, b," -> ["a", "b"].
        """
        return [token.strip() for token in self.ALLOWED_TOKENS.split(",") if token.strip()]

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS string into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def default_database(self) -> str | None:
        """
        Database for requests that omit dbName.

        MONGO_DB_NAME wins; otherwise the path component of MONGO_URI
        (mongodb://host/app?opts -> "app").
        """
        if self.MONGO_DB_NAME:
            return self.MONGO_DB_NAME
        path = urlsplit(self.MONGO_URI).path.lstrip("/")
        return unquote(path) or None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()
