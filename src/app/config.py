"""Application configuration with structured settings groups."""
import logging
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


# =============================================================================
# Nested Settings Models
# =============================================================================


class DatabaseOptions(BaseModel):
    """
    Engine options for the relational store.

    echo: Log every SQL statement (noisy, for debugging only).
    pool_pre_ping: Test pooled connections before handing them out.
    """

    echo: bool = False
    pool_pre_ping: bool = True


class LoggingSettings(BaseModel):
    """Root log level, e.g. INFO or DEBUG."""

    level: str = "INFO"


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """
    Application settings with nested configuration groups.

    Environment variables use double underscore as delimiter for nested values.
    Example: DATABASE__ECHO=true, LOGGING__LEVEL=DEBUG
    """

    # Application metadata, surfaced in the OpenAPI document
    app_name: str = "DimDim API"
    app_version: str = "1.0.0"
    app_description: str = "Manages clients and their financial transactions."

    # Database
    database_url: str = "postgresql+asyncpg://localhost/dimdim"

    # Nested settings groups
    database: DatabaseOptions = DatabaseOptions()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
