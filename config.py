# ============================================================================
# CLAUDE CONTEXT - APPLICATION CONFIGURATION
# ============================================================================
# STATUS: Core Infrastructure - Configuration Management
# PURPOSE: Centralized configuration for the PostGIS connection
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: AppConfig, get_app_config, get_postgres_connection_string, validate_configuration
# DEPENDENCIES: pydantic-settings
# SOURCE: Environment variables (.env supported for local development)
# PATTERNS: Singleton pattern for config
# ============================================================================

"""
Application Configuration Module

Provides centralized configuration management for the stunting GeoJSON API:
- PostgreSQL/PostGIS connection string generation
- Environment-based configuration with validation

Environment Variables:
    Required:
    - POSTGIS_HOST: PostgreSQL hostname
    - POSTGIS_DATABASE: Database name
    - POSTGIS_USER: Database user
    - POSTGIS_PASSWORD: Database password

    Optional:
    - POSTGIS_PORT: PostgreSQL port (default: 5432)
    - POSTGIS_SSLMODE: libpq sslmode (default: require)

Usage:
    from config import get_postgres_connection_string

    conn_string = get_postgres_connection_string()
    conn = psycopg.connect(conn_string)
"""

import logging
from functools import lru_cache
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_SSL_MODES = {"disable", "allow", "prefer", "require", "verify-ca", "verify-full"}


# ============================================================================
# Application Configuration
# ============================================================================

class AppConfig(BaseSettings):
    """
    Application-wide configuration loaded from environment variables.

    Attributes:
        postgis_host: PostgreSQL server hostname
        postgis_port: PostgreSQL server port
        postgis_database: Database name
        postgis_user: Database username
        postgis_password: Database password
        postgis_sslmode: libpq sslmode for the connection
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    postgis_host: str = Field(..., description="PostgreSQL hostname")
    postgis_port: int = Field(default=5432, description="PostgreSQL port")
    postgis_database: str = Field(..., description="Database name")
    postgis_user: str = Field(..., description="Database username")
    postgis_password: str = Field(..., description="Database password")
    postgis_sslmode: str = Field(default="require", description="libpq sslmode")

    @field_validator("postgis_host", "postgis_database", "postgis_user")
    @classmethod
    def validate_required(cls, v: str, info) -> str:
        """Reject empty strings for required connection fields."""
        if not v:
            raise ValueError(f"{info.field_name.upper()} must not be empty")
        return v

    @field_validator("postgis_sslmode")
    @classmethod
    def validate_sslmode(cls, v: str) -> str:
        """Only accept sslmode values libpq understands."""
        if v not in _SSL_MODES:
            raise ValueError(f"POSTGIS_SSLMODE must be one of {sorted(_SSL_MODES)}, got '{v}'")
        return v


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    """
    Get singleton application configuration instance.

    Returns:
        AppConfig: Validated configuration object

    Raises:
        ValidationError: If required environment variables are missing
    """
    return AppConfig()


# ============================================================================
# PostgreSQL Connection String Generation
# ============================================================================

def get_postgres_connection_string() -> str:
    """
    Build the PostgreSQL connection string from configuration.

    The password is URL-encoded so characters such as '@' or '/' survive.

    Returns:
        str: PostgreSQL connection string (psycopg URL format)
    """
    config = get_app_config()

    encoded_password = quote_plus(config.postgis_password)

    return (
        f"postgresql://{config.postgis_user}:{encoded_password}"
        f"@{config.postgis_host}:{config.postgis_port}"
        f"/{config.postgis_database}"
        f"?sslmode={config.postgis_sslmode}"
    )


# ============================================================================
# Configuration Validation
# ============================================================================

def validate_configuration() -> bool:
    """
    Validate configuration on application startup.

    Returns:
        bool: True if configuration is valid

    Raises:
        Exception: If configuration validation fails
    """
    try:
        config = get_app_config()
        logger.info("Configuration validation:")
        logger.info(f"  PostgreSQL Host: {config.postgis_host}")
        logger.info(f"  PostgreSQL Port: {config.postgis_port}")
        logger.info(f"  Database: {config.postgis_database}")
        logger.info(f"  User: {config.postgis_user}")
        logger.info(f"  SSL Mode: {config.postgis_sslmode}")

        get_postgres_connection_string()
        logger.info("✅ Connection string generated successfully")

        return True

    except Exception as e:
        logger.error(f"❌ Configuration validation failed: {e}")
        raise
