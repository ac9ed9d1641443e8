# ============================================================================
# CLAUDE CONTEXT - GEOJSON LAYER CONFIGURATION
# ============================================================================
# STATUS: Standalone Configuration - GeoJSON layer API
# PURPOSE: Settings for the map layer queries
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: GeoJSONConfig, get_geojson_config
# INTERFACES: Pydantic BaseModel
# DEPENDENCIES: pydantic, os
# SOURCE: Environment variables
# PATTERNS: Settings Pattern, Singleton via cached function
# ENTRY_POINTS: from geojson_api.config import get_geojson_config
# ============================================================================

"""
GeoJSON Layer API Configuration

Connection credentials live in the root ``config.py``; this module only
holds what the layer queries need.

Environment Variables:
    Optional:
    - GEOJSON_SCHEMA: Schema holding kecamatan/kelurahan/balita tables (default: "public")
    - GEOJSON_QUERY_TIMEOUT: Statement timeout in seconds (default: 30)
"""

import os
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class GeoJSONConfig(BaseModel):
    """
    Configuration for the GeoJSON layer endpoints.
    """

    schema_name: str = Field(
        default_factory=lambda: os.getenv("GEOJSON_SCHEMA", "public"),
        description="PostgreSQL schema containing the surveillance tables"
    )
    query_timeout_seconds: int = Field(
        default_factory=lambda: int(os.getenv("GEOJSON_QUERY_TIMEOUT", "30")),
        ge=1,
        le=300,
        description="Maximum query execution time in seconds"
    )

    @field_validator("schema_name")
    @classmethod
    def validate_schema_name(cls, v: str) -> str:
        """Schema name must be non-empty."""
        if not v or not v.strip():
            raise ValueError("GEOJSON_SCHEMA must not be empty")
        return v.strip()


_config_cache: Optional[GeoJSONConfig] = None


def get_geojson_config() -> GeoJSONConfig:
    """
    Get singleton GeoJSON configuration instance.

    Returns:
        Cached configuration instance
    """
    global _config_cache

    if _config_cache is None:
        _config_cache = GeoJSONConfig()

    return _config_cache
