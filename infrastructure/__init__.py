# ============================================================================
# CLAUDE CONTEXT - INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Core Infrastructure - Database access
# PURPOSE: Shared database components for the GeoJSON layers and health checks
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: PostgreSQLRepository
# DEPENDENCIES: psycopg, config
# ============================================================================

"""
Infrastructure Module

Provides PostgreSQL connection management (PostgreSQLRepository) with
read-only, per-request connection patterns.
"""

from .postgresql import PostgreSQLRepository

__version__ = "1.0.0"
__all__ = [
    "PostgreSQLRepository"
]
