# ============================================================================
# CLAUDE CONTEXT - HEALTH CHECK MODULE
# ============================================================================
# STATUS: Core Infrastructure - Health Monitoring
# PURPOSE: Health checks for the admin GeoJSON layer service
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: get_public_health, get_detailed_health, get_app_identity, HealthStatus, CheckResult
# DEPENDENCIES: psycopg, config, infrastructure.postgresql, geojson_api, util_logger
# PATTERNS: Two-tier health checks (public/detailed)
# ============================================================================

"""
Health Check Module for stunting-geoapi

Two tiers:

1. Public Health (/api/health):
   - Status and timestamp only
   - Always returns 200 (status in body indicates health)

2. Detailed Health (/api/health/detailed):
   - Database connectivity with latency
   - Presence of the tables the map layers read
   - GeoJSON trigger availability
   - Returns 503 if unhealthy

Usage:
    from health import get_public_health, get_detailed_health

    result = get_public_health()
    # {"status": "healthy", "timestamp": "2026-10-18T12:00:00+00:00"}
"""

import time
import uuid
import psycopg
from enum import Enum
from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple

from config import get_postgres_connection_string, get_app_config
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "HealthService")

APP_NAME = "stunting-geoapi"
APP_DESCRIPTION = "Stunting Surveillance GeoJSON Layer Service"

# Tables read by the kecamatan, kelurahan and balita layers
LAYER_TABLES: Tuple[str, ...] = ("kecamatan", "kelurahan", "keluarga", "balita")


class HealthStatus(str, Enum):
    """Health status values."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"      # Non-critical components failing
    UNHEALTHY = "unhealthy"    # Critical components failing


@dataclass
class CheckResult:
    """Result of a single health check."""
    status: str              # "pass" or "fail"
    latency_ms: float
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "status": self.status,
            "latency_ms": round(self.latency_ms, 2),
            "message": self.message
        }
        if self.details:
            result["details"] = self.details
        return result


def get_app_identity() -> Dict[str, str]:
    """Name and description used in startup logs and detailed health."""
    return {"name": APP_NAME, "description": APP_DESCRIPTION}


# ============================================================================
# Health Check Functions
# ============================================================================

def check_database_connectivity(timeout_seconds: float = 5.0) -> CheckResult:
    """
    Check PostgreSQL database connectivity with SELECT 1.

    Critical check - failure means UNHEALTHY status.

    Args:
        timeout_seconds: Connection timeout in seconds

    Returns:
        CheckResult with connection status and latency
    """
    start_time = time.perf_counter()

    try:
        conn_string = get_postgres_connection_string()
        config = get_app_config()

        with psycopg.connect(
            conn_string,
            connect_timeout=int(timeout_seconds)
        ) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
                cur.fetchone()

        latency_ms = (time.perf_counter() - start_time) * 1000

        return CheckResult(
            status="pass",
            latency_ms=latency_ms,
            message="PostgreSQL connection successful",
            details={
                "host": config.postgis_host,
                "database": config.postgis_database
            }
        )

    except Exception as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"Database connectivity check failed: {e}")

        return CheckResult(
            status="fail",
            latency_ms=latency_ms,
            message=f"Database connection failed: {type(e).__name__}",
            details={"error": str(e)}
        )


def check_layer_tables(repository=None) -> CheckResult:
    """
    Check that every table the map layers read exists.

    Critical check - a missing table means UNHEALTHY status.

    Args:
        repository: PostgreSQLRepository to query (built from GeoJSON config if omitted)

    Returns:
        CheckResult listing tables found and missing
    """
    start_time = time.perf_counter()

    try:
        if repository is None:
            from infrastructure.postgresql import PostgreSQLRepository
            from geojson_api.config import get_geojson_config

            repository = PostgreSQLRepository(schema_name=get_geojson_config().schema_name)

        present = {table: repository._table_exists(table) for table in LAYER_TABLES}
        missing = [table for table, exists in present.items() if not exists]

        latency_ms = (time.perf_counter() - start_time) * 1000

        if missing:
            return CheckResult(
                status="fail",
                latency_ms=latency_ms,
                message=f"Missing tables: {', '.join(missing)}",
                details={"schema": repository.schema_name, "tables": present}
            )

        return CheckResult(
            status="pass",
            latency_ms=latency_ms,
            message=f"{len(LAYER_TABLES)} layer tables present",
            details={"schema": repository.schema_name, "tables": present}
        )

    except Exception as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"Layer table check failed: {e}")

        return CheckResult(
            status="fail",
            latency_ms=latency_ms,
            message=f"Layer table check failed: {type(e).__name__}",
            details={"error": str(e)}
        )


def check_api_modules() -> CheckResult:
    """
    Check that the GeoJSON triggers can be imported and built.

    Non-critical check - failure means DEGRADED status.
    """
    start_time = time.perf_counter()

    try:
        from geojson_api import get_geojson_triggers, get_geojson_config

        triggers = get_geojson_triggers()
        geojson_status = {
            "available": True,
            "endpoints": len(triggers),
            "routes": [trigger['route'] for trigger in triggers],
            "schema": get_geojson_config().schema_name
        }
        status = "pass"
        message = "All modules loaded"
    except Exception as e:
        logger.error(f"GeoJSON module check failed: {e}")
        geojson_status = {"available": False, "endpoints": 0, "error": str(e)}
        status = "fail"
        message = "GeoJSON module unavailable"

    latency_ms = (time.perf_counter() - start_time) * 1000

    return CheckResult(
        status=status,
        latency_ms=latency_ms,
        message=message,
        details={"geojson_api": geojson_status}
    )


# ============================================================================
# Main Entry Points
# ============================================================================

def get_public_health() -> Dict[str, Any]:
    """
    Get minimal health status for the public endpoint.

    Returns:
        Dict with status and timestamp only
    """
    start_time = time.perf_counter()

    db_result = check_database_connectivity(timeout_seconds=3.0)
    status = HealthStatus.HEALTHY if db_result.status == "pass" else HealthStatus.UNHEALTHY

    total_duration = (time.perf_counter() - start_time) * 1000

    logger.info("Public health check completed", extra={
        'custom_dimensions': {
            'status': status.value,
            'duration_ms': round(total_duration, 2),
            'check_type': 'public'
        }
    })

    return {
        "status": status.value,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


def get_detailed_health() -> Dict[str, Any]:
    """
    Get detailed health status for monitoring and operations.

    Database and layer tables are critical; trigger availability is not.

    Returns:
        Dict with full health metrics
    """
    start_time = time.perf_counter()
    request_id = str(uuid.uuid4())[:8]

    checks = {}
    critical_failures = []
    non_critical_failures = []

    db_result = check_database_connectivity()
    checks["database"] = db_result.to_dict()
    if db_result.status == "fail":
        critical_failures.append("database")

    tables_result = check_layer_tables()
    checks["layer_tables"] = tables_result.to_dict()
    if tables_result.status == "fail":
        critical_failures.append("layer_tables")

    modules_result = check_api_modules()
    checks["api_modules"] = modules_result.to_dict()
    if modules_result.status == "fail":
        non_critical_failures.append("api_modules")

    if critical_failures:
        status = HealthStatus.UNHEALTHY
    elif non_critical_failures:
        status = HealthStatus.DEGRADED
    else:
        status = HealthStatus.HEALTHY

    total_duration = (time.perf_counter() - start_time) * 1000

    logger.info("Detailed health check completed", extra={
        'custom_dimensions': {
            'status': status.value,
            'duration_ms': round(total_duration, 2),
            'check_type': 'detailed',
            'request_id': request_id,
            'critical_failures': critical_failures,
            'non_critical_failures': non_critical_failures,
            'database_latency_ms': db_result.latency_ms
        }
    })

    identity = get_app_identity()
    return {
        "status": status.value,
        "app": identity["name"],
        "description": identity["description"],
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id,
        "checks": checks,
        "total_duration_ms": round(total_duration, 2)
    }
