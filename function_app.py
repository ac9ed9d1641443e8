# ============================================================================
# CLAUDE CONTEXT - AZURE FUNCTIONS ENTRY POINT
# ============================================================================
# STATUS: Core Infrastructure - Function App Entry Point
# PURPOSE: Main entry point for Azure Functions runtime serving the admin map layers
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: app (FunctionApp instance)
# DEPENDENCIES: azure-functions, geojson_api, health
# ============================================================================

"""
Azure Functions Entry Point for stunting-geoapi

Registers the HTTP triggers for the admin GeoJSON layers and health checks.

Architecture:
    - GeoJSON layers: 3 endpoints (function key required)
        - /api/admin/geojson-kecamatan
        - /api/admin/geojson-kelurahan
        - /api/admin/geojson-balita-points
    - Health checks: 2 endpoints
        - /api/health - Public (minimal response)
        - /api/health/detailed - Internal (full metrics)

Deployment:
    - Local: func start
    - Azure: func azure functionapp publish <app-name> --python --build remote
"""

import json
import logging

import azure.functions as func

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = func.FunctionApp()

# ============================================================================
# GeoJSON Layer API - 3 Endpoints
# ============================================================================

try:
    from geojson_api import get_geojson_triggers

    logger.info("Registering GeoJSON layer endpoints...")

    geojson_triggers = get_geojson_triggers()

    @app.route(route="admin/geojson-kecamatan", methods=["GET"], auth_level=func.AuthLevel.FUNCTION)
    def geojson_kecamatan(req: func.HttpRequest) -> func.HttpResponse:
        return geojson_triggers[0]['handler'](req)

    @app.route(route="admin/geojson-kelurahan", methods=["GET"], auth_level=func.AuthLevel.FUNCTION)
    def geojson_kelurahan(req: func.HttpRequest) -> func.HttpResponse:
        return geojson_triggers[1]['handler'](req)

    @app.route(route="admin/geojson-balita-points", methods=["GET"], auth_level=func.AuthLevel.FUNCTION)
    def geojson_balita_points(req: func.HttpRequest) -> func.HttpResponse:
        return geojson_triggers[2]['handler'](req)

    logger.info("✅ GeoJSON layer API registered successfully (3 endpoints)")

except ImportError as e:
    logger.warning(f"⚠️ GeoJSON layer module not available: {e}")
    logger.warning("GeoJSON layer API will not be available")

# ============================================================================
# Health Check Endpoints - 2 Endpoints (Public + Detailed)
# ============================================================================

@app.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """
    Public health check endpoint.

    Always returns 200 - status in body indicates health.
    """
    from health import get_public_health

    result = get_public_health()

    return func.HttpResponse(
        json.dumps(result, default=str),
        mimetype="application/json",
        status_code=200,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"}
    )


@app.route(route="health/detailed", methods=["GET"], auth_level=func.AuthLevel.FUNCTION)
def health_detailed(req: func.HttpRequest) -> func.HttpResponse:
    """
    Detailed health check endpoint.

    Returns 503 if unhealthy, 200 otherwise (healthy or degraded).
    """
    from health import get_detailed_health, HealthStatus

    result = get_detailed_health()

    status_code = 503 if result["status"] == HealthStatus.UNHEALTHY.value else 200

    return func.HttpResponse(
        json.dumps(result, default=str, indent=2),
        mimetype="application/json",
        status_code=status_code,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"}
    )

# ============================================================================
# Application Startup
# ============================================================================

from health import get_app_identity
_app_identity = get_app_identity()

logger.info("="*60)
logger.info(f"{_app_identity['name']} - {_app_identity['description']}")
logger.info("="*60)
logger.info("Function App initialized successfully")
logger.info("Available endpoints:")
logger.info("  - GET /api/health - Public health check (minimal)")
logger.info("  - GET /api/health/detailed - Detailed health")
logger.info("")
logger.info("GeoJSON layers (3 endpoints):")
logger.info("  - GET /api/admin/geojson-kecamatan?id= - Kecamatan boundaries")
logger.info("  - GET /api/admin/geojson-kelurahan?id=&id_kecamatan= - Kelurahan boundaries")
logger.info("  - GET /api/admin/geojson-balita-points?status_laporan=&id_kecamatan=&id_kelurahan= - Balita points")
logger.info("="*60)
