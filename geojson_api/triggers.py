# ============================================================================
# CLAUDE CONTEXT - GEOJSON LAYER TRIGGERS
# ============================================================================
# STATUS: Standalone HTTP Triggers - admin map layer endpoints
# PURPOSE: Azure Functions HTTP handlers returning GeoJSON layers in the admin envelope
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: get_geojson_triggers (returns list of trigger configurations)
# INTERFACES: Azure Functions HttpRequest/HttpResponse
# PYDANTIC_MODELS: KecamatanGeoJSONQuery, KelurahanGeoJSONQuery, BalitaPointsGeoJSONQuery, APIResponse
# DEPENDENCIES: azure.functions, pydantic, json, uuid
# SOURCE: HTTP requests from the admin map (Leaflet)
# SCOPE: HTTP endpoint handlers for the GeoJSON layers
# VALIDATION: Query parameter parsing and Pydantic validation
# PATTERNS: Trigger Pattern, Factory Pattern (get_geojson_triggers)
# ENTRY_POINTS: Function App route registration via get_geojson_triggers()
# ============================================================================

"""
GeoJSON Layer HTTP Triggers - Azure Functions Handlers

Endpoints:
- GET /api/admin/geojson-kecamatan        ?id=
- GET /api/admin/geojson-kelurahan        ?id=&id_kecamatan=
- GET /api/admin/geojson-balita-points    ?status_laporan=&id_kecamatan=&id_kelurahan=

Each trigger:
1. Validates query parameters (Pydantic)
2. Calls the layer service
3. Returns {"status_code", "message", "data"} with the FeatureCollection
4. Maps validation errors to 400 and everything else to 500

Rows with unparseable geometry never fail a request; they are only
logged by the service.

Integration:
    In function_app.py:

    from geojson_api import get_geojson_triggers

    for trigger in get_geojson_triggers():
        ...
"""

import json
import uuid
from typing import Any, Dict, List, Optional

import azure.functions as func
from pydantic import ValidationError

from util_logger import LoggerFactory, ComponentType

from .models import (
    APIResponse,
    BalitaPointsGeoJSONQuery,
    KecamatanGeoJSONQuery,
    KelurahanGeoJSONQuery
)
from .service import GeoJSONLayerService


# ============================================================================
# TRIGGER REGISTRY FUNCTION
# ============================================================================

def get_geojson_triggers(service: Optional[GeoJSONLayerService] = None) -> List[Dict[str, Any]]:
    """
    Get GeoJSON layer trigger configurations for function_app.py.

    Args:
        service: Shared layer service (created lazily by each trigger if omitted)

    Returns:
        List of dicts with keys route, methods, handler
    """
    return [
        {
            'route': 'admin/geojson-kecamatan',
            'methods': ['GET'],
            'handler': KecamatanGeoJSONTrigger(service).handle
        },
        {
            'route': 'admin/geojson-kelurahan',
            'methods': ['GET'],
            'handler': KelurahanGeoJSONTrigger(service).handle
        },
        {
            'route': 'admin/geojson-balita-points',
            'methods': ['GET'],
            'handler': BalitaPointsGeoJSONTrigger(service).handle
        }
    ]


# ============================================================================
# BASE TRIGGER CLASS
# ============================================================================

class BaseGeoJSONTrigger:
    """
    Base class for GeoJSON layer triggers.

    Provides:
    - Lazy service creation (no database work at import time)
    - Envelope formatting for success and error responses
    - Query parameter validation
    """

    layer: str = ""
    query_model = None

    def __init__(self, service: Optional[GeoJSONLayerService] = None):
        self._service = service

    @property
    def service(self) -> GeoJSONLayerService:
        if self._service is None:
            self._service = GeoJSONLayerService()
        return self._service

    def handle(self, req: func.HttpRequest) -> func.HttpResponse:
        """
        Handle a layer request.

        Args:
            req: Azure Functions HTTP request

        Returns:
            HttpResponse with the envelope JSON
        """
        request_id = req.headers.get('x-request-id') or str(uuid.uuid4())[:8]
        log = LoggerFactory.create_with_context(
            ComponentType.TRIGGER, self.__class__.__name__,
            request_id=request_id, layer=self.layer
        )

        try:
            params = self.query_model(**dict(req.params))
        except ValidationError as e:
            log.warning(f"Invalid query parameters: {e.error_count()} error(s)")
            return self._envelope_response(
                400, f"Invalid query parameters: {self._format_validation_error(e)}"
            )

        try:
            result = self.fetch(params)
            response = self._envelope_response(
                200, self.success_message(params), result.collection.to_dict()
            )
        except Exception as e:
            log.error(f"Error building {self.layer} GeoJSON: {e}", exc_info=True)
            return self._envelope_response(500, f"Failed to get {self.layer} GeoJSON")

        log.info(f"{self.layer} GeoJSON served", extra={'custom_dimensions': {
            'feature_count': result.feature_count,
            'skipped_count': result.skipped_count
        }})

        return response

    def fetch(self, params):
        raise NotImplementedError

    def success_message(self, params) -> str:
        raise NotImplementedError

    @staticmethod
    def _format_validation_error(error: ValidationError) -> str:
        return "; ".join(
            f"{'.'.join(str(loc) for loc in item['loc'])}: {item['msg']}"
            for item in error.errors()
        )

    @staticmethod
    def _envelope_response(
        status_code: int,
        message: str,
        data: Optional[Dict[str, Any]] = None
    ) -> func.HttpResponse:
        """
        Create the JSON envelope response.

        Args:
            status_code: HTTP status code (also written into the body)
            message: Outcome message
            data: Payload, omitted from the body when None

        Returns:
            Azure Functions HttpResponse
        """
        envelope = APIResponse(status_code=status_code, message=message, data=data)
        return func.HttpResponse(
            body=json.dumps(envelope.to_json_dict(), allow_nan=False),
            status_code=status_code,
            mimetype="application/json"
        )


# ============================================================================
# ENDPOINT TRIGGERS
# ============================================================================

class KecamatanGeoJSONTrigger(BaseGeoJSONTrigger):
    """
    Kecamatan boundaries.

    Endpoint: GET /api/admin/geojson-kecamatan
    """

    layer = "kecamatan"
    query_model = KecamatanGeoJSONQuery

    def fetch(self, params: KecamatanGeoJSONQuery):
        return self.service.get_kecamatan_geojson(id_kecamatan=params.id)

    def success_message(self, params: KecamatanGeoJSONQuery) -> str:
        if params.id:
            return "Kecamatan GeoJSON by ID retrieved successfully"
        return "Kecamatan GeoJSON retrieved successfully"


class KelurahanGeoJSONTrigger(BaseGeoJSONTrigger):
    """
    Kelurahan boundaries.

    Endpoint: GET /api/admin/geojson-kelurahan
    """

    layer = "kelurahan"
    query_model = KelurahanGeoJSONQuery

    def fetch(self, params: KelurahanGeoJSONQuery):
        return self.service.get_kelurahan_geojson(
            id_kelurahan=params.id,
            id_kecamatan=params.id_kecamatan
        )

    def success_message(self, params: KelurahanGeoJSONQuery) -> str:
        if params.id:
            return "Kelurahan GeoJSON by ID retrieved successfully"
        if params.id_kecamatan:
            return "Kelurahan GeoJSON by kecamatan retrieved successfully"
        return "Kelurahan GeoJSON retrieved successfully"


class BalitaPointsGeoJSONTrigger(BaseGeoJSONTrigger):
    """
    Balita locations colored by latest status.

    Endpoint: GET /api/admin/geojson-balita-points
    """

    layer = "balita points"
    query_model = BalitaPointsGeoJSONQuery

    def fetch(self, params: BalitaPointsGeoJSONQuery):
        return self.service.get_balita_points_geojson(
            status_laporan=params.status_laporan,
            id_kecamatan=params.id_kecamatan,
            id_kelurahan=params.id_kelurahan
        )

    def success_message(self, params: BalitaPointsGeoJSONQuery) -> str:
        return "Balita points GeoJSON retrieved successfully"
