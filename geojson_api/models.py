# ============================================================================
# CLAUDE CONTEXT - GEOJSON LAYER MODELS
# ============================================================================
# STATUS: Standalone Models - request parameters and response envelope
# PURPOSE: Pydantic models for the GeoJSON layer HTTP boundary
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: KecamatanGeoJSONQuery, KelurahanGeoJSONQuery, BalitaPointsGeoJSONQuery, APIResponse
# INTERFACES: Pydantic BaseModel
# DEPENDENCIES: pydantic, typing
# SCOPE: HTTP query validation and JSON envelope
# VALIDATION: Pydantic v2 validation
# PATTERNS: Data Transfer Objects (DTOs)
# ENTRY_POINTS: from geojson_api.models import APIResponse
# ============================================================================

"""
GeoJSON Layer API Pydantic Models

Query parameter models turn blank strings into None so an empty
``?id=`` behaves like an absent filter, matching how the admin UI builds
its URLs.

Every response uses the same envelope:

    {"status_code": 200, "message": "...", "data": {...FeatureCollection...}}

``data`` is left out of error responses.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class KecamatanGeoJSONQuery(BaseModel):
    """Query parameters for GET /api/admin/geojson-kecamatan."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Restrict to a single kecamatan"
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_blank(cls, v: Any) -> Any:
        return _blank_to_none(v)


class KelurahanGeoJSONQuery(BaseModel):
    """Query parameters for GET /api/admin/geojson-kelurahan."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Restrict to a single kelurahan"
    )
    id_kecamatan: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Restrict to kelurahan inside one kecamatan"
    )

    @field_validator("id", "id_kecamatan", mode="before")
    @classmethod
    def normalize_blank(cls, v: Any) -> Any:
        return _blank_to_none(v)


class BalitaPointsGeoJSONQuery(BaseModel):
    """Query parameters for GET /api/admin/geojson-balita-points."""
    model_config = ConfigDict(extra="ignore")

    status_laporan: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Report status label; 'Tidak ada laporan' selects children without reports"
    )
    id_kecamatan: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Restrict to one kecamatan"
    )
    id_kelurahan: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Restrict to one kelurahan"
    )

    @field_validator("status_laporan", "id_kecamatan", "id_kelurahan", mode="before")
    @classmethod
    def normalize_blank(cls, v: Any) -> Any:
        return _blank_to_none(v)


class APIResponse(BaseModel):
    """
    JSON envelope shared by all admin endpoints.
    """
    status_code: int = Field(
        description="HTTP status code, repeated in the body"
    )
    message: str = Field(
        description="Human-readable outcome"
    )
    data: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Payload (GeoJSON FeatureCollection); omitted on errors"
    )

    def to_json_dict(self) -> Dict[str, Any]:
        """Dump for json.dumps; drops ``data`` only when it is absent."""
        body = {"status_code": self.status_code, "message": self.message}
        if self.data is not None:
            body["data"] = self.data
        return body
