# ============================================================================
# CLAUDE CONTEXT - GEOJSON LAYER SERVICE
# ============================================================================
# STATUS: Standalone Service - map layer assembly
# PURPOSE: Turn layer query rows into GeoJSON FeatureCollections
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: GeoJSONLayerService, format_umur
# DEPENDENCIES: geojson_api.features, geojson_api.classification, geojson_api.repository, util_logger
# SOURCE: Repository layer (GeoJSONRepository)
# SCOPE: Row -> properties mapping, partial-failure reporting
# PATTERNS: Service Layer
# ENTRY_POINTS: service = GeoJSONLayerService(); result = service.get_kecamatan_geojson()
# ============================================================================

"""
GeoJSON Layer Service - Business Logic Layer

Builds the three admin map layers:
- kecamatan polygons
- kelurahan polygons
- balita points, colored by latest status

Rows whose geometry cannot be parsed are skipped and logged at WARNING;
the layer is still returned with the remaining features. Database errors
are not caught here and surface as request failures.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from util_logger import LoggerFactory, ComponentType

from .classification import classify_color
from .features import AssemblyResult, Properties, collect_features
from .repository import GeoJSONRepository

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "GeoJSONLayerService")


def format_umur(months: Any) -> str:
    """
    Age label in Indonesian, e.g. 14 -> "1 tahun 2 bulan".

    Missing, unparseable or negative values render as "0 bulan".
    """
    try:
        months = int(months)
    except (TypeError, ValueError):
        return "0 bulan"

    if months < 0:
        return "0 bulan"
    if months < 12:
        return f"{months} bulan"

    years, remaining = divmod(months, 12)
    if remaining == 0:
        return f"{years} tahun"
    return f"{years} tahun {remaining} bulan"


def _text(value: Any) -> str:
    """NULL text columns render as empty strings."""
    return "" if value is None else str(value)


class GeoJSONLayerService:
    """
    Business logic service for the admin map layers.

    Each public method returns an AssemblyResult; callers serialize
    ``result.collection`` and may inspect ``result.skipped``.
    """

    def __init__(self, repository: Optional[GeoJSONRepository] = None):
        """
        Args:
            repository: Row source (a GeoJSONRepository is created if not provided)
        """
        self.repository = repository or GeoJSONRepository()

    # ========================================================================
    # LAYERS
    # ========================================================================

    def get_kecamatan_geojson(self, id_kecamatan: Optional[str] = None) -> AssemblyResult:
        """
        Kecamatan boundary layer.

        Args:
            id_kecamatan: Restrict to one kecamatan

        Returns:
            AssemblyResult whose features carry {id, kecamatan, type}
        """
        rows = self.repository.fetch_kecamatan_rows(id_kecamatan=id_kecamatan)
        return self._assemble("kecamatan", self._kecamatan_sources(rows))

    def get_kelurahan_geojson(
        self,
        id_kelurahan: Optional[str] = None,
        id_kecamatan: Optional[str] = None
    ) -> AssemblyResult:
        """
        Kelurahan boundary layer.

        Returns:
            AssemblyResult whose features carry {id, kelurahan, kecamatan, type}
        """
        rows = self.repository.fetch_kelurahan_rows(
            id_kelurahan=id_kelurahan,
            id_kecamatan=id_kecamatan
        )
        return self._assemble("kelurahan", self._kelurahan_sources(rows))

    def get_balita_points_geojson(
        self,
        status_laporan: Optional[str] = None,
        id_kecamatan: Optional[str] = None,
        id_kelurahan: Optional[str] = None
    ) -> AssemblyResult:
        """
        Balita point layer with a legend color per child.

        Returns:
            AssemblyResult whose features carry the child, family, area,
            report and examination attributes plus ``color``
        """
        rows = self.repository.fetch_balita_point_rows(
            status_laporan=status_laporan,
            id_kecamatan=id_kecamatan,
            id_kelurahan=id_kelurahan
        )
        return self._assemble("balita", self._balita_sources(rows))

    # ========================================================================
    # ROW MAPPING
    # ========================================================================

    @staticmethod
    def _kecamatan_sources(rows: List[Dict[str, Any]]) -> Iterator[Tuple[Optional[str], Properties]]:
        for row in rows:
            yield row.get("area_wkt"), {
                "id": _text(row.get("id")),
                "kecamatan": _text(row.get("kecamatan")),
                "type": "kecamatan",
            }

    @staticmethod
    def _kelurahan_sources(rows: List[Dict[str, Any]]) -> Iterator[Tuple[Optional[str], Properties]]:
        for row in rows:
            yield row.get("area_wkt"), {
                "id": _text(row.get("id")),
                "kelurahan": _text(row.get("kelurahan")),
                "kecamatan": _text(row.get("kecamatan")),
                "type": "kelurahan",
            }

    @staticmethod
    def _balita_sources(rows: List[Dict[str, Any]]) -> Iterator[Tuple[Optional[str], Properties]]:
        for row in rows:
            status_laporan = _text(row.get("status_laporan"))
            status_gizi = _text(row.get("status_gizi_terakhir"))
            yield row.get("koordinat_wkt"), {
                "id": _text(row.get("id")),
                "nama": _text(row.get("nama")),
                "jenis_kelamin": _text(row.get("jenis_kelamin")),
                "umur": format_umur(row.get("umur_bulan")),
                "nomor_kk": _text(row.get("nomor_kk")),
                "nama_ayah": _text(row.get("nama_ayah")),
                "nama_ibu": _text(row.get("nama_ibu")),
                "kelurahan": _text(row.get("kelurahan")),
                "kecamatan": _text(row.get("kecamatan")),
                "status_laporan": status_laporan,
                "tanggal_laporan": _text(row.get("tanggal_laporan")),
                "jenis_laporan": _text(row.get("jenis_laporan")),
                "status_gizi_terakhir": status_gizi,
                "tanggal_pemeriksaan_terakhir": _text(row.get("tanggal_pemeriksaan_terakhir")),
                "color": classify_color(status_gizi, status_laporan),
                "type": "balita",
            }

    def _assemble(self, layer: str, sources) -> AssemblyResult:
        result = collect_features(sources)

        for skipped in result.skipped:
            logger.warning(
                f"Skipped {layer} row {skipped.index}: {skipped.error_type}: {skipped.error}",
                extra={'custom_dimensions': {'layer': layer, **skipped.to_dict()}}
            )

        logger.info(
            f"Assembled {layer} layer: {result.feature_count} features, {result.skipped_count} skipped",
            extra={'custom_dimensions': {
                'layer': layer,
                'feature_count': result.feature_count,
                'skipped_count': result.skipped_count
            }}
        )
        return result
