# ============================================================================
# CLAUDE CONTEXT - GEOJSON LAYER REPOSITORY
# ============================================================================
# STATUS: Standalone Repository - PostGIS row access for map layers
# PURPOSE: Fetch kecamatan, kelurahan and balita rows with geometry as WKT
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: GeoJSONRepository
# DEPENDENCIES: psycopg, psycopg.sql, infrastructure.postgresql, util_logger
# SOURCE: kecamatan, kelurahan, keluarga, balita, laporan_masyarakat, status_laporan, riwayat_pemeriksaan
# SCOPE: Read-only layer queries
# VALIDATION: SQL injection prevention via psycopg.sql composition
# PATTERNS: Repository Pattern, Query Builder, SQL Composition
# ENTRY_POINTS: repo = GeoJSONRepository(config); rows = repo.fetch_kecamatan_rows()
# ============================================================================

"""
GeoJSON Layer Repository

One query per map layer. Geometry is returned as text via ``ST_AsText()``
so that the WKT parser in this package owns the conversion to GeoJSON.

Safety:
- Schema name composed with sql.Identifier()
- Filter values passed as %s parameters
- Soft-deleted rows (deleted_date IS NOT NULL) are excluded

Rows are returned as dicts (psycopg dict_row) in the order the layer is
rendered: by name ascending.
"""

from typing import Any, Dict, List, Optional

from psycopg import sql

from infrastructure.postgresql import PostgreSQLRepository
from util_logger import LoggerFactory, ComponentType

from .config import GeoJSONConfig, get_geojson_config

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "GeoJSONRepository")

NO_REPORT_STATUS = "Tidak ada laporan"


_KECAMATAN_QUERY = """
    SELECT kec.id, kec.kecamatan, ST_AsText(kec.area) AS area_wkt
    FROM {schema}.kecamatan kec
    WHERE {where}
    ORDER BY kec.kecamatan ASC
"""

_KELURAHAN_QUERY = """
    SELECT kel.id, kel.kelurahan, kec.kecamatan, ST_AsText(kel.area) AS area_wkt
    FROM {schema}.kelurahan kel
    LEFT JOIN {schema}.kecamatan kec ON kel.id_kecamatan = kec.id
    WHERE {where}
    ORDER BY kec.kecamatan ASC, kel.kelurahan ASC
"""

_BALITA_POINTS_QUERY = """
    SELECT DISTINCT
        b.id, b.nama, b.jenis_kelamin,
        (EXTRACT(YEAR FROM age(CURRENT_DATE, b.tanggal_lahir)) * 12
            + EXTRACT(MONTH FROM age(CURRENT_DATE, b.tanggal_lahir)))::int AS umur_bulan,
        k.nomor_kk, k.nama_ayah, k.nama_ibu,
        kel.kelurahan, kec.kecamatan,
        ST_AsText(k.koordinat) AS koordinat_wkt,
        COALESCE(sl.status, 'Tidak ada laporan') AS status_laporan,
        COALESCE(lm.tanggal_laporan::text, '') AS tanggal_laporan,
        CASE
            WHEN lm.id_masyarakat IS NOT NULL THEN 'masyarakat'
            WHEN lm.id IS NOT NULL THEN 'admin'
            ELSE 'tidak ada'
        END AS jenis_laporan,
        COALESCE(rp_latest.status_gizi, 'Belum diperiksa') AS status_gizi_terakhir,
        COALESCE(rp_latest.tanggal::text, '') AS tanggal_pemeriksaan_terakhir
    FROM {schema}.balita b
    LEFT JOIN {schema}.keluarga k ON b.id_keluarga = k.id AND k.deleted_date IS NULL
    LEFT JOIN {schema}.kelurahan kel ON k.id_kelurahan = kel.id
    LEFT JOIN {schema}.kecamatan kec ON kel.id_kecamatan = kec.id
    LEFT JOIN {schema}.laporan_masyarakat lm ON b.id = lm.id_balita AND lm.deleted_date IS NULL
    LEFT JOIN {schema}.status_laporan sl ON lm.id_status_laporan = sl.id
    LEFT JOIN (
        SELECT rp.id_balita, rp.status_gizi, rp.tanggal,
               ROW_NUMBER() OVER (PARTITION BY rp.id_balita ORDER BY rp.tanggal DESC) AS rn
        FROM {schema}.riwayat_pemeriksaan rp
        WHERE rp.deleted_date IS NULL
    ) rp_latest ON b.id = rp_latest.id_balita AND rp_latest.rn = 1
    WHERE {where}
    ORDER BY kec.kecamatan ASC, kel.kelurahan ASC, b.nama ASC
"""


class GeoJSONRepository(PostgreSQLRepository):
    """
    PostGIS repository for the three map layers.

    Thread Safety:
    - Each method opens its own connection
    """

    def __init__(self, config: Optional[GeoJSONConfig] = None,
                 connection_string: Optional[str] = None):
        """
        Args:
            config: Layer configuration (uses singleton if not provided)
            connection_string: Explicit DSN, defaults to root config
        """
        self.config = config or get_geojson_config()
        super().__init__(
            connection_string=connection_string,
            schema_name=self.config.schema_name,
            statement_timeout_seconds=self.config.query_timeout_seconds
        )
        logger.debug(f"GeoJSONRepository initialized (schema: {self.schema_name})")

    def _compose(self, template: str, conditions: List[sql.Composable]) -> sql.Composed:
        return sql.SQL(template).format(
            schema=sql.Identifier(self.schema_name),
            where=sql.SQL(" AND ").join(conditions)
        )

    # ========================================================================
    # POLYGON LAYERS
    # ========================================================================

    def fetch_kecamatan_rows(self, id_kecamatan: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Kecamatan boundaries.

        Args:
            id_kecamatan: Restrict to one kecamatan

        Returns:
            Rows with keys id, kecamatan, area_wkt
        """
        conditions = [sql.SQL("kec.area IS NOT NULL")]
        params: List[Any] = []

        if id_kecamatan:
            conditions.append(sql.SQL("kec.id = %s"))
            params.append(id_kecamatan)

        rows = self._fetch_all(self._compose(_KECAMATAN_QUERY, conditions), params)
        logger.info(f"Fetched {len(rows)} kecamatan rows", extra={
            'custom_dimensions': {'id_kecamatan': id_kecamatan, 'row_count': len(rows)}
        })
        return rows

    def fetch_kelurahan_rows(
        self,
        id_kelurahan: Optional[str] = None,
        id_kecamatan: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Kelurahan boundaries with the parent kecamatan name.

        ``id_kelurahan`` takes precedence over ``id_kecamatan``.

        Returns:
            Rows with keys id, kelurahan, kecamatan, area_wkt
        """
        conditions = [sql.SQL("kel.area IS NOT NULL")]
        params: List[Any] = []

        if id_kelurahan:
            conditions.append(sql.SQL("kel.id = %s"))
            params.append(id_kelurahan)
        elif id_kecamatan:
            conditions.append(sql.SQL("kel.id_kecamatan = %s"))
            params.append(id_kecamatan)

        rows = self._fetch_all(self._compose(_KELURAHAN_QUERY, conditions), params)
        logger.info(f"Fetched {len(rows)} kelurahan rows", extra={
            'custom_dimensions': {
                'id_kelurahan': id_kelurahan,
                'id_kecamatan': id_kecamatan,
                'row_count': len(rows)
            }
        })
        return rows

    # ========================================================================
    # POINT LAYER
    # ========================================================================

    def fetch_balita_point_rows(
        self,
        status_laporan: Optional[str] = None,
        id_kecamatan: Optional[str] = None,
        id_kelurahan: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Balita locations (family coordinates) with latest report and examination.

        Args:
            status_laporan: Report label; NO_REPORT_STATUS selects children without a report
            id_kecamatan: Restrict to one kecamatan
            id_kelurahan: Restrict to one kelurahan

        Returns:
            Rows with keys id, nama, jenis_kelamin, umur_bulan, nomor_kk, nama_ayah,
            nama_ibu, kelurahan, kecamatan, koordinat_wkt, status_laporan,
            tanggal_laporan, jenis_laporan, status_gizi_terakhir,
            tanggal_pemeriksaan_terakhir
        """
        conditions = [
            sql.SQL("b.deleted_date IS NULL"),
            sql.SQL("k.koordinat IS NOT NULL")
        ]
        params: List[Any] = []

        if status_laporan:
            if status_laporan == NO_REPORT_STATUS:
                conditions.append(sql.SQL("lm.id IS NULL"))
            else:
                conditions.append(sql.SQL("sl.status = %s"))
                params.append(status_laporan)

        if id_kecamatan:
            conditions.append(sql.SQL("kec.id = %s"))
            params.append(id_kecamatan)

        if id_kelurahan:
            conditions.append(sql.SQL("kel.id = %s"))
            params.append(id_kelurahan)

        rows = self._fetch_all(self._compose(_BALITA_POINTS_QUERY, conditions), params)
        logger.info(f"Fetched {len(rows)} balita point rows", extra={
            'custom_dimensions': {
                'status_laporan': status_laporan,
                'id_kecamatan': id_kecamatan,
                'id_kelurahan': id_kelurahan,
                'row_count': len(rows)
            }
        })
        return rows
