# ============================================================================
# CLAUDE CONTEXT - BALITA STATUS CLASSIFICATION
# ============================================================================
# STATUS: Standalone Schema - Map legend colors
# PURPOSE: Map a child's latest nutritional / report status to a point color
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: classify_color, STATUS_GIZI_COLORS, STATUS_LAPORAN_COLORS, DEFAULT_COLOR
# DEPENDENCIES: typing
# SOURCE: status_gizi from riwayat_pemeriksaan, status label from status_laporan
# SCOPE: Pure function, no error path
# ENTRY_POINTS: from geojson_api.classification import classify_color
# ============================================================================

"""
Balita point color classification.

Priority, first match wins:
1. Clinical status from the latest examination (status gizi)
2. Workflow status of the community report (status laporan)
3. DEFAULT_COLOR

Labels are matched exactly as stored. A label that is renamed in the
lookup table falls through to the next rule instead of raising.

The hex values are shared with the map legend in the admin UI.
"""

from typing import Dict, Optional

STATUS_GIZI_COLORS: Dict[str, str] = {
    "gizi buruk": "#FF0000",
    "stunting": "#FF6600",
    "normal": "#00AA00",
}

STATUS_LAPORAN_COLORS: Dict[str, str] = {
    "Belum diproses": "#FFFF00",
    "Diproses dan data tidak sesuai": "#808080",
    "Diproses dan data sesuai": "#0066FF",
    "Belum ditindaklanjuti": "#FF9900",
    "Sudah ditindaklanjuti": "#00CCCC",
    "Sudah perbaikan gizi": "#00FF00",
    "Tidak ada laporan": "#CCCCCC",
}

DEFAULT_COLOR = "#999999"


def classify_color(status_gizi: Optional[str], status_laporan: Optional[str]) -> str:
    """
    Return the hex RGB color for a balita point.

    Args:
        status_gizi: latest examination result, e.g. "stunting"
        status_laporan: report workflow label, e.g. "Belum diproses"

    Returns:
        Color such as "#FF6600"; DEFAULT_COLOR when nothing matches
    """
    if status_gizi in STATUS_GIZI_COLORS:
        return STATUS_GIZI_COLORS[status_gizi]
    if status_laporan in STATUS_LAPORAN_COLORS:
        return STATUS_LAPORAN_COLORS[status_laporan]
    return DEFAULT_COLOR
