"""
Unit test fixtures: in-memory repository and service doubles.
"""

import pytest

from geojson_api.features import collect_features


class FakeLayerRepository:
    """Serves canned rows and records the filters each fetch received."""

    def __init__(self, kecamatan=None, kelurahan=None, balita=None):
        self.kecamatan = kecamatan or []
        self.kelurahan = kelurahan or []
        self.balita = balita or []
        self.calls = []

    def fetch_kecamatan_rows(self, id_kecamatan=None):
        self.calls.append(("kecamatan", {"id_kecamatan": id_kecamatan}))
        return self.kecamatan

    def fetch_kelurahan_rows(self, id_kelurahan=None, id_kecamatan=None):
        self.calls.append(("kelurahan", {"id_kelurahan": id_kelurahan, "id_kecamatan": id_kecamatan}))
        return self.kelurahan

    def fetch_balita_point_rows(self, status_laporan=None, id_kecamatan=None, id_kelurahan=None):
        self.calls.append(("balita", {
            "status_laporan": status_laporan,
            "id_kecamatan": id_kecamatan,
            "id_kelurahan": id_kelurahan
        }))
        return self.balita


class FakeLayerService:
    """Returns a fixed one-point layer, or raises ``error`` when set."""

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def _result(self, name, **kwargs):
        self.calls.append((name, kwargs))
        if self.error is not None:
            raise self.error
        return collect_features([("POINT(106.8 -6.2)", {"id": "1", "type": name})])

    def get_kecamatan_geojson(self, **kwargs):
        return self._result("kecamatan", **kwargs)

    def get_kelurahan_geojson(self, **kwargs):
        return self._result("kelurahan", **kwargs)

    def get_balita_points_geojson(self, **kwargs):
        return self._result("balita", **kwargs)


@pytest.fixture
def balita_row():
    """One balita row as returned by the point layer query."""
    return {
        "id": "b-1",
        "nama": "Siti",
        "jenis_kelamin": "P",
        "umur_bulan": 14,
        "nomor_kk": "3171000000000001",
        "nama_ayah": "Budi",
        "nama_ibu": "Ani",
        "kelurahan": "Menteng",
        "kecamatan": "Menteng",
        "koordinat_wkt": "POINT(106.8325 -6.1957)",
        "status_laporan": "Belum diproses",
        "tanggal_laporan": "2024-03-01",
        "jenis_laporan": "masyarakat",
        "status_gizi_terakhir": "stunting",
        "tanggal_pemeriksaan_terakhir": "2024-02-10",
    }


@pytest.fixture
def fake_repository():
    return FakeLayerRepository


@pytest.fixture
def fake_service():
    return FakeLayerService
