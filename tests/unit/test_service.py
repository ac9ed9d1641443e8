"""
Layer service tests against an in-memory repository.
"""

import logging

import pytest

from geojson_api.service import GeoJSONLayerService, format_umur


# ============================================================================
# TestFormatUmur
# ============================================================================

class TestFormatUmur:
    """Age label in months and years."""

    @pytest.mark.parametrize("months,label", [
        (0, "0 bulan"),
        (1, "1 bulan"),
        (11, "11 bulan"),
        (12, "1 tahun"),
        (14, "1 tahun 2 bulan"),
        (24, "2 tahun"),
        (59, "4 tahun 11 bulan"),
    ])
    def test_label(self, months, label):
        assert format_umur(months) == label

    @pytest.mark.parametrize("months", [None, "abc", -3])
    def test_unusable_values(self, months):
        assert format_umur(months) == "0 bulan"

    def test_numeric_string(self):
        assert format_umur("13") == "1 tahun 1 bulan"


# ============================================================================
# TestPolygonLayers
# ============================================================================

class TestPolygonLayers:
    """Kecamatan and kelurahan rows map to boundary features."""

    def test_kecamatan_properties(self, fake_repository, square_wkt):
        repo = fake_repository(kecamatan=[
            {"id": "kec-1", "kecamatan": "Menteng", "area_wkt": square_wkt},
        ])
        result = GeoJSONLayerService(repository=repo).get_kecamatan_geojson(id_kecamatan="kec-1")

        feature = result.collection.to_dict()["features"][0]
        assert feature["properties"] == {"id": "kec-1", "kecamatan": "Menteng", "type": "kecamatan"}
        assert feature["geometry"]["type"] == "Polygon"
        assert repo.calls == [("kecamatan", {"id_kecamatan": "kec-1"})]

    def test_kelurahan_properties(self, fake_repository):
        repo = fake_repository(kelurahan=[
            {
                "id": "kel-1",
                "kelurahan": "Gondangdia",
                "kecamatan": None,
                "area_wkt": "MULTIPOLYGON(((0 0, 1 0, 1 1, 0 0)))",
            },
        ])
        result = GeoJSONLayerService(repository=repo).get_kelurahan_geojson(id_kecamatan="kec-1")

        feature = result.collection.to_dict()["features"][0]
        assert feature["properties"] == {
            "id": "kel-1",
            "kelurahan": "Gondangdia",
            "kecamatan": "",
            "type": "kelurahan",
        }
        assert feature["geometry"]["type"] == "MultiPolygon"
        assert repo.calls == [("kelurahan", {"id_kelurahan": None, "id_kecamatan": "kec-1"})]

    def test_bad_row_skipped(self, fake_repository, square_wkt):
        repo = fake_repository(kecamatan=[
            {"id": "a", "kecamatan": "A", "area_wkt": square_wkt},
            {"id": "b", "kecamatan": "B", "area_wkt": None},
            {"id": "c", "kecamatan": "C", "area_wkt": "POLYGON((0 0, 1 0"},
            {"id": "d", "kecamatan": "D", "area_wkt": square_wkt},
        ])
        result = GeoJSONLayerService(repository=repo).get_kecamatan_geojson()

        assert [f.properties["id"] for f in result.collection.features] == ["a", "d"]
        assert [s.feature_id for s in result.skipped] == ["b", "c"]

    def test_numeric_ids_emitted_as_strings(self, fake_repository, square_wkt):
        repo = fake_repository(
            kecamatan=[{"id": 7, "kecamatan": "A", "area_wkt": square_wkt}],
            kelurahan=[
                {"id": 12, "kelurahan": "B", "kecamatan": "A", "area_wkt": square_wkt},
                {"id": 13, "kelurahan": "C", "kecamatan": "A", "area_wkt": "POLYGON(("},
            ],
        )
        service = GeoJSONLayerService(repository=repo)

        kecamatan = service.get_kecamatan_geojson().collection.features[0]
        kelurahan = service.get_kelurahan_geojson()

        assert kecamatan.properties["id"] == "7"
        assert kelurahan.collection.features[0].properties["id"] == "12"
        assert kelurahan.skipped[0].feature_id == "13"

    def test_empty_layer(self, fake_repository):
        result = GeoJSONLayerService(repository=fake_repository()).get_kelurahan_geojson()
        assert result.collection.to_dict() == {"type": "FeatureCollection", "features": []}


# ============================================================================
# TestBalitaLayer
# ============================================================================

class TestBalitaLayer:
    """Balita rows map to colored point features."""

    def test_properties(self, fake_repository, balita_row):
        repo = fake_repository(balita=[balita_row])
        result = GeoJSONLayerService(repository=repo).get_balita_points_geojson()

        feature = result.collection.to_dict()["features"][0]
        assert feature["geometry"] == {"type": "Point", "coordinates": [106.8325, -6.1957]}
        assert feature["properties"] == {
            "id": "b-1",
            "nama": "Siti",
            "jenis_kelamin": "P",
            "umur": "1 tahun 2 bulan",
            "nomor_kk": "3171000000000001",
            "nama_ayah": "Budi",
            "nama_ibu": "Ani",
            "kelurahan": "Menteng",
            "kecamatan": "Menteng",
            "status_laporan": "Belum diproses",
            "tanggal_laporan": "2024-03-01",
            "jenis_laporan": "masyarakat",
            "status_gizi_terakhir": "stunting",
            "tanggal_pemeriksaan_terakhir": "2024-02-10",
            "color": "#FF6600",
            "type": "balita",
        }

    def test_property_order(self, fake_repository, balita_row):
        repo = fake_repository(balita=[balita_row])
        feature = GeoJSONLayerService(repository=repo).get_balita_points_geojson().collection.features[0]
        keys = list(feature.properties)
        assert keys[0] == "id"
        assert keys[-2:] == ["color", "type"]

    def test_color_falls_back_to_laporan(self, fake_repository, balita_row):
        balita_row.update(status_gizi_terakhir="Belum diperiksa", status_laporan="Tidak ada laporan")
        repo = fake_repository(balita=[balita_row])
        feature = GeoJSONLayerService(repository=repo).get_balita_points_geojson().collection.features[0]
        assert feature.properties["color"] == "#CCCCCC"

    def test_null_text_columns(self, fake_repository, balita_row):
        balita_row.update(nama_ayah=None, nomor_kk=None, umur_bulan=None)
        repo = fake_repository(balita=[balita_row])
        properties = GeoJSONLayerService(repository=repo).get_balita_points_geojson().collection.features[0].properties
        assert properties["nama_ayah"] == ""
        assert properties["nomor_kk"] == ""
        assert properties["umur"] == "0 bulan"

    def test_numeric_id_emitted_as_string(self, fake_repository, balita_row):
        balita_row.update(id=42)
        repo = fake_repository(balita=[balita_row])
        feature = GeoJSONLayerService(repository=repo).get_balita_points_geojson().collection.features[0]
        assert feature.properties["id"] == "42"

    def test_filters_forwarded(self, fake_repository):
        repo = fake_repository()
        GeoJSONLayerService(repository=repo).get_balita_points_geojson(
            status_laporan="Belum diproses", id_kelurahan="kel-9"
        )
        assert repo.calls == [("balita", {
            "status_laporan": "Belum diproses",
            "id_kecamatan": None,
            "id_kelurahan": "kel-9",
        })]


# ============================================================================
# TestSkipLogging
# ============================================================================

class TestSkipLogging:
    """Each skipped row produces one WARNING with its dimensions."""

    def test_warning_per_skipped_row(self, fake_repository, balita_row, caplog):
        bad = dict(balita_row, id="b-2", koordinat_wkt="POINT(nan 1)")
        repo = fake_repository(balita=[balita_row, bad])

        with caplog.at_level(logging.WARNING):
            result = GeoJSONLayerService(repository=repo).get_balita_points_geojson()

        assert result.feature_count == 1
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1

        dims = warnings[0].custom_dimensions
        assert dims["layer"] == "balita"
        assert dims["feature_id"] == "b-2"
        assert dims["index"] == 1
        assert dims["error_type"] == "InvalidCoordinateError"

    def test_database_error_propagates(self, fake_repository):
        class BrokenRepository(fake_repository):
            def fetch_kecamatan_rows(self, id_kecamatan=None):
                raise RuntimeError("Database query failed: boom")

        with pytest.raises(RuntimeError):
            GeoJSONLayerService(repository=BrokenRepository()).get_kecamatan_geojson()
