"""Tests for the on-disk normals store."""
import numpy as np

from climate_pipelines.models.normals import ClimateNormals, SOURCE_MONTHLY
from climate_pipelines.services.normals_store import NormalsStore


def _normals(offset=0.0, source="daily"):
    return ClimateNormals(
        common=np.linspace(0, 10, 365) + offset,
        leap=np.linspace(0, 10, 366) + offset,
        source=source,
    )


class TestNormalsStore:
    """Tests for NormalsStore."""

    def test_save_and_load(self, tmp_path):
        store = NormalsStore(tmp_path)
        original = _normals(source=SOURCE_MONTHLY)
        path = store.save("city_1", original)

        assert path.exists()
        loaded = store.load("city_1")
        np.testing.assert_array_equal(loaded.common, original.common)
        np.testing.assert_array_equal(loaded.leap, original.leap)
        assert loaded.source == SOURCE_MONTHLY

    def test_load_missing(self, tmp_path):
        assert NormalsStore(tmp_path).load("city_404") is None

    def test_exists_and_delete(self, tmp_path):
        store = NormalsStore(tmp_path)
        store.save("city_1", _normals())
        assert store.exists("city_1")
        assert store.delete("city_1")
        assert not store.exists("city_1")
        assert not store.delete("city_1")

    def test_save_replaces_previous(self, tmp_path):
        store = NormalsStore(tmp_path)
        store.save("city_1", _normals())
        store.save("city_1", _normals(offset=5.0))
        assert store.load("city_1").common[0] == 5.0

    def test_unsafe_key_characters(self, tmp_path):
        store = NormalsStore(tmp_path)
        path = store.get_path("São Paulo_Brazil_-23.5_-46.6")
        assert path.parent == tmp_path
        assert "/" not in path.name and " " not in path.name

    def test_get_all_keys(self, tmp_path):
        store = NormalsStore(tmp_path / "nested")
        store.save("city_2", _normals())
        store.save("city_1", _normals())
        assert store.get_all_keys() == ["city_1", "city_2"]
