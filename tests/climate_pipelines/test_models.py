"""Tests for pipeline data models."""
import numpy as np
import pytest

from climate_pipelines.models.location import Location
from climate_pipelines.models.normals import ClimateNormals, DailyBucket, SOURCE_DAILY


class TestDailyBucket:
    """Tests for DailyBucket."""

    def test_mean(self):
        bucket = DailyBucket()
        bucket.add(2.0)
        bucket.add(5.0)
        assert bucket.mean() == 3.5

    def test_empty_mean_is_none(self):
        assert DailyBucket().mean() is None


class TestClimateNormals:
    """Tests for ClimateNormals."""

    def test_profiles_converted_to_float_arrays(self):
        normals = ClimateNormals(common=[1] * 365, leap=[2] * 366)
        assert normals.common.dtype == np.float64
        assert normals.source == SOURCE_DAILY

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError):
            ClimateNormals(common=np.zeros(366), leap=np.zeros(366))
        with pytest.raises(ValueError):
            ClimateNormals(common=np.zeros(365), leap=np.zeros(365))

    def test_dict_round_trip(self):
        normals = ClimateNormals(common=np.arange(365), leap=np.arange(366), source="monthly")
        data = normals.to_dict()
        assert isinstance(data["common"], list)

        restored = ClimateNormals.from_dict(data)
        np.testing.assert_array_equal(restored.leap, normals.leap)
        assert restored.source == "monthly"


class TestLocation:
    """Tests for Location."""

    def test_from_geocoding_result(self):
        location = Location.from_geocoding_result({
            "id": 3117735, "name": "Madrid", "latitude": 40.4165, "longitude": -3.70256,
            "country": "Spain",
        })
        assert location.cache_key == "city_3117735"
        assert location.admin1 is None
        assert location.label == "Madrid, Spain"

    def test_cache_key_without_id(self):
        location = Location(name="Madrid", latitude=40.4, longitude=-3.7, country="Spain")
        assert location.cache_key == "Madrid_Spain_40.4_-3.7"
