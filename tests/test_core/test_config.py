"""Tests for configuration settings."""

import os
from unittest.mock import patch

import pytest

from locref.core.config import Settings


class TestGeocodingSettings:
    """Test geocoding backend configuration settings."""

    def test_should_have_correct_defaults(self, test_settings):
        """Test default values."""
        assert test_settings.GEOCODING_BACKEND == "geopy"
        assert test_settings.GEOCODING_PROVIDER == "arcgis"
        assert test_settings.GEOCODING_ENABLE_FALLBACK is True
        assert test_settings.GEOCODING_CACHE_TTL == 2592000  # 30 days
        assert test_settings.REDIS_URL is None

    def test_should_override_backend_via_environment(self, test_settings):
        """Test GEOCODING_BACKEND can be overridden via environment."""
        with patch.dict(os.environ, {"GEOCODING_BACKEND": "standard"}):
            settings = Settings(_env_file=None)

        assert settings.GEOCODING_BACKEND == "standard"

    def test_should_normalize_provider(self, test_settings):
        """Test provider names are lower cased."""
        with patch.dict(os.environ, {"GEOCODING_PROVIDER": "Nominatim"}):
            settings = Settings(_env_file=None)

        assert settings.GEOCODING_PROVIDER == "nominatim"

    def test_should_reject_unknown_provider(self, test_settings):
        """Test unknown providers are rejected."""
        with patch.dict(os.environ, {"GEOCODING_PROVIDER": "bing"}):
            with pytest.raises(ValueError):
                Settings(_env_file=None)

    def test_should_reject_negative_cache_ttl(self, test_settings):
        """Test GEOCODING_CACHE_TTL must not be negative."""
        with patch.dict(os.environ, {"GEOCODING_CACHE_TTL": "-1"}):
            with pytest.raises(ValueError):
                Settings(_env_file=None)


class TestSpatialSettings:
    """Test spatial configuration settings."""

    def test_should_default_to_miles(self, test_settings):
        """Test distance units default to miles."""
        assert test_settings.DISTANCE_INPUT_UNIT == "mile"
        assert test_settings.DISTANCE_OUTPUT_UNIT == "mile"
        assert test_settings.SPATIAL_SRID is None

    def test_should_normalize_unit_aliases(self, test_settings):
        """Test unit aliases are stored by canonical name."""
        with patch.dict(
            os.environ, {"DISTANCE_INPUT_UNIT": "km", "DISTANCE_OUTPUT_UNIT": "ft"}
        ):
            settings = Settings(_env_file=None)

        assert settings.DISTANCE_INPUT_UNIT == "kilometer"
        assert settings.DISTANCE_OUTPUT_UNIT == "feet"

    def test_should_reject_unknown_unit(self, test_settings):
        """Test unknown units raise a validation error."""
        with patch.dict(os.environ, {"DISTANCE_OUTPUT_UNIT": "parsec"}):
            with pytest.raises(ValueError):
                Settings(_env_file=None)

    def test_should_parse_srid(self, test_settings):
        """Test SPATIAL_SRID is parsed as an integer."""
        with patch.dict(os.environ, {"SPATIAL_SRID": "4326"}):
            settings = Settings(_env_file=None)

        assert settings.SPATIAL_SRID == 4326
