"""Application configuration."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from locref.core.exceptions import MalformedInputError
from locref.core.units import parse_unit


class Settings(BaseSettings):
    """
    Location reference settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    app_name: str = "locref"
    version: str = "0.1.0"

    # Geocoding backend selection
    GEOCODING_BACKEND: str = Field(
        default="geopy",
        description="Registered backend name or a 'module:Class' path",
    )

    # Geopy adapter settings
    GEOCODING_PROVIDER: str = "arcgis"
    GEOCODING_ENABLE_FALLBACK: bool = True
    GEOCODING_TIMEOUT: int = Field(default=10, ge=1)
    GEOCODING_RATE_LIMIT: float = Field(default=1.1, ge=0)
    GEOCODING_MAX_RETRIES: int = Field(default=3, ge=0)
    GEOCODING_CACHE_TTL: int = Field(default=2592000, ge=0)  # 30 days
    NOMINATIM_USER_AGENT: str = "locref"

    # Redis Settings (geocoding result cache, disabled when unset)
    REDIS_URL: str | None = None

    # Spatial Settings
    DISTANCE_INPUT_UNIT: str = "mile"
    DISTANCE_OUTPUT_UNIT: str = "mile"
    SPATIAL_SRID: int | None = None

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @field_validator("GEOCODING_PROVIDER")
    @classmethod
    def validate_provider(cls, value: str) -> str:
        """Normalize and validate the primary geopy provider."""
        provider = value.strip().lower()
        if provider not in ("arcgis", "nominatim"):
            raise ValueError(f"Unsupported geocoding provider: {value}")
        return provider

    @field_validator("DISTANCE_INPUT_UNIT", "DISTANCE_OUTPUT_UNIT")
    @classmethod
    def validate_unit(cls, value: str) -> str:
        """Reject unit names the converter does not know."""
        try:
            return parse_unit(value).value
        except MalformedInputError as e:
            raise ValueError(str(e)) from e


# Create settings instance
settings = Settings()
