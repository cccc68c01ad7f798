"""Geographic models for search regions and coordinate handling."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from locref.core.exceptions import MalformedInputError


class GeoPoint(BaseModel):
    """Geographic point coordinates."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")

    @model_validator(mode="after")
    def validate_coordinates(self) -> "GeoPoint":
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError("Latitude must be between -90 and 90 degrees")
        if not -180 <= self.longitude <= 180:
            raise ValueError("Longitude must be between -180 and 180 degrees")
        return self


class BoundingBox(BaseModel):
    """Geographic bounding box."""

    model_config = ConfigDict(frozen=True)

    min_longitude: float = Field(..., description="Western longitude boundary")
    min_latitude: float = Field(..., description="Southern latitude boundary")
    max_longitude: float = Field(..., description="Eastern longitude boundary")
    max_latitude: float = Field(..., description="Northern latitude boundary")

    @classmethod
    def from_string(cls, bbox: str) -> "BoundingBox":
        """Create a bounding box from ``"minLon,minLat,maxLon,maxLat"``.

        Args:
            bbox: Four comma separated numbers

        Returns:
            BoundingBox: The parsed box

        Raises:
            MalformedInputError: If there are not exactly four numeric values
        """
        if not isinstance(bbox, str):
            raise MalformedInputError(f"Bounding box must be a string, got {bbox!r}")

        elems = [elem.strip() for elem in bbox.split(",")]
        if len(elems) != 4:
            raise MalformedInputError(
                f"Bounding box needs 4 comma separated values, got {len(elems)}: {bbox!r}"
            )

        try:
            min_lon, min_lat, max_lon, max_lat = (float(elem) for elem in elems)
        except ValueError:
            raise MalformedInputError(
                f"Bounding box values must be numeric: {bbox!r}"
            ) from None

        return cls(
            min_longitude=min_lon,
            min_latitude=min_lat,
            max_longitude=max_lon,
            max_latitude=max_lat,
        )

    def ring(self) -> list[list[float]]:
        """Closed ring starting and ending at the south-west corner."""
        return [
            [self.min_longitude, self.min_latitude],
            [self.min_longitude, self.max_latitude],
            [self.max_longitude, self.max_latitude],
            [self.max_longitude, self.min_latitude],
            [self.min_longitude, self.min_latitude],
        ]

