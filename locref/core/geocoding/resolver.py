"""Location reference resolution.

Centralizes the logic for parsing location references. The resolver
delegates the actual work to the configured geocoding backend: the backend
operation is derived from the location reference format (``address`` ->
``parse_address``) and the backend's state is copied into a fresh
``LocationReference`` for every call.

On success the result holds:

    formatted_reference -- canonical version of the reference returned by the
                           backend, the input itself if the backend does not
                           reformat
    coordinates         -- coordinate pairs ``[[x1, y1], ..., [xn, yn]]``
    warnings            -- warning messages returned by the backend
    from_node, to_node  -- graph endpoints, only for backends with node
                           topology

On failure the errors list holds the backend's messages, or a single message
naming the unsupported operation, and nothing else is copied.
"""

from typing import Any

from pydantic import BaseModel, Field

from locref.core.config import Settings
from locref.core.geocoding.base import (
    GeocodingBackend,
    SupportsNodeTopology,
    operation_name,
)
from locref.core.logging import get_reference_logger


class LocationReference(BaseModel):
    """Normalized outcome of resolving one location reference."""

    raw_reference: Any = None
    format: str | None = None
    formatted_reference: str | None = None
    coordinates: list[list[float]] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    from_node: Any = None
    to_node: Any = None

    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def succeeded(self) -> bool:
        return not self.errors


class LocationReferenceResolver:
    """Resolves location references through a geocoding backend."""

    def __init__(self, backend: GeocodingBackend):
        """Initialize the resolver.

        Args:
            backend: Geocoding backend that implements the parse operations
        """
        self.backend = backend
        self.result = LocationReference()

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None
    ) -> "LocationReferenceResolver":
        """Create a resolver using the backend named in the settings."""
        # Import here to avoid loading provider adapters until needed
        from locref.core.geocoding.registry import get_backend

        if settings is None:
            from locref.core.config import settings
        return cls(get_backend(settings.GEOCODING_BACKEND, settings))

    def resolve(self, reference: Any, format: str) -> tuple[bool, LocationReference]:
        """Resolve a location reference.

        Args:
            reference: Raw location reference
            format: Location reference format, case insensitive

        Returns:
            Tuple of (success, result). The result is a new object on every
            call.
        """
        logger = get_reference_logger(str(reference), format)
        logger.debug("parse_location_reference")

        result = LocationReference(raw_reference=reference, format=format)
        operation = operation_name(format)

        if not self.backend.supports(operation):
            result.errors.append(
                f"Geocoder method {operation} is not supported for geocoding "
                f"service {self.backend.name}"
            )
            logger.info("unsupported_format", operation=operation)
            return False, result

        try:
            self.backend.dispatch(operation, reference)
        except Exception:
            logger.exception("geocoding_backend_fault", operation=operation)
            raise

        if self.backend.has_errors():
            result.errors.extend(self.backend.errors)
            logger.info("location_reference_failed", errors=result.errors)
        else:
            result.warnings.extend(self.backend.warnings)
            result.coordinates = [list(pair) for pair in self.backend.coords]
            result.formatted_reference = self.backend.formatted_location_reference
            if isinstance(self.backend, SupportsNodeTopology):
                result.from_node = self.backend.from_node
                result.to_node = self.backend.to_node

        return result.succeeded, result

    def parse(self, reference: Any, format: str) -> bool:
        """Resolve a reference and keep the result on the resolver.

        Not safe for concurrent use of a shared resolver; use ``resolve`` for
        that.
        """
        success, self.result = self.resolve(reference, format)
        return success

    def has_errors(self) -> bool:
        return self.result.has_errors()
