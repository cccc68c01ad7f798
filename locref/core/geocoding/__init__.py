"""Location reference geocoding.

This package provides:
- The geocoding backend contract and the standard reference formats
- A geopy backed backend for free text addresses
- The resolver that normalizes backend output into a LocationReference
"""

from locref.core.geocoding.base import (
    GeocodingBackend,
    NodeTopologyMixin,
    StandardGeocodingBackend,
    SupportsNodeTopology,
    operation_name,
)
from locref.core.geocoding.registry import get_backend
from locref.core.geocoding.resolver import LocationReference, LocationReferenceResolver

__all__ = [
    "GeocodingBackend",
    "NodeTopologyMixin",
    "StandardGeocodingBackend",
    "SupportsNodeTopology",
    "operation_name",
    "get_backend",
    "LocationReference",
    "LocationReferenceResolver",
]
