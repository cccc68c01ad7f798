"""Geographic and locatable models."""

from .geographic import BoundingBox, GeoPoint
from .locatable import ParentLocatable

__all__ = [
    "BoundingBox",
    "GeoPoint",
    "ParentLocatable",
]
