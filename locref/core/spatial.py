"""Spatial math used by geocoding backends and spatial search.

Distances are planar, measured in the geometry's native coordinate space and
then converted between units. Search regions are closed polygons whose ring
runs (minLon, minLat) -> (minLon, maxLat) -> (maxLon, maxLat) ->
(maxLon, minLat) -> (minLon, minLat).
"""

import math
from collections.abc import Sequence
from typing import Any

from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from locref.core.config import Settings
from locref.core.geometry import GeometryFactory
from locref.core.logging import get_logger
from locref.core.units import (
    EARTHS_RADIUS_MILES,
    Unit,
    convert,
    deg2rad,
    parse_unit,
    rad2deg,
)
from locref.models.geographic import BoundingBox, GeoPoint

logger = get_logger(__name__)


class SpatialService:
    """Geometric utilities bound to a unit configuration and optional SRID."""

    def __init__(
        self,
        input_unit: Unit | str = Unit.MILE,
        output_unit: Unit | str = Unit.MILE,
        srid: int | None = None,
        geometry_factory: GeometryFactory | None = None,
    ):
        """Initialize the spatial service.

        Args:
            input_unit: Unit of coordinates passed to distance calculations
            output_unit: Unit distances are reported in
            srid: Optional SRID attached to every created geometry
            geometry_factory: Optional factory, defaults to a shapely factory
                using ``srid``
        """
        self.input_unit = parse_unit(input_unit)
        self.output_unit = parse_unit(output_unit)
        self.srid = srid
        self.geometry_factory = geometry_factory or GeometryFactory(srid=srid)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SpatialService":
        return cls(
            input_unit=settings.DISTANCE_INPUT_UNIT,
            output_unit=settings.DISTANCE_OUTPUT_UNIT,
            srid=settings.SPATIAL_SRID,
        )

    def offset_along_segment(
        self, pt0: Point, pt1: Point, dist: float, offset: float
    ) -> tuple[float, float]:
        """Calculate the point ``offset`` along the segment pt0 -> pt1.

        ``dist`` is the caller's segment length and is not recomputed. Offsets
        before the start return pt0, offsets past the end return pt1 and a
        zero length segment returns pt0.
        """
        if offset < 0:
            return (pt0.x, pt0.y)
        if dist == 0:
            return (pt0.x, pt0.y)
        if offset > dist:
            return (pt1.x, pt1.y)

        # Similar triangles: offset / dist == offset_x / dx == offset_y / dy
        ratio = float(offset) / float(dist)

        if pt0.y == pt1.y:  # horizontal
            return (pt0.x + ratio * (pt1.x - pt0.x), pt0.y)
        if pt0.x == pt1.x:  # vertical
            return (pt0.x, pt0.y + ratio * (pt1.y - pt0.y))

        offset_x = pt0.x + ratio * (pt1.x - pt0.x)
        offset_y = pt0.y + ratio * (pt1.y - pt0.y)
        return (offset_x, offset_y)

    def euclidean_distance(
        self,
        point1: BaseGeometry,
        point2: BaseGeometry,
        input_unit: Unit | str | None = None,
        output_unit: Unit | str | None = None,
    ) -> float:
        """Planar distance between two geometries, converted to the output unit."""
        return convert(
            point1.distance(point2),
            input_unit or self.input_unit,
            output_unit or self.output_unit,
        )

    def from_wkt(self, wkt: str) -> BaseGeometry:
        logger.debug("well_known_text", wkt=wkt)
        return self.geometry_factory.create_from_wkt(wkt)

    def search_box_from_bbox(self, bbox: str | BoundingBox) -> Polygon:
        """Build a search polygon from a bounding box.

        Args:
            bbox: A ``BoundingBox`` or a ``"minLon,minLat,maxLon,maxLat"`` string

        Raises:
            MalformedInputError: If the string form cannot be parsed
        """
        if not isinstance(bbox, BoundingBox):
            bbox = BoundingBox.from_string(bbox)
        return self.as_polygon(bbox.ring(), True)

    def search_box_from_point(
        self,
        point: GeoPoint | Point,
        radius: Any,
        unit: Unit | str = Unit.MILE,
    ) -> Polygon:
        """Build a search polygon around a point.

        The radius is turned into a great-circle angle using the earth's mean
        radius, and the longitude delta is widened by ``1 / cos(lat)``. This
        diverges near the poles.

        Args:
            point: Center as a ``GeoPoint`` or a shapely point (x=lon, y=lat)
            radius: Search radius
            unit: Unit of ``radius``, defaults to miles
        """
        lat, lng = _lat_lon(point)

        # Convert input units to miles and radians
        search_distance_in_miles = convert(radius, unit, Unit.MILE)
        search_distance_in_radians = search_distance_in_miles / EARTHS_RADIUS_MILES

        # Convert to decimal degrees, compensating for changes in latitude
        delta_lat = rad2deg(search_distance_in_radians)
        delta_lon = rad2deg(search_distance_in_radians / math.cos(deg2rad(lat)))

        bbox = BoundingBox(
            min_longitude=lng - delta_lon,
            min_latitude=lat - delta_lat,
            max_longitude=lng + delta_lon,
            max_latitude=lat + delta_lat,
        )
        return self.as_polygon(bbox.ring(), True)

    def as_point(self, lat: float, lon: float) -> Point:
        return self.geometry_factory.create_point(lat, lon)

    def as_linestring(self, coords: Sequence[Sequence[float]]) -> LineString:
        return self.geometry_factory.create_linestring(coords)

    def as_polygon(
        self, coords: Sequence[Sequence[float]], closed: bool = False
    ) -> Polygon:
        """Convert coordinate pairs into a polygon, closing the ring if needed."""
        return self.geometry_factory.create_polygon(coords, closed)


def _lat_lon(point: GeoPoint | Point) -> tuple[float, float]:
    if isinstance(point, GeoPoint):
        return point.latitude, point.longitude
    return point.y, point.x
