"""Shapely-backed geometry factory.

Coordinates are stored as (x, y) = (longitude, latitude). When an SRID is
configured it is attached to every geometry the factory creates.
"""

from collections.abc import Sequence

import shapely
from shapely import wkt as shapely_wkt
from shapely.errors import GEOSException
from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from locref.core.exceptions import MalformedInputError

Coordinate = Sequence[float]


class GeometryFactory:
    """Creates point, line and polygon geometries."""

    def __init__(self, srid: int | None = None):
        self.srid = srid

    def _with_srid(self, geometry: BaseGeometry) -> BaseGeometry:
        if self.srid is None:
            return geometry
        return shapely.set_srid(geometry, self.srid)

    def create_point(self, lat: float, lon: float) -> Point:
        """Create a point from a latitude/longitude pair."""
        return self._with_srid(Point(float(lon), float(lat)))

    def create_linestring(self, coords: Sequence[Coordinate]) -> LineString:
        """Create a line string from ``[[x1, y1], ..., [xn, yn]]``."""
        return self._with_srid(LineString([(float(x), float(y)) for x, y in coords]))

    def create_polygon(
        self, coords: Sequence[Coordinate], closed: bool = False
    ) -> Polygon:
        """Create a polygon from a ring of coordinates.

        Args:
            coords: Ring coordinates as ``[[x, y], ...]``
            closed: Whether the first coordinate is already repeated at the end.
                Open rings are closed before the polygon is built.
        """
        ring = [(float(x), float(y)) for x, y in coords]
        if not closed and ring and ring[0] != ring[-1]:
            ring.append(ring[0])
        return self._with_srid(Polygon(ring))

    def create_from_wkt(self, wkt: str) -> BaseGeometry:
        """Create a geometry from well-known text.

        Raises:
            MalformedInputError: If the text is not valid WKT
        """
        if not isinstance(wkt, str):
            raise MalformedInputError(f"Well-known text must be a string, got {wkt!r}")
        try:
            geometry = shapely_wkt.loads(wkt)
        except (GEOSException, ValueError) as e:
            raise MalformedInputError(f"Invalid well-known text: {e}") from e
        return self._with_srid(geometry)
