"""Geocoding backend contract and the standard location reference formats.

A backend exposes one ``parse_<format>`` operation per location reference
format it understands. Operations never raise for ordinary parse failures;
they record messages in ``errors`` and leave the harvested state
(``coords``, ``formatted_location_reference``, ``warnings``) for the resolver
to copy. Every backend understands the standard formats:

    coordinate       -- "lat, lon" in decimal degrees or degrees-minutes-seconds
    well_known_text  -- any WKT geometry
    derived          -- a reference derived from a parent entity, no geometry
    null             -- no location reference at all

Providers add their own formats (``parse_address``, ``parse_route_milepoint``,
...) as methods, or register them at runtime with ``register_parser``.
"""

import functools
from abc import ABC
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

import shapely
from geopy.point import Point as GeopyPoint
from shapely import wkt as shapely_wkt
from shapely.errors import ShapelyError
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry, BaseMultipartGeometry

from locref.models.geographic import GeoPoint

PARSE_PREFIX = "parse_"

Parser = Callable[[Any], None]


def operation_name(format: str) -> str:
    """Derive the backend operation name for a location reference format.

    The mapping is total and case insensitive: ``"Address"`` and
    ``"ADDRESS"`` both map to ``parse_address`` and an empty format maps to
    ``parse_``.
    """
    return f"{PARSE_PREFIX}{(format or '').strip().lower()}"


@runtime_checkable
class SupportsNodeTopology(Protocol):
    """Backends that report graph endpoints for a resolved reference."""

    from_node: Any
    to_node: Any


class GeocodingBackend(ABC):
    """Base class for geocoding backends.

    Subclasses add ``parse_<format>`` methods. The dispatch table is built
    when the backend is created, so capability checks are dictionary lookups
    rather than attribute probing.
    """

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.coords: list[list[float]] = []
        self.formatted_location_reference: str | None = None
        self._parsers: dict[str, Parser] = {}

        for attr in dir(type(self)):
            if attr.startswith(PARSE_PREFIX) and callable(getattr(type(self), attr)):
                self._parsers[attr] = getattr(self, attr)

    @property
    def name(self) -> str:
        return type(self).__name__

    def has_errors(self) -> bool:
        return bool(self.errors)

    def reset(self) -> None:
        """Clear the state left by the previous operation."""
        self.errors = []
        self.warnings = []
        self.coords = []
        self.formatted_location_reference = None
        if isinstance(self, SupportsNodeTopology):
            self.from_node = None
            self.to_node = None

    def register_parser(
        self, format: str, parser: Callable[["GeocodingBackend", Any], None]
    ) -> str:
        """Add a parser for ``format`` to this backend's dispatch table.

        Args:
            format: Location reference format the parser handles
            parser: Callable taking ``(backend, reference)`` that populates
                the backend state

        Returns:
            The operation name the parser was registered under
        """
        operation = operation_name(format)
        self._parsers[operation] = functools.partial(parser, self)
        return operation

    def supported_operations(self) -> list[str]:
        return sorted(self._parsers)

    def supports(self, operation: str) -> bool:
        return operation in self._parsers

    def dispatch(self, operation: str, reference: Any) -> None:
        """Reset the backend state and run ``operation`` on ``reference``.

        Raises:
            KeyError: If the operation is not in the dispatch table
        """
        parser = self._parsers[operation]
        self.reset()
        parser(reference)

    def parse_coordinate(self, reference: Any) -> None:
        """Parse a ``"lat, lon"`` coordinate pair."""
        text = str(reference or "").strip()
        if not text:
            self.errors.append("Coordinate location reference is empty")
            return

        try:
            lat, lon = (float(value) for value in text.split(","))
        except ValueError:
            # Not plain decimal degrees, let geopy try DMS and other notations
            try:
                parsed = _UnwrappedPoint.from_string(text)
            except ValueError as e:
                self.errors.append(f"Unable to parse coordinate '{text}': {e}")
                return
            lat, lon = parsed.raw_latitude, parsed.raw_longitude

        try:
            point = GeoPoint(latitude=lat, longitude=lon)
        except ValueError as e:
            self.errors.append(f"Invalid coordinate '{text}': {_first_error(e)}")
            return

        self.coords = [[point.longitude, point.latitude]]
        self.formatted_location_reference = (
            f"{point.latitude:.6f}, {point.longitude:.6f}"
        )

    def parse_well_known_text(self, reference: Any) -> None:
        """Parse a well-known text geometry."""
        text = str(reference or "").strip()
        if not text:
            self.errors.append("Well-known text location reference is empty")
            return

        try:
            geometry = shapely_wkt.loads(text)
        except ShapelyError as e:
            self.errors.append(f"Invalid well-known text '{text[:50]}': {e}")
            return

        self.formatted_location_reference = geometry.wkt
        if geometry.is_empty:
            self.warnings.append(f"{geometry.geom_type} geometry is empty")
            return

        if isinstance(geometry, BaseMultipartGeometry) and len(geometry.geoms) > 1:
            self.warnings.append(
                f"{geometry.geom_type} has {len(geometry.geoms)} parts, "
                "coordinates of the parts are concatenated"
            )
        if any(
            isinstance(part, Polygon) and part.interiors for part in _parts(geometry)
        ):
            self.warnings.append("Polygon interior rings are not included")
        self.coords = _coordinates(geometry)

    def parse_derived(self, reference: Any) -> None:
        """Accept a reference derived from a parent; it carries no geometry."""
        self.formatted_location_reference = "" if reference is None else str(reference)

    def parse_null(self, reference: Any) -> None:
        self.formatted_location_reference = "" if reference is None else str(reference)


class NodeTopologyMixin:
    """Adds graph endpoint ids to a backend.

    ``from_node`` is an intersection node, the first node of a cross street
    list or the last FromId of a block face list. ``to_node`` is empty for an
    intersection, otherwise the last node of a cross street list or the last
    ToId of a block face list.
    """

    from_node: Any = None
    to_node: Any = None


class StandardGeocodingBackend(GeocodingBackend):
    """Backend that only understands the standard formats."""


class _UnwrappedPoint(GeopyPoint):
    """geopy point that keeps the parsed values instead of wrapping them."""

    def __new__(cls, latitude=None, longitude=None, altitude=None):
        point = super().__new__(cls)
        point.raw_latitude = float(latitude or 0.0)
        point.raw_longitude = float(longitude or 0.0)
        return point


def _parts(geometry: BaseGeometry) -> list[BaseGeometry]:
    if isinstance(geometry, BaseMultipartGeometry):
        return [p for part in geometry.geoms for p in _parts(part)]
    return [geometry]


def _coordinates(geometry: BaseGeometry) -> list[list[float]]:
    """Coordinate sequence of a geometry, exterior rings only for polygons."""
    coords: list[list[float]] = []
    for part in _parts(geometry):
        if isinstance(part, Polygon):
            part = part.exterior
        coords.extend(shapely.get_coordinates(part).tolist())
    return coords


def _first_error(error: ValueError) -> str:
    errors = getattr(error, "errors", None)
    if callable(errors):
        details = errors()
        if details:
            return str(details[0].get("msg", error))
    return str(error)
