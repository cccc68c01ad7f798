"""Distance and angle unit conversion.

All linear conversions are multiplicative factors relative to the meter, so
converting A -> B -> A returns the original value up to floating point error.
The decimal degree is a coarse geographic approximation and is not
geodesically exact.
"""

import math
from enum import Enum
from typing import Any

from locref.core.exceptions import MalformedInputError

DEG2RAD = math.pi / 180
RAD2DEG = 180 / math.pi

EARTHS_RADIUS_MILES = 3959  # earth's mean radius, miles
EARTHS_RADIUS_KM = 6371  # earth's mean radius, km

DD_TO_MILES = 65.5375  # Approximate number of miles in a decimal degree


class Unit(str, Enum):
    """Supported linear units."""

    MILE = "mile"
    KILOMETER = "kilometer"
    METER = "meter"
    FEET = "feet"
    DECIMAL_DEGREE = "decimal_degree"


# Meters per unit
_METERS_PER_UNIT: dict[Unit, float] = {
    Unit.METER: 1.0,
    Unit.KILOMETER: 1000.0,
    Unit.FEET: 0.3048,
    Unit.MILE: 1609.344,
    Unit.DECIMAL_DEGREE: DD_TO_MILES * 1609.344,
}

_ALIASES: dict[str, Unit] = {
    "mi": Unit.MILE,
    "mile": Unit.MILE,
    "miles": Unit.MILE,
    "km": Unit.KILOMETER,
    "kilometer": Unit.KILOMETER,
    "kilometers": Unit.KILOMETER,
    "kilometre": Unit.KILOMETER,
    "kilometres": Unit.KILOMETER,
    "m": Unit.METER,
    "meter": Unit.METER,
    "meters": Unit.METER,
    "metre": Unit.METER,
    "metres": Unit.METER,
    "ft": Unit.FEET,
    "foot": Unit.FEET,
    "feet": Unit.FEET,
    "dd": Unit.DECIMAL_DEGREE,
    "degree": Unit.DECIMAL_DEGREE,
    "degrees": Unit.DECIMAL_DEGREE,
    "decimal_degree": Unit.DECIMAL_DEGREE,
    "decimal_degrees": Unit.DECIMAL_DEGREE,
}


def parse_unit(unit: Unit | str) -> Unit:
    """Resolve a unit member or name (including common aliases).

    Raises:
        MalformedInputError: If the name is not a known unit
    """
    if isinstance(unit, Unit):
        return unit
    key = str(unit).strip().lower().replace(" ", "_")
    try:
        return _ALIASES[key]
    except KeyError:
        raise MalformedInputError(f"Unknown unit of measure: {unit!r}") from None


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        raise MalformedInputError(f"Expected a numeric value, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise MalformedInputError(
            f"Expected a numeric value, got {value!r}"
        ) from None


def convert(value: Any, from_unit: Unit | str, to_unit: Unit | str) -> float:
    """Convert a length between two units.

    Args:
        value: Numeric length, or a string holding one
        from_unit: Unit the value is expressed in
        to_unit: Unit to convert to

    Returns:
        The converted length

    Raises:
        MalformedInputError: If the value is not numeric or a unit is unknown
    """
    length = _as_float(value)
    source = parse_unit(from_unit)
    target = parse_unit(to_unit)
    if source is target:
        return length
    return length * _METERS_PER_UNIT[source] / _METERS_PER_UNIT[target]


def deg2rad(degrees: float) -> float:
    return _as_float(degrees) * DEG2RAD


def rad2deg(radians: float) -> float:
    return _as_float(radians) * RAD2DEG


def dd_to_uom(length: Any, unit: Unit | str) -> float:
    """Convert a length in decimal degrees to ``unit``."""
    return convert(length, Unit.DECIMAL_DEGREE, unit)


def uom_to_dd(length: Any, unit: Unit | str) -> float:
    """Convert a length in ``unit`` to decimal degrees."""
    return convert(length, unit, Unit.DECIMAL_DEGREE)


MILES_TO_METERS = convert(1, Unit.MILE, Unit.METER)  # Number of meters in a mile
MILES_TO_KM = convert(1, Unit.MILE, Unit.KILOMETER)  # Number of kilometers in a mile
MILES_TO_FEET = convert(1, Unit.MILE, Unit.FEET)  # Number of feet in a mile
