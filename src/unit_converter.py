"""
Unit conversion utilities for PDF positioning

PDF coordinate system uses points (pt) as the base unit
1 inch = 72 points
1 mm = 2.834645669 points

Unknown units are treated as points everywhere in this module.
"""

from enum import Enum
from typing import Tuple, Union

import config


class Unit(str, Enum):
    """Measurement units accepted by position and gutter inputs"""
    PT = "pt"
    MM = "mm"
    IN = "in"

    @classmethod
    def parse(cls, value) -> "Unit":
        """Map a unit string to a Unit, falling back to points"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.PT


UnitLike = Union[Unit, str]

_POINTS_PER_UNIT = {
    Unit.PT: 1,
    Unit.MM: config.POINTS_PER_MM,
    Unit.IN: config.POINTS_PER_INCH,
}


def to_points(value: float, unit: UnitLike) -> float:
    """Convert a value from any unit to points (PDF's native unit)"""
    unit = Unit.parse(unit)
    if unit is Unit.PT:
        return value
    return value * _POINTS_PER_UNIT[unit]


def from_points(points: float, unit: UnitLike) -> float:
    """Convert a value from points to any unit"""
    unit = Unit.parse(unit)
    if unit is Unit.PT:
        return points
    return points / _POINTS_PER_UNIT[unit]


def convert_units(value: float, from_unit: UnitLike, to_unit: UnitLike) -> float:
    """Convert a value from one unit to another, always via points"""
    from_unit = Unit.parse(from_unit)
    to_unit = Unit.parse(to_unit)
    if from_unit is to_unit:
        return value
    return from_points(to_points(value, from_unit), to_unit)


def round_to_unit(value: float, unit: UnitLike) -> float:
    """
    Round a value for display in the given unit.

    Only used for showing values to the user; placement math keeps the
    unrounded point values.
    """
    places = config.UNIT_DISPLAY_PRECISION[Unit.parse(unit).value]
    return round(value, places)


def get_step_for_unit(unit: UnitLike) -> float:
    """Get the step value for input controls based on unit"""
    return config.UNIT_INPUT_STEP[Unit.parse(unit).value]


def get_unit_limits(unit: UnitLike) -> Tuple[float, float]:
    """Get (min, max) for common measurements in each unit"""
    return config.UNIT_INPUT_LIMITS[Unit.parse(unit).value]
