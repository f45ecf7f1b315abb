"""
Tests for unit conversion
"""

import pytest

from unit_converter import (
    Unit, convert_units, from_points, get_step_for_unit, get_unit_limits,
    round_to_unit, to_points,
)


def test_inch_is_exactly_72_points():
    assert to_points(1, "in") == 72


def test_millimeter_in_points():
    assert to_points(1, "mm") == pytest.approx(2.834645669, abs=1e-9)


def test_points_are_identity():
    assert to_points(13.37, "pt") == 13.37
    assert from_points(13.37, "pt") == 13.37


@pytest.mark.parametrize("unit", ["pt", "mm", "in"])
@pytest.mark.parametrize("value", [0, 1, 18, 25.4, 612.5])
def test_round_trip_through_points(unit, value):
    assert from_points(to_points(value, unit), unit) == pytest.approx(value)


def test_convert_goes_through_points():
    assert convert_units(1, "in", "mm") == pytest.approx(25.4)
    assert convert_units(72, "pt", "in") == pytest.approx(1)


def test_convert_same_unit_is_untouched():
    assert convert_units(0.123456789, "mm", "mm") == 0.123456789


def test_unknown_unit_is_treated_as_points():
    assert Unit.parse("furlong") is Unit.PT
    assert to_points(42, "furlong") == 42
    assert from_points(42, None) == 42
    assert convert_units(10, "cubits", "in") == pytest.approx(10 / 72)


def test_unit_parse_is_case_and_space_tolerant():
    assert Unit.parse(" MM ") is Unit.MM
    assert Unit.parse(Unit.IN) is Unit.IN


def test_display_rounding_per_unit():
    assert round_to_unit(12.3456, "pt") == 12.3
    assert round_to_unit(12.3456, "mm") == 12.35
    assert round_to_unit(12.34567, "in") == 12.346
    assert round_to_unit(12.3456, "unknown") == 12.3


def test_input_steps_and_limits():
    assert get_step_for_unit("pt") == 1
    assert get_step_for_unit("mm") == 0.1
    assert get_step_for_unit("in") == 0.01
    assert get_unit_limits("mm") == (0, 254)
    assert get_unit_limits("bogus") == (0, 720)
