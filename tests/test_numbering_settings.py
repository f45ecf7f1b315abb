"""
Tests for the settings records
"""

import dataclasses

import pytest

from numbering_settings import (
    FontSettings, NumberingSettings, PositionPreset, PositionSettings, default_settings,
)
from unit_converter import Unit


def test_settings_are_immutable():
    settings = NumberingSettings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.start_number = 5


def test_strings_are_normalised_to_enums():
    position = PositionSettings(preset="TOP-OUTER", units="mm")
    assert position.preset is PositionPreset.TOP_OUTER
    assert position.units is Unit.MM


def test_unknown_strings_fall_back():
    position = PositionSettings(preset="diagonal", units="cm")
    assert position.preset is PositionPreset.BOTTOM_CENTER
    assert position.units is Unit.PT


def test_for_document_sets_range_end():
    settings = NumberingSettings(range_to=1).for_document(42)
    assert settings.range_to == 42


def test_defaults():
    numbering, position, font = default_settings(page_count=7)
    assert numbering.visible_from_page == 1
    assert numbering.range_to == 7
    assert position.preset is PositionPreset.BOTTOM_CENTER
    assert position.gutter_margin == 18
    assert position.mirrored_gutter is False
    assert font.size == 12
    assert font.opacity == 100


@pytest.mark.parametrize("units,expected", [("in", 0.5), ("mm", 12.7), ("pt", 36)])
def test_gutter_preset_writes_margin_in_current_unit(units, expected):
    position = PositionSettings(units=units).with_gutter_preset("0.5")
    assert position.gutter_preset == "0.5"
    assert position.gutter_margin == pytest.approx(expected)


def test_custom_gutter_preset_keeps_margin():
    position = PositionSettings(gutter_margin=11).with_gutter_preset("custom")
    assert position.gutter_preset == "custom"
    assert position.gutter_margin == 11


def test_with_units_keeps_physical_position():
    position = PositionSettings(custom_x=72, custom_y=36, gutter_margin=18, units="pt")
    in_inches = position.with_units("in")
    assert in_inches.units is Unit.IN
    assert in_inches.custom_x == 1
    assert in_inches.custom_y == 0.5
    assert in_inches.gutter_margin == 0.25
    assert position.units is Unit.PT


def test_gutter_points_unrounded():
    assert PositionSettings(units="mm", gutter_margin=1).gutter_points == pytest.approx(2.834645669)


@pytest.mark.parametrize("color,expected", [
    ("#ff0000", (1.0, 0.0, 0.0)),
    ("00FF80", (0.0, 1.0, 128 / 255)),
    ("red", (0.0, 0.0, 0.0)),
    ("", (0.0, 0.0, 0.0)),
])
def test_font_rgb(color, expected):
    assert FontSettings(color=color).rgb == pytest.approx(expected)


def test_font_alpha_is_clamped():
    assert FontSettings(opacity=50).alpha == 0.5
    assert FontSettings(opacity=150).alpha == 1.0
    assert FontSettings(opacity=-3).alpha == 0.0
