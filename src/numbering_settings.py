"""
Settings records for page numbering

All records are frozen: every edit produces a new record via the
``with_*`` helpers or ``dataclasses.replace``.
"""

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

import config
from unit_converter import Unit, convert_units, round_to_unit, to_points


_HEX_COLOR = re.compile(r'^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$', re.IGNORECASE)


class PositionPreset(str, Enum):
    """Named anchor positions for the page number"""
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_OUTER = "bottom-outer"
    BOTTOM_INNER = "bottom-inner"
    TOP_CENTER = "top-center"
    TOP_OUTER = "top-outer"
    TOP_INNER = "top-inner"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value) -> "PositionPreset":
        """Map a preset string to a PositionPreset, falling back to bottom-center"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.BOTTOM_CENTER

    @property
    def is_top(self) -> bool:
        return self.value.startswith("top-")

    @property
    def is_inner(self) -> bool:
        return self.value.endswith("-inner")

    @property
    def is_outer(self) -> bool:
        return self.value.endswith("-outer")


@dataclass(frozen=True)
class NumberingSettings:
    """Which pages are numbered and what number each one shows"""
    visible_from_page: int = config.DEFAULT_VISIBLE_FROM_PAGE
    start_number: int = config.DEFAULT_START_NUMBER
    custom_range: bool = False
    range_from: int = config.DEFAULT_RANGE_FROM
    range_to: int = config.DEFAULT_RANGE_TO
    skip_pattern: str = ""

    def for_document(self, page_count: int) -> "NumberingSettings":
        """Settings for a freshly loaded document: the range ends on its last page"""
        return replace(self, range_to=page_count)


@dataclass(frozen=True)
class PositionSettings:
    """Where the number is drawn"""
    preset: PositionPreset = PositionPreset(config.DEFAULT_POSITION_PRESET)
    custom_x: float = config.DEFAULT_CUSTOM_X
    custom_y: float = config.DEFAULT_CUSTOM_Y
    units: Unit = Unit(config.DEFAULT_UNITS)
    gutter_margin: float = config.DEFAULT_GUTTER_MARGIN
    gutter_preset: str = config.DEFAULT_GUTTER_PRESET
    mirrored_gutter: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'preset', PositionPreset.parse(self.preset))
        object.__setattr__(self, 'units', Unit.parse(self.units))

    @property
    def gutter_points(self) -> float:
        """Gutter margin in points, unrounded"""
        return to_points(self.gutter_margin, self.units)

    def with_gutter_preset(self, label: str) -> "PositionSettings":
        """
        Select a gutter preset.

        Known presets write their inch value, expressed in the current unit,
        into ``gutter_margin``. "custom" (or any unknown label) only changes
        the label and keeps the typed margin.
        """
        inches = config.GUTTER_PRESETS_INCHES.get(label)
        if inches is None:
            return replace(self, gutter_preset=label)
        margin = round(convert_units(inches, Unit.IN, self.units), 2)
        return replace(self, gutter_preset=label, gutter_margin=margin)

    def with_units(self, units) -> "PositionSettings":
        """Re-express custom position and gutter in another unit"""
        units = Unit.parse(units)
        if units is self.units:
            return self

        def _convert(value):
            return round_to_unit(convert_units(value, self.units, units), units)

        return replace(
            self,
            units=units,
            custom_x=_convert(self.custom_x),
            custom_y=_convert(self.custom_y),
            gutter_margin=_convert(self.gutter_margin),
        )


@dataclass(frozen=True)
class FontSettings:
    """Presentation of the number text"""
    family: str = config.DEFAULT_FONT_FAMILY
    size: float = config.DEFAULT_FONT_SIZE
    color: str = config.DEFAULT_FONT_COLOR
    opacity: float = config.DEFAULT_FONT_OPACITY

    @property
    def rgb(self) -> Tuple[float, float, float]:
        """Colour as normalized (r, g, b); malformed colours are black"""
        match = _HEX_COLOR.match((self.color or "").strip())
        if not match:
            return (0.0, 0.0, 0.0)
        return tuple(int(part, 16) / 255 for part in match.groups())

    @property
    def alpha(self) -> float:
        """Opacity as 0..1"""
        return max(0.0, min(100.0, float(self.opacity))) / 100


@dataclass(frozen=True)
class PageGeometry:
    """Page size in points, origin bottom-left"""
    width: float
    height: float


def default_settings(page_count: Optional[int] = None):
    """Session defaults for (numbering, position, font)"""
    numbering = NumberingSettings()
    if page_count is not None:
        numbering = numbering.for_document(page_count)
    return numbering, PositionSettings(), FontSettings()
