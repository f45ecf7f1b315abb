"""
Position calculator for page numbers

Computes the anchor point of the number in PDF points, origin bottom-left.
The same function feeds the preview overlay and the export, so both place
the number identically.
"""

from typing import NamedTuple

import config
from numbering_settings import PageGeometry, PositionPreset, PositionSettings
from unit_converter import to_points


class Point(NamedTuple):
    x: float
    y: float


def normalize_rotation(rotation) -> int:
    """/Rotate as 0, 90, 180 or 270. Values that are not a multiple of 90 count as 0."""
    try:
        rotation = int(rotation) % 360
    except (TypeError, ValueError):
        return 0
    return rotation if rotation in (0, 90, 180, 270) else 0


def visible_geometry(crop_width: float, crop_height: float, rotation=0) -> PageGeometry:
    """
    Size of the page as it is displayed

    This is the crop box turned by the page's /Rotate, the same rectangle
    PyMuPDF reports as ``page.rect``. All anchors are computed on it.
    """
    if normalize_rotation(rotation) in (90, 270):
        return PageGeometry(crop_height, crop_width)
    return PageGeometry(crop_width, crop_height)


def to_unrotated(point: Point, geometry: PageGeometry, rotation) -> Point:
    """
    Map a point on the displayed page into the unrotated crop box

    Args:
        point (Point): Anchor on the displayed page, origin bottom-left
        geometry (PageGeometry): Displayed page size (``visible_geometry``)
        rotation: The page's /Rotate, clockwise degrees

    Returns:
        Point: The same spot in PDF user space, relative to the crop box's
        lower-left corner
    """
    rotation = normalize_rotation(rotation)
    x, y = point
    if rotation == 90:
        return Point(geometry.height - y, x)
    if rotation == 180:
        return Point(geometry.width - x, geometry.height - y)
    if rotation == 270:
        return Point(y, geometry.width - x)
    return Point(x, y)


def _preset_anchor(preset: PositionPreset, geometry: PageGeometry, margin: float) -> Point:
    """Anchor before any gutter adjustment. Outer = right edge, inner = left edge."""
    width = geometry.width
    height = geometry.height

    y = height - margin if preset.is_top else margin
    if preset.is_outer:
        x = width - margin
    elif preset.is_inner:
        x = margin
    else:
        x = width / 2
    return Point(x, y)


def _gutter_offset(page_index: int, preset: PositionPreset, gutter: float) -> float:
    """
    Horizontal shift for book-style mirrored layouts.

    Odd pages are right-hand pages (spine on the left), even pages are
    left-hand pages (spine on the right).
    """
    is_odd_page = page_index % 2 == 1
    if preset.is_inner:
        return gutter if is_odd_page else -gutter
    if preset.is_outer:
        return -gutter if is_odd_page else gutter
    return 0.0


def calculate_position(page_index: int, position: PositionSettings,
                       geometry: PageGeometry, gutter_points: float) -> Point:
    """
    Calculate where the page number goes

    Args:
        page_index (int): 1-indexed page number
        position (PositionSettings): Preset, custom coordinates, units, mirroring
        geometry (PageGeometry): Page size in points
        gutter_points (float): Gutter margin already converted to points

    Returns:
        Point: (x, y) in points from the bottom-left corner
    """
    preset = PositionPreset.parse(position.preset)

    if preset is PositionPreset.CUSTOM:
        return Point(to_points(position.custom_x, position.units),
                     to_points(position.custom_y, position.units))

    x, y = _preset_anchor(preset, geometry, config.BASE_MARGIN_POINTS)

    if position.mirrored_gutter and gutter_points > 0:
        x += _gutter_offset(page_index, preset, gutter_points)

    return Point(x, y)
