"""
Centralized configuration for the PDF Page Numbering Tool
Contains all shared constants and settings
"""

# Unit conversion (PDF points are the native unit, 1 inch = 72 points)
POINTS_PER_INCH = 72
POINTS_PER_MM = 2.834645669  # 72 / 25.4

# Display rounding precision (decimal places) per unit
UNIT_DISPLAY_PRECISION = {
    "pt": 1,
    "mm": 2,
    "in": 3,
}

# Input step per unit
UNIT_INPUT_STEP = {
    "pt": 1,
    "mm": 0.1,
    "in": 0.01,
}

# Input limits per unit (0 to 10 inches in every unit)
UNIT_INPUT_LIMITS = {
    "pt": (0, 720),
    "mm": (0, 254),
    "in": (0, 10),
}

# Skip patterns: ranges never expand past this page when the page count is unknown
MAX_SKIP_PAGE = 100_000

# Placement
BASE_MARGIN_POINTS = 24  # Distance of every preset anchor from the page edges

# Numbering defaults
DEFAULT_VISIBLE_FROM_PAGE = 1
DEFAULT_START_NUMBER = 1
DEFAULT_RANGE_FROM = 1
DEFAULT_RANGE_TO = 1

# Position defaults
DEFAULT_POSITION_PRESET = "bottom-center"
DEFAULT_CUSTOM_X = 36
DEFAULT_CUSTOM_Y = 24
DEFAULT_UNITS = "pt"
DEFAULT_GUTTER_MARGIN = 18
DEFAULT_GUTTER_PRESET = "custom"

# Gutter presets (label -> inches). "custom" keeps whatever margin is typed in.
GUTTER_PRESETS_INCHES = {
    "0.3": 0.3,
    "0.4": 0.4,
    "0.5": 0.5,
    "0.75": 0.75,
    "1.0": 1.0,
}

# Font configuration
DEFAULT_FONT_FAMILY = "inter"
DEFAULT_FONT_SIZE = 12
DEFAULT_FONT_COLOR = "#000000"
DEFAULT_FONT_OPACITY = 100

# Family -> standard PDF font. Anything else falls back to DEFAULT_PDF_FONT.
STANDARD_FONTS = {
    "helvetica": "Helvetica",
    "times": "Times-Roman",
    "courier": "Courier",
}
DEFAULT_PDF_FONT = "Helvetica"

# Standard PDF font -> PyMuPDF Base-14 font used to draw the preview
PREVIEW_FONTS = {
    "Helvetica": "helv",
    "Times-Roman": "tiro",
    "Courier": "cour",
}

# Preview zoom (percent)
DEFAULT_ZOOM = 75
ZOOM_STEP = 25
MIN_ZOOM = 25
MAX_ZOOM = 200

# Export / HTTP boundary
OUTPUT_SUFFIX = "_numbered"
PDF_CONTENT_TYPE = "application/pdf"
MAX_UPLOAD_BYTES = 8 * 1024 * 1024  # 8 MB
SERVICE_NAME = "PDF Page Numbering"
VERSION = "1.0.0"
