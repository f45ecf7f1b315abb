"""
Preview rendering

Rasterises one page with PyMuPDF and overlays the page number with Pillow.
The anchor is computed in points by ``calculate_position`` (exactly as the
export does) and only then scaled to screen pixels.
"""

import io
import logging
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional, Tuple

import fitz  # PyMuPDF
from PIL import Image, ImageDraw, ImageFont

import config
from error_handling import ErrorHandler, ProcessingError, ValidationError
from numbering_policy import get_display_number, is_page_numbered
from numbering_settings import FontSettings, NumberingSettings, PageGeometry, PositionSettings
from pdf_document import SourceDocument
from position_calculator import Point, calculate_position, visible_geometry
from preview_state import PreviewState, clamp_page
from skip_pattern import parse_skip_pattern
from stamping_engine import resolve_font_name

logger = logging.getLogger(__name__)


@dataclass
class PreviewFrame:
    """One rendered preview page"""
    image: Image.Image
    page_index: int
    zoom: int
    show_number: bool
    display_number: int
    anchor: Point
    screen_anchor: Tuple[float, float]


def to_screen(point: Point, geometry: PageGeometry, scale: float) -> Tuple[float, float]:
    """PDF points (origin bottom-left) to raster pixels (origin top-left)"""
    return point.x * scale, (geometry.height - point.y) * scale


@lru_cache(maxsize=None)
def _base14_font_file(code: str) -> bytes:
    return fitz.Font(fontname=code).buffer


def preview_font(family: str, size: float):
    """
    Pillow font matching the standard PDF font the export uses

    The bytes come from the Base-14 fonts bundled with PyMuPDF, the faces it
    draws Helvetica, Times and Courier with. Falls back to Pillow's default
    face if FreeType cannot read the font.
    """
    pixel_size = max(1, round(size))
    code = config.PREVIEW_FONTS.get(resolve_font_name(family), config.PREVIEW_FONTS[config.DEFAULT_PDF_FONT])
    try:
        return ImageFont.truetype(io.BytesIO(_base14_font_file(code)), pixel_size)
    except (OSError, RuntimeError, ValueError) as e:
        logger.warning(f"Preview font {code} unavailable, using default face: {e}")
        return ImageFont.load_default(size=pixel_size)


class PreviewRenderer:
    """Renders preview frames for a loaded document"""

    def __init__(self, error_handler: Optional[ErrorHandler] = None):
        self.error_handler = error_handler or ErrorHandler(logger=logger)

    def render(self, document: SourceDocument, page_index: int, numbering: NumberingSettings,
               position: PositionSettings, font: FontSettings,
               zoom: int = config.DEFAULT_ZOOM) -> PreviewFrame:
        """
        Render a page with its number overlay

        Raises:
            ValidationError: The document bytes could not be opened
            ProcessingError: The page could not be rasterised
        """
        page_index = clamp_page(page_index, document.page_count)
        scale = zoom / 100

        with self.error_handler.safe_pdf_operation(document.copy_bytes(), document.name) as doc:
            try:
                page = doc[page_index - 1]
                geometry = visible_geometry(page.cropbox.width, page.cropbox.height, page.rotation)
                pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
                image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
            except Exception as e:
                raise self.error_handler.wrap_processing_error(
                    f"Rendering page {page_index} of {document.name}", e) from e

        skip_pages = parse_skip_pattern(numbering.skip_pattern, document.page_count)
        show_number = is_page_numbered(page_index, numbering, skip_pages, document.page_count)
        display_number = get_display_number(page_index, numbering)
        anchor = calculate_position(page_index, position, geometry, position.gutter_points)
        screen_anchor = to_screen(anchor, geometry, scale)

        if show_number:
            image = self._draw_number(image, str(display_number), screen_anchor, font, scale)

        return PreviewFrame(
            image=image,
            page_index=page_index,
            zoom=zoom,
            show_number=show_number,
            display_number=display_number,
            anchor=anchor,
            screen_anchor=screen_anchor,
        )

    def _draw_number(self, image, text, screen_anchor, font, scale):
        """Composite the number centred on the anchor with its baseline on it"""
        pil_font = preview_font(font.family, font.size * scale)
        r, g, b = (round(channel * 255) for channel in font.rgb)
        fill = (r, g, b, round(font.alpha * 255))

        layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        x, y = screen_anchor
        if isinstance(pil_font, ImageFont.FreeTypeFont):
            draw.text((x, y), text, font=pil_font, fill=fill, anchor="ms")
        else:
            left, top, right, bottom = draw.textbbox((0, 0), text, font=pil_font)
            draw.text((x - (right - left) / 2 - left, y - bottom), text, font=pil_font, fill=fill)

        return Image.alpha_composite(image.convert("RGBA"), layer).convert("RGB")


class PreviewController:
    """
    Keeps the preview in step with the latest settings

    Each refresh supersedes the previous one; a render that finishes after
    a newer request was made is dropped.
    """

    def __init__(self, document: SourceDocument, renderer: Optional[PreviewRenderer] = None,
                 state: Optional[PreviewState] = None, log_callback: Optional[Callable] = None):
        self.document = document
        self.renderer = renderer or PreviewRenderer()
        self.state = state or PreviewState(log_callback=log_callback)

    def refresh(self, page_index: int, numbering: NumberingSettings, position: PositionSettings,
                font: FontSettings, zoom: int = config.DEFAULT_ZOOM) -> Optional[PreviewFrame]:
        """
        Render and publish a frame

        Returns:
            PreviewFrame: The frame now on display. After a failure this is
            the previous good frame (or None if there never was one).
        """
        request = self.state.begin(page_index, zoom, (numbering, position, font))
        return self._complete(request, numbering, position, font)

    def refresh_in_background(self, page_index: int, numbering: NumberingSettings,
                              position: PositionSettings, font: FontSettings,
                              zoom: int = config.DEFAULT_ZOOM,
                              on_done: Optional[Callable] = None) -> threading.Thread:
        """
        Like ``refresh`` but renders on a worker thread

        The request is registered before the thread starts, so call order
        decides which render wins. ``on_done`` receives the displayed frame.
        """
        request = self.state.begin(page_index, zoom, (numbering, position, font))

        def _worker():
            frame = self._complete(request, numbering, position, font)
            if on_done:
                on_done(frame)

        thread = threading.Thread(target=_worker, daemon=True)
        thread.start()
        return thread

    def _complete(self, request, numbering, position, font):
        try:
            frame = self.renderer.render(self.document, request.page_index, numbering,
                                         position, font, request.zoom)
        except (ValidationError, ProcessingError) as e:
            logger.warning(f"Preview of page {request.page_index} failed: {e}")
            self.state.fail(request.token, e)
            return self.state.frame

        self.state.commit(request.token, frame)
        return self.state.frame
