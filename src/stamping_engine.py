"""
Page Number Stamping Module
Adds page numbers to every selected page of a PDF document

Each number is drawn on a one-page reportlab overlay the size of the target
page and merged onto it with PyPDF2. Anchors come from ``calculate_position``
on the displayed page (crop box after /Rotate); the reportlab canvas shares
the PDF coordinate system, so only the crop offset and the page rotation
have to be undone before drawing.
"""

import io
import logging
from pathlib import Path
from typing import Callable, Optional

from PyPDF2 import PdfReader, PdfWriter, Transformation
from reportlab.pdfgen import canvas

import config
from error_handling import ErrorHandler, ProcessingError
from numbering_policy import (
    REASON_BEFORE_START, REASON_OUTSIDE_RANGE, REASON_SKIPPED, get_display_number, should_show_number,
)
from numbering_settings import FontSettings, NumberingSettings, PageGeometry, PositionSettings
from pdf_document import SourceDocument
from position_calculator import calculate_position, normalize_rotation, to_unrotated, visible_geometry
from skip_pattern import parse_skip_pattern

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def resolve_font_name(family: str) -> str:
    """Map a font family to a standard PDF font, Helvetica when unknown"""
    key = (family or "").strip().lower()
    return config.STANDARD_FONTS.get(key, config.DEFAULT_PDF_FONT)


class PageNumberStamper:
    """
    Stamps page numbers onto PDF documents

    The numbering decision and anchor come from the same policy and
    position functions the preview uses.
    """

    def __init__(self, logger_manager=None, log_callback=None):
        """
        Initialize the stamper

        Args:
            logger_manager: Optional LoggerManager recording the session
            log_callback: Optional callback function for logging messages
        """
        self.logger_manager = logger_manager
        self.log_callback = log_callback
        self.error_handler = ErrorHandler(logger=logger, log_callback=log_callback)

    def log(self, message):
        """Log a message using the callback"""
        if self.log_callback:
            self.log_callback(message)

    def stamp(self, pdf_bytes: bytes, numbering: NumberingSettings, position: PositionSettings,
              font: FontSettings, on_progress: Optional[ProgressCallback] = None,
              source_name: str = "document.pdf") -> bytes:
        """
        Add page numbers to a PDF

        Args:
            pdf_bytes (bytes): Source PDF, left untouched
            numbering (NumberingSettings): Which pages and which numbers
            position (PositionSettings): Where the number goes
            font (FontSettings): How the number looks
            on_progress: Called with (current_page, total_pages) for every page
            source_name (str): Name used in log messages

        Returns:
            bytes: The new PDF

        Raises:
            ProcessingError: The document could not be read, drawn on or saved.
                Nothing partial is returned.
        """
        try:
            reader = PdfReader(io.BytesIO(bytes(pdf_bytes)))
            if reader.is_encrypted:
                raise ProcessingError(f"PDF is password-protected: {source_name}")

            pages = reader.pages
            total_pages = len(pages)
            font_name = resolve_font_name(font.family)
            gutter_points = position.gutter_points
            skip_pages = parse_skip_pattern(numbering.skip_pattern, total_pages)

            if self.logger_manager:
                self.logger_manager.start_session(source_name, total_pages, numbering, position, font)
            self.log(f"Adding page numbers to {source_name} ({total_pages} pages, font {font_name})")

            writer = PdfWriter()
            numbered = 0
            for page_index, page in enumerate(pages, start=1):
                if on_progress:
                    on_progress(page_index, total_pages)

                if not should_show_number(page_index, numbering, total_pages):
                    self._record_skip(page_index, numbering)
                elif page_index in skip_pages:
                    self._record_skip(page_index, numbering, REASON_SKIPPED)
                else:
                    self._add_number_to_page(page, page_index, numbering, position,
                                             font, font_name, gutter_points)
                    numbered += 1

                writer.add_page(page)

            output = io.BytesIO()
            writer.write(output)

        except ProcessingError as e:
            self._record_failure(e)
            raise
        except Exception as e:
            self._record_failure(e)
            raise self.error_handler.wrap_processing_error(f"Numbering {source_name}", e) from e

        if self.logger_manager:
            self.logger_manager.finalize_session()
        self.log(f"✓ Page numbering completed for {source_name} ({numbered} of {total_pages} pages numbered)")
        return output.getvalue()

    def stamp_document(self, document: SourceDocument, numbering: NumberingSettings,
                       position: PositionSettings, font: FontSettings,
                       on_progress: Optional[ProgressCallback] = None) -> bytes:
        """Stamp a loaded SourceDocument using its own copy of the bytes"""
        return self.stamp(document.copy_bytes(), numbering, position, font,
                          on_progress, source_name=document.name)

    def stamp_file(self, input_pdf_path, output_pdf_path, numbering: NumberingSettings,
                   position: PositionSettings, font: FontSettings,
                   on_progress: Optional[ProgressCallback] = None) -> Path:
        """
        Stamp a PDF on disk and write the result

        Returns:
            Path: The written output file
        """
        document = SourceDocument.from_path(input_pdf_path, self.error_handler)
        result = self.stamp_document(document, numbering, position, font, on_progress)

        output_file = Path(output_pdf_path)
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_bytes(result)
        except OSError as e:
            raise self.error_handler.wrap_processing_error(f"Saving {output_file.name}", e) from e
        return output_file

    def _record_failure(self, error):
        if self.logger_manager:
            self.logger_manager.log_error('stamp', error)
            self.logger_manager.close_file_logging()

    def _record_skip(self, page_index, numbering, reason=None):
        if reason is None:
            reason = REASON_BEFORE_START if page_index < numbering.visible_from_page else REASON_OUTSIDE_RANGE
        if self.logger_manager:
            self.logger_manager.log_page_skipped(page_index, reason)

    def _add_number_to_page(self, page, page_index, numbering, position, font, font_name, gutter_points):
        """
        Draw the display number of one page onto it

        The anchor is computed on the displayed page (crop box turned by
        /Rotate), exactly like the preview, then mapped back into user space.
        """
        mediabox = page.mediabox
        cropbox = page.cropbox
        rotation = normalize_rotation(page.rotation)

        geometry = visible_geometry(float(cropbox.width), float(cropbox.height), rotation)
        anchor = calculate_position(page_index, position, geometry, gutter_points)
        local = to_unrotated(anchor, geometry, rotation)
        text = str(get_display_number(page_index, numbering))

        # Overlay coordinates are relative to the mediabox corner
        overlay = self._create_overlay(
            PageGeometry(float(mediabox.width), float(mediabox.height)), text,
            local.x + float(cropbox.left) - float(mediabox.left),
            local.y + float(cropbox.bottom) - float(mediabox.bottom),
            rotation, font, font_name,
        )
        page.merge_transformed_page(
            overlay, Transformation().translate(float(mediabox.left), float(mediabox.bottom)))

        if self.logger_manager:
            self.logger_manager.log_page_numbered(page_index, text, anchor.x, anchor.y)

    def _create_overlay(self, geometry, text, x, y, rotation, font, font_name):
        """One-page PDF with the number centred on x, baseline on y, upright once /Rotate is applied"""
        packet = io.BytesIO()
        can = canvas.Canvas(packet, pagesize=(geometry.width, geometry.height))
        can.setFont(font_name, font.size)
        can.setFillColorRGB(*font.rgb)
        can.setFillAlpha(font.alpha)
        can.translate(x, y)
        can.rotate(rotation)
        can.drawCentredString(0, 0, text)
        can.save()
        packet.seek(0)
        return PdfReader(packet).pages[0]
