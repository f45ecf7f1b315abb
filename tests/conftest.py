"""
Pytest configuration and fixtures for the PDF Page Numbering Tool tests
"""

import io
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import fitz  # PyMuPDF
import pytest
from reportlab.pdfgen import canvas

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def build_pdf(page_count=3, page_size=(612, 792)):
    """Create an in-memory PDF with a line of body text in the middle of each page"""
    packet = io.BytesIO()
    can = canvas.Canvas(packet, pagesize=page_size)
    width, height = page_size
    for _ in range(page_count):
        can.setFont("Helvetica", 11)
        can.drawString(72, height / 2, "Lorem ipsum dolor sit amet")
        can.showPage()
    can.save()
    return packet.getvalue()


def reshape_pdf(pdf_bytes, crop_margin=0, rotation=0):
    """Crop every page by the same margin on each side and/or set its /Rotate"""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        for page in doc:
            if crop_margin:
                rect = page.mediabox
                page.set_cropbox(fitz.Rect(rect.x0 + crop_margin, rect.y0 + crop_margin,
                                           rect.x1 - crop_margin, rect.y1 - crop_margin))
            if rotation:
                page.set_rotation(rotation)
        return doc.tobytes()


def stamped_numbers(pdf_bytes):
    """
    Read numbers back from a stamped PDF

    Returns:
        list: One entry per page, either None or (text, center_x, bottom_y)
        with bottom_y measured from the top edge as PyMuPDF reports it.
    """
    results = []
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        for page in doc:
            words = [w for w in page.get_text("words") if w[4].lstrip("-").isdigit()]
            if not words:
                results.append(None)
                continue
            x0, y0, x1, y1, text = words[0][:5]
            results.append((text, (x0 + x1) / 2, y1))
    return results


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def sample_pdf_bytes():
    """A three page US Letter PDF"""
    return build_pdf(3)


@pytest.fixture
def sample_pdf_path(temp_dir, sample_pdf_bytes):
    """Three page PDF on disk"""
    pdf_path = temp_dir / "sample.pdf"
    pdf_path.write_bytes(sample_pdf_bytes)
    yield pdf_path


@pytest.fixture
def mock_log_callback():
    """Mock callback for logging"""
    return MagicMock()


@pytest.fixture
def source_document_factory():
    """Factory for loaded SourceDocument instances"""
    from pdf_document import SourceDocument

    def _create_document(page_count=3, page_size=(612, 792), name="sample.pdf"):
        return SourceDocument.from_bytes(build_pdf(page_count, page_size), name)

    return _create_document


@pytest.fixture
def stamper_factory(mock_log_callback):
    """Factory to create stamper instances for testing"""
    from stamping_engine import PageNumberStamper

    def _create_stamper(**kwargs):
        defaults = {
            'log_callback': mock_log_callback,
        }
        defaults.update(kwargs)
        return PageNumberStamper(**defaults)

    return _create_stamper
