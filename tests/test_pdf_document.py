"""
Tests for document loading and validation
"""

import io

import fitz  # PyMuPDF
import pytest

import config
from conftest import build_pdf, reshape_pdf
from error_handling import ErrorHandler, ResourceError, ValidationError
from numbering_settings import PageGeometry
from pdf_document import SourceDocument, output_filename


def test_loads_page_count_and_geometry(mock_log_callback):
    handler = ErrorHandler(log_callback=mock_log_callback)
    document = SourceDocument.from_bytes(build_pdf(4, (595, 842)), "a4.pdf", handler)

    assert document.page_count == 4
    assert document.geometry(1) == PageGeometry(595, 842)
    assert document.output_name == "a4_numbered.pdf"
    mock_log_callback.assert_called_with("Loaded a4.pdf (4 pages)")


def test_every_consumer_gets_its_own_copy():
    data = build_pdf(1)
    document = SourceDocument.from_bytes(data)

    first = document.copy_bytes()
    first[:4] = b"XXXX"
    second = document.copy_bytes()

    assert second is not first
    assert bytes(second) == data


def test_from_path(sample_pdf_path):
    document = SourceDocument.from_path(sample_pdf_path)
    assert document.name == "sample.pdf"
    assert document.page_count == 3
    assert document.size_bytes == sample_pdf_path.stat().st_size


def test_missing_file(temp_dir):
    with pytest.raises(ValidationError, match="does not exist"):
        SourceDocument.from_path(temp_dir / "nope.pdf")


@pytest.mark.parametrize("data", [b"", b"not a pdf at all", b"%PDF-1.7\n%%EOF"])
def test_unreadable_documents(data):
    with pytest.raises(ValidationError):
        SourceDocument.from_bytes(data, "broken.pdf")


def test_encrypted_document():
    doc = fitz.open(stream=build_pdf(1), filetype="pdf")
    buffer = io.BytesIO()
    doc.save(buffer, encryption=fitz.PDF_ENCRYPT_AES_256, owner_pw="owner", user_pw="user")
    doc.close()

    with pytest.raises(ValidationError, match="password"):
        SourceDocument.from_bytes(buffer.getvalue(), "locked.pdf")


@pytest.mark.parametrize("name,expected", [
    ("report.pdf", "report_numbered.pdf"),
    ("archive.v2.pdf", "archive.v2_numbered.pdf"),
    ("noext", "noext_numbered.pdf"),
    ("", "document_numbered.pdf"),
])
def test_output_filename(name, expected):
    assert output_filename(name) == expected


def test_upload_size_limit():
    handler = ErrorHandler()
    handler.validate_upload_size(config.MAX_UPLOAD_BYTES)
    with pytest.raises(ResourceError, match="too large"):
        handler.validate_upload_size(config.MAX_UPLOAD_BYTES + 1)
    with pytest.raises(ResourceError):
        handler.validate_upload_size(11, limit=10)


def test_geometry_is_the_displayed_page():
    cropped = SourceDocument.from_bytes(reshape_pdf(build_pdf(1), crop_margin=50))
    rotated = SourceDocument.from_bytes(reshape_pdf(build_pdf(1), rotation=270))

    assert cropped.geometry(1) == PageGeometry(512, 692)
    assert rotated.geometry(1) == PageGeometry(792, 612)
