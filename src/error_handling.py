"""
Error handling utilities for the PDF Page Numbering Tool.
Validation of source documents and uploads, plus safe PyMuPDF access.

Only document I/O can fail; the placement and numbering functions have
total domains and never raise.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Optional

import fitz  # PyMuPDF

import config


class ValidationError(Exception):
    """Raised when a source document cannot be loaded or validated"""
    pass


class ResourceError(Exception):
    """Raised when an upload exceeds its size limit"""
    pass


class ProcessingError(Exception):
    """Raised when rendering, stamping or saving a document fails"""
    pass


class ErrorHandler:
    """Validation and safe document access"""

    def __init__(self, logger=None, log_callback: Optional[Callable[[str], None]] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.log_callback = log_callback

    def log(self, message: str):
        if self.log_callback:
            self.log_callback(message)

    def validate_upload_size(self, size_bytes: int, limit: Optional[int] = None) -> None:
        """Reject uploads above the configured limit before any processing"""
        if limit is None:
            limit = config.MAX_UPLOAD_BYTES
        if size_bytes > limit:
            size_mb = size_bytes / (1024 * 1024)
            limit_mb = limit / (1024 * 1024)
            raise ResourceError(f"File too large ({size_mb:.1f}MB - limit {limit_mb:.0f}MB)")

    def validate_pdf_bytes(self, data: bytes, name: str = "document") -> int:
        """
        Validate PDF bytes before processing

        Returns:
            int: Page count of the document
        """
        if not data:
            raise ValidationError(f"PDF file is empty: {name}")

        with self.safe_pdf_operation(data, name) as doc:
            if doc.is_encrypted:
                raise ValidationError(f"PDF is password-protected: {name}")

            if doc.page_count == 0:
                raise ValidationError(f"PDF has no pages: {name}")

            try:
                _ = doc[0].rect  # Basic page structure check
            except Exception as e:
                raise ValidationError(f"PDF structure error in {name}: {str(e)}") from e

            return doc.page_count

    @contextmanager
    def safe_pdf_operation(self, data: bytes, name: str = "document"):
        """Context manager that opens PDF bytes with PyMuPDF and always closes them"""
        try:
            doc = fitz.open(stream=bytes(data), filetype="pdf")
        except Exception as e:
            self.logger.error(f"Could not open {name}: {str(e)}")
            raise ValidationError(f"Could not open {name} as a PDF: {str(e)}") from e

        try:
            yield doc
        finally:
            try:
                doc.close()
            except Exception as close_error:
                self.logger.warning(f"Error closing PDF document: {close_error}")

    def wrap_processing_error(self, operation_name: str, error: Exception) -> ProcessingError:
        """Log a collaborator failure and turn it into a single ProcessingError"""
        self.logger.error(f"{operation_name} failed: {str(error)}")
        self.log(f"❌ {operation_name} failed: {str(error)}")
        return ProcessingError(f"{operation_name} failed: {str(error)}")
