"""
Source document handling

A loaded PDF keeps its original bytes read-only. Preview and export each get
their own copy, since the libraries that consume the bytes may hold on to or
modify the buffer they are given.
"""

from pathlib import Path
from typing import List, Optional

import config
from error_handling import ErrorHandler, ValidationError
from numbering_settings import PageGeometry
from position_calculator import visible_geometry


def output_filename(name: str) -> str:
    """<original-name-without-extension>_numbered.pdf"""
    stem = Path(name or "document").stem or "document"
    return f"{stem}{config.OUTPUT_SUFFIX}.pdf"


class SourceDocument:
    """A validated PDF loaded into memory"""

    def __init__(self, data: bytes, name: str, page_count: int, geometries: List[PageGeometry]):
        self._data = bytes(data)
        self.name = name
        self.page_count = page_count
        self.geometries = geometries

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "document.pdf",
                   error_handler: Optional[ErrorHandler] = None) -> "SourceDocument":
        """Validate and load PDF bytes"""
        error_handler = error_handler or ErrorHandler()
        error_handler.validate_pdf_bytes(data, name)

        with error_handler.safe_pdf_operation(data, name) as doc:
            geometries = [visible_geometry(page.cropbox.width, page.cropbox.height, page.rotation)
                          for page in doc]
            page_count = doc.page_count

        error_handler.log(f"Loaded {name} ({page_count} pages)")
        return cls(data, name, page_count, geometries)

    @classmethod
    def from_path(cls, path, error_handler: Optional[ErrorHandler] = None) -> "SourceDocument":
        """Validate and load a PDF file from disk"""
        path = Path(path)
        if not path.exists():
            raise ValidationError(f"PDF file does not exist: {path}")
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ValidationError(f"PDF file is locked or inaccessible: {str(e)}") from e
        return cls.from_bytes(data, path.name, error_handler)

    def copy_bytes(self) -> bytearray:
        """Independent, writable copy of the original bytes"""
        return bytearray(self._data)

    def geometry(self, page_index: int) -> PageGeometry:
        """Geometry of a 1-indexed page"""
        return self.geometries[page_index - 1]

    @property
    def output_name(self) -> str:
        return output_filename(self.name)

    @property
    def size_bytes(self) -> int:
        return len(self._data)
