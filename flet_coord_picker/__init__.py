"""
Flet Coordinate Picker

Draw, move and resize a region over a PDF page or image and read it back
in the content's own coordinates, from any corner.

Usage:
    import flet as ft
    from flet_coord_picker import CoordDocument, CoordPicker, OriginMode

    def main(page: ft.Page):
        document = CoordDocument("/path/to/file.pdf")
        picker = CoordPicker(
            document,
            origin=OriginMode.BOTTOM_LEFT,
            on_selection_change=lambda region: print(region),
        )
        page.add(picker.control)

    ft.app(main)
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional, Tuple, Union

from .backends.base import ContentBackend
from .backends.pymupdf import PyMuPDFBackend
from .interactions.selection import SelectionStateMachine
from .loader import LoadResult, load_document
from .rendering.renderer import SelectionRenderer
from .types import (
    ContentRegion,
    InteractionMode,
    OriginMode,
    RasterPage,
    Rectangle,
    ResizeDirection,
    SelectionConfig,
    SelectionStyle,
)
from .viewer import CoordPicker, format_region, format_region_clipboard

__version__ = "0.1.0"


class CoordDocument(ContentBackend):
    """
    Document or image wrapper.

    Can be created from:
    - File path (str or Path) - PDF, PNG, JPEG, GIF, BMP, TIFF or SVG
    - Bytes
    - BytesIO

    Args:
        source: Path to the file, bytes, or BytesIO
        filetype: MIME type, file name or extension for in-memory sources
                  (defaults to PDF)
        password: Password for encrypted PDFs (optional)

    Properties:
    - page_count: Number of pages
    - file_type: "pdf" or "image"

    Methods:
    - get_page_size(index): Native (width, height)
    - get_page(index, scale): Rasterized page
    - close(): Release resources

    Raises:
        ValueError: If the file type is unsupported, or the document is
                   encrypted and no (or a wrong) password is provided
    """

    def __init__(
        self,
        source: Union[str, Path, bytes, io.BytesIO],
        filetype: Optional[str] = None,
        password: Optional[str] = None,
    ):
        """Open a document or image.

        Args:
            source: Path to the file, bytes, or BytesIO
            filetype: MIME type, file name or extension (optional)
            password: Password for encrypted PDFs (optional)
        """
        self._backend = PyMuPDFBackend(source, filetype=filetype, password=password)

    @property
    def page_count(self) -> int:
        """Number of pages."""
        return self._backend.page_count

    @property
    def file_type(self) -> str:
        """"pdf" or "image"."""
        return self._backend.file_type

    def get_page_size(self, index: int = 0) -> Tuple[float, float]:
        """Get native page size (width, height)."""
        return self._backend.get_page_size(index)

    def get_page(self, index: int, scale: float = 1.0) -> RasterPage:
        """Rasterize a page at the given render scale."""
        return self._backend.get_page(index, scale)

    def close(self):
        """Close and release resources."""
        self._backend.close()


__all__ = [
    "CoordDocument",
    "CoordPicker",
    "ContentBackend",
    "PyMuPDFBackend",
    "SelectionStateMachine",
    "SelectionRenderer",
    "LoadResult",
    "load_document",
    "ContentRegion",
    "InteractionMode",
    "OriginMode",
    "RasterPage",
    "Rectangle",
    "ResizeDirection",
    "SelectionConfig",
    "SelectionStyle",
    "format_region",
    "format_region_clipboard",
    "__version__",
]
