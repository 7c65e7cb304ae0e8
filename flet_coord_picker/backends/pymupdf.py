"""
PyMuPDF backend implementation.

Opens PDFs and common raster/vector image formats and rasterizes their
pages to PNG at a requested render scale.
"""

from __future__ import annotations

import io
import logging
import warnings
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

warnings.filterwarnings("ignore", message="builtin type Swig")

import pymupdf

from ..types import RasterPage  # noqa: E402
from .base import ContentBackend  # noqa: E402

logger = logging.getLogger(__name__)

SUPPORTED_TYPES: Dict[str, str] = {
    "application/pdf": "pdf",
    "image/png": "image",
    "image/jpeg": "image",
    "image/jpg": "image",
    "image/gif": "image",
    "image/bmp": "image",
    "image/tiff": "image",
    "image/svg+xml": "image",
}

_EXTENSIONS: Dict[str, str] = {
    "pdf": "application/pdf",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "svg": "image/svg+xml",
}

# Filetype hints understood by pymupdf.open(stream=...)
_STREAM_FILETYPES: Dict[str, str] = {
    "application/pdf": "pdf",
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpeg",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
    "image/svg+xml": "svg",
}


def _mime_type(name_or_mime: str) -> str:
    """Normalize a MIME type, file name or bare extension to a MIME type."""
    value = name_or_mime.strip().lower()
    if "/" in value and value in SUPPORTED_TYPES:
        return value
    ext = value.rsplit(".", 1)[-1]
    return _EXTENSIONS.get(ext, value)


class PyMuPDFBackend(ContentBackend):
    """PyMuPDF content backend.

    Args:
        source: Path, bytes or BytesIO
        filetype: MIME type, file name or extension. Required to decode
                  images from memory; defaults to PDF (or the path suffix)
        password: Password for encrypted PDFs (optional)

    Raises:
        TypeError: If the source object is not supported
        ValueError: If the file type is not supported, the document is
                    encrypted and no password is given, or the password is
                    wrong
    """

    def __init__(
        self,
        source: Union[str, Path, bytes, io.BytesIO],
        filetype: Optional[str] = None,
        password: Optional[str] = None,
    ):
        if isinstance(source, (str, Path)):
            self._path = Path(source)
            mime = _mime_type(filetype or self._path.name)
        elif isinstance(source, (bytes, io.BytesIO)):
            self._path = None
            mime = _mime_type(filetype or "application/pdf")
        else:
            raise TypeError(f"Unsupported source type: {type(source)}")

        if not self.is_supported(mime):
            raise ValueError(f"Unsupported file type: {filetype or mime}")

        self._mime = mime
        self._file_type = SUPPORTED_TYPES[mime]

        if self._path is not None:
            self._doc = pymupdf.open(str(self._path))
        else:
            data = source.getvalue() if isinstance(source, io.BytesIO) else source
            self._doc = pymupdf.open(stream=data, filetype=_STREAM_FILETYPES[mime])

        self._pages: Dict[Tuple[int, float], RasterPage] = {}
        try:
            # Handle encrypted documents
            if self._doc.is_encrypted:
                if password is None:
                    raise ValueError("Document is encrypted and requires a password")
                if not self._doc.authenticate(password):
                    raise ValueError("Invalid password")

            self._native_size = self._read_native_size(source)
        except Exception:
            self._doc.close()
            raise

        logger.info(
            "Opened %s with %d page(s)", self._path or self._mime, len(self._doc)
        )

    @staticmethod
    def is_supported(name_or_mime: str) -> bool:
        """Whether a MIME type, file name or extension can be opened."""
        return _mime_type(name_or_mime) in SUPPORTED_TYPES

    @staticmethod
    def type_of(name_or_mime: str) -> str:
        """"pdf", "image" or "unknown" for a MIME type, file name or extension."""
        return SUPPORTED_TYPES.get(_mime_type(name_or_mime), "unknown")

    @property
    def page_count(self) -> int:
        return len(self._doc)

    @property
    def file_type(self) -> str:
        return self._file_type

    def get_page_size(self, index: int) -> Tuple[float, float]:
        self._check_index(index)
        if self._native_size is not None:
            return self._native_size
        rect = self._doc[index].rect
        return (rect.width, rect.height)

    def get_page(self, index: int, scale: float = 1.0) -> RasterPage:
        key = (index, scale)
        if key in self._pages:
            return self._pages[key]

        self._check_index(index)
        if scale <= 0:
            raise ValueError(f"Render scale must be positive, got {scale}")

        page = self._doc[index]
        native_w, native_h = self.get_page_size(index)
        matrix = pymupdf.Matrix(
            scale * native_w / page.rect.width,
            scale * native_h / page.rect.height,
        )
        pix = page.get_pixmap(matrix=matrix, alpha=False)

        raster = RasterPage(
            index=index,
            width=pix.width,
            height=pix.height,
            png=pix.tobytes("png"),
            scale=scale,
        )
        self._pages[key] = raster
        logger.debug(
            "Rasterized page %d at %.2fx: %dx%d", index, scale, pix.width, pix.height
        )
        return raster

    def close(self) -> None:
        if self._doc is not None and not self._doc.is_closed:
            self._doc.close()
        self._pages.clear()

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._doc):
            raise IndexError(f"Page index {index} out of range")

    def _read_native_size(self, source) -> Optional[Tuple[int, int]]:
        """Pixel size of a raster image, so scale 1.0 means one canvas pixel per image pixel.

        MuPDF sizes image pages from their DPI metadata; PDFs and SVGs keep
        their page size in points.
        """
        if self._file_type != "image" or self._mime == "image/svg+xml":
            return None
        if self._path is not None:
            pix = pymupdf.Pixmap(str(self._path))
        elif isinstance(source, io.BytesIO):
            pix = pymupdf.Pixmap(source.getvalue())
        else:
            pix = pymupdf.Pixmap(source)
        return (pix.width, pix.height)
