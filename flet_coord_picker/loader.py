"""
Asynchronous document loading.

Decoding happens in a worker thread; the caller awaits a LoadResult that
either holds an open backend or the reason it could not be opened.
"""

from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .backends.base import ContentBackend
from .backends.pymupdf import PyMuPDFBackend

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of a load: a backend or an error message."""

    backend: Optional[ContentBackend] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.backend is not None and self.error is None


def _open(
    source: Union[str, Path, bytes, io.BytesIO],
    filetype: Optional[str],
    password: Optional[str],
    scale: float,
) -> ContentBackend:
    backend = PyMuPDFBackend(source, filetype=filetype, password=password)
    try:
        if backend.page_count == 0:
            raise ValueError("Document has no pages")
        # Decode the first page here so the UI thread only blits it.
        backend.get_page(0, scale)
    except Exception:
        backend.close()
        raise
    return backend


async def load_document(
    source: Union[str, Path, bytes, io.BytesIO],
    filetype: Optional[str] = None,
    password: Optional[str] = None,
    scale: float = 1.5,
) -> LoadResult:
    """Open a PDF or image without blocking the event loop.

    Args:
        source: Path, bytes or BytesIO
        filetype: MIME type, file name or extension (needed for in-memory images)
        password: Password for encrypted PDFs (optional)
        scale: Render scale used to pre-rasterize the first page

    Returns:
        LoadResult with ``backend`` set on success, ``error`` otherwise
    """
    try:
        backend = await asyncio.to_thread(_open, source, filetype, password, scale)
    except (OSError, ValueError, TypeError, RuntimeError) as e:
        name = source if isinstance(source, (str, Path)) else filetype or "stream"
        logger.exception("Failed to load %s", name)
        return LoadResult(error=str(e))

    logger.info("Loaded document with %d page(s)", backend.page_count)
    return LoadResult(backend=backend)
