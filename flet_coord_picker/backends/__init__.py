"""
Content backends - abstraction layer for document and image decoding.
"""

from .base import ContentBackend
from .pymupdf import PyMuPDFBackend

__all__ = ["ContentBackend", "PyMuPDFBackend"]
