"""
Abstract backend protocol for content loading.

Backends decode a document or image into fixed-size raster pages.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from ..types import RasterPage


class ContentBackend(ABC):
    """Abstract interface for a paged raster source."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""
        ...

    @property
    @abstractmethod
    def file_type(self) -> str:
        """Kind of content: "pdf" or "image"."""
        ...

    @abstractmethod
    def get_page_size(self, index: int) -> Tuple[float, float]:
        """Native (width, height) of a page, before scaling."""
        ...

    @abstractmethod
    def get_page(self, index: int, scale: float = 1.0) -> RasterPage:
        """Rasterize a page at the given render scale."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close and release resources."""
        ...

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
