"""
Rendering - raster page plus selection overlay.
"""

from .renderer import SelectionRenderer

__all__ = ["SelectionRenderer"]
