"""
Shared data types for the coordinate picker.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class OriginMode(Enum):
    """Corner that sits at (0, 0) in content space."""

    TOP_LEFT = "top-left"
    BOTTOM_LEFT = "bottom-left"
    TOP_RIGHT = "top-right"
    BOTTOM_RIGHT = "bottom-right"

    @property
    def flips_x(self) -> bool:
        return self in (OriginMode.TOP_RIGHT, OriginMode.BOTTOM_RIGHT)

    @property
    def flips_y(self) -> bool:
        return self in (OriginMode.BOTTOM_LEFT, OriginMode.BOTTOM_RIGHT)

    @classmethod
    def coerce(cls, value: Union["OriginMode", str, None]) -> "OriginMode":
        """Resolve an enum member or its string value.

        Unknown values fall back to TOP_LEFT so a stray UI value never
        breaks coordinate output.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unknown origin %r, using top-left", value)
            return cls.TOP_LEFT


class InteractionMode(Enum):
    """What the pointer is currently doing to the selection."""

    IDLE = "idle"
    DRAWING = "drawing"
    DRAGGING = "dragging"
    RESIZING = "resizing"


class Edge(Enum):
    """Rectangle edge moved by one axis of a resize."""

    NONE = "none"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class ResizeDirection(Enum):
    """Resize handle direction, composed from one vertical and one horizontal edge."""

    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"

    @property
    def vertical(self) -> Edge:
        return _DIRECTION_EDGES[self][0]

    @property
    def horizontal(self) -> Edge:
        return _DIRECTION_EDGES[self][1]


_DIRECTION_EDGES = {
    ResizeDirection.N: (Edge.TOP, Edge.NONE),
    ResizeDirection.S: (Edge.BOTTOM, Edge.NONE),
    ResizeDirection.E: (Edge.NONE, Edge.RIGHT),
    ResizeDirection.W: (Edge.NONE, Edge.LEFT),
    ResizeDirection.NE: (Edge.TOP, Edge.RIGHT),
    ResizeDirection.NW: (Edge.TOP, Edge.LEFT),
    ResizeDirection.SE: (Edge.BOTTOM, Edge.RIGHT),
    ResizeDirection.SW: (Edge.BOTTOM, Edge.LEFT),
}


@dataclass(frozen=True)
class Rectangle:
    """Selection rectangle in canvas pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @classmethod
    def from_points(cls, x0: float, y0: float, x1: float, y1: float) -> "Rectangle":
        """Normalized rectangle spanning two arbitrary corner points."""
        return cls(
            x=min(x0, x1),
            y=min(y0, y1),
            width=abs(x1 - x0),
            height=abs(y1 - y0),
        )


@dataclass(frozen=True)
class ContentRegion:
    """Selection in content coordinates, measured from the chosen origin."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class SelectionConfig:
    """Tunable thresholds for the selection engine (canvas pixels)."""

    handle_size: float = 8
    min_extent: float = 10
    draw_threshold: float = 3


@dataclass
class SelectionStyle:
    """Colors and strokes used to paint the selection overlay."""

    stroke_color: str = "#007bff"
    fill_color: str = "#007bff"
    fill_opacity: float = 0.1
    stroke_width: float = 2.0
    dash_pattern: List[float] = field(default_factory=lambda: [5, 5])
    handle_fill: str = "#007bff"
    handle_stroke: str = "#ffffff"
    handle_stroke_width: float = 2.0
    draft_stroke_color: str = "#ff6b6b"
    draft_fill_color: str = "#ff6b6b"
    draft_fill_opacity: float = 0.1
    draft_dash_pattern: List[float] = field(default_factory=lambda: [3, 3])


@dataclass
class DrawSession:
    """Live state of a draw gesture."""

    anchor: Point
    draft: Optional[Rectangle] = None


@dataclass
class DragSession:
    """Live state of a move gesture."""

    pointer_start: Point
    rect_start_origin: Point


@dataclass
class ResizeSession:
    """Live state of a resize gesture."""

    direction: ResizeDirection
    anchor_rect: Rectangle
    pointer_start: Point


@dataclass
class RasterPage:
    """A decoded page ready to be shown on the canvas."""

    index: int
    width: int
    height: int
    png: bytes
    scale: float = 1.0

    @property
    def page_number(self) -> int:
        return self.index + 1


# Type aliases for clarity
Point = Tuple[float, float]
Size = Tuple[float, float]
