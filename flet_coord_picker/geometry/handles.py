"""
Resize handle geometry and hit-testing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..types import Edge, Point, Rectangle, ResizeDirection

HANDLE_SIZE = 8

CURSOR_CROSSHAIR = "crosshair"
CURSOR_MOVE = "move"

# Corners come first so tiny rectangles still resize diagonally.
_HANDLE_ORDER = (
    ResizeDirection.NW,
    ResizeDirection.NE,
    ResizeDirection.SW,
    ResizeDirection.SE,
    ResizeDirection.N,
    ResizeDirection.S,
    ResizeDirection.W,
    ResizeDirection.E,
)


@dataclass(frozen=True)
class Handle:
    """A square resize hitbox centred on (x, y)."""

    x: float
    y: float
    direction: ResizeDirection
    size: float = HANDLE_SIZE

    @property
    def left(self) -> float:
        return self.x - self.size / 2

    @property
    def top(self) -> float:
        return self.y - self.size / 2

    def contains(self, px: float, py: float) -> bool:
        return (
            self.left <= px <= self.left + self.size
            and self.top <= py <= self.top + self.size
        )


def _anchor(rect: Rectangle, direction: ResizeDirection) -> Point:
    if direction.horizontal is Edge.LEFT:
        x = rect.x
    elif direction.horizontal is Edge.RIGHT:
        x = rect.right
    else:
        x = rect.x + rect.width / 2

    if direction.vertical is Edge.TOP:
        y = rect.y
    elif direction.vertical is Edge.BOTTOM:
        y = rect.bottom
    else:
        y = rect.y + rect.height / 2
    return x, y


def handles_for(rect: Rectangle, size: float = HANDLE_SIZE) -> List[Handle]:
    """The 8 resize handles of a rectangle: corners, then edge midpoints."""
    handles = []
    for direction in _HANDLE_ORDER:
        x, y = _anchor(rect, direction)
        handles.append(Handle(x=x, y=y, direction=direction, size=size))
    return handles


def hit_test(
    px: float,
    py: float,
    rect: Optional[Rectangle],
    size: float = HANDLE_SIZE,
) -> Optional[ResizeDirection]:
    """Direction of the first handle under the point, or None."""
    if rect is None:
        return None
    for handle in handles_for(rect, size):
        if handle.contains(px, py):
            return handle.direction
    return None


def contains_point(rect: Optional[Rectangle], px: float, py: float) -> bool:
    """Whether the point lies inside the rectangle (edges included)."""
    if rect is None:
        return False
    return rect.x <= px <= rect.right and rect.y <= py <= rect.bottom


def cursor_for(direction: Optional[ResizeDirection]) -> str:
    """Cursor token for hovering a handle, e.g. "nw-resize"."""
    if direction is None:
        return CURSOR_CROSSHAIR
    return f"{direction.value}-resize"
