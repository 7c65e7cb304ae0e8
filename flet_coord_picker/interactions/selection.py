"""
Region selection handler - the pointer-driven selection state machine.

A single rectangle can be drawn, moved and resized with 8 handles. Exactly
one interaction mode is active at a time; a gesture can only start from
IDLE and pointer-leave always brings the machine back to IDLE.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple, Union

from ..geometry import handles, transform
from ..types import (
    ContentRegion,
    DragSession,
    DrawSession,
    Edge,
    InteractionMode,
    OriginMode,
    Rectangle,
    ResizeSession,
    SelectionConfig,
    Size,
)

logger = logging.getLogger(__name__)


@dataclass
class SelectionState:
    """Current selection state."""

    rectangle: Optional[Rectangle] = None
    mode: InteractionMode = InteractionMode.IDLE
    draw: Optional[DrawSession] = None
    drag: Optional[DragSession] = None
    resize: Optional[ResizeSession] = None


def _resize_span(
    start: float,
    extent: float,
    delta: float,
    edge: Edge,
    limit: float,
    min_extent: float,
) -> Tuple[float, float]:
    """Resize one axis of a rectangle.

    The moving edge sticks to [0, limit]; the floor keeps the opposite edge
    where it was.
    """
    if edge in (Edge.TOP, Edge.LEFT):
        far = start + extent
        start = max(start + delta, 0)
        extent = far - start
        if extent < min_extent:
            extent = min_extent
            start = far - min_extent
    elif edge in (Edge.BOTTOM, Edge.RIGHT):
        extent = min(extent + delta, limit - start)
        extent = max(extent, min_extent)
    else:
        extent = max(extent, min_extent)

    start = max(0, min(start, limit - extent))
    return start, extent


class SelectionStateMachine:
    """Handles drawing, moving and resizing the selection rectangle.

    Args:
        canvas_size: Returns the current canvas (width, height) in pixels
        on_change: Called with the new rectangle (or None) whenever the
                   committed selection changes
        config: Handle size and thresholds
    """

    def __init__(
        self,
        canvas_size: Callable[[], Size],
        on_change: Optional[Callable[[Optional[Rectangle]], None]] = None,
        config: Optional[SelectionConfig] = None,
    ):
        self._canvas_size = canvas_size
        self._on_change = on_change
        self._config = config or SelectionConfig()
        self._state = SelectionState()

    # Properties

    @property
    def config(self) -> SelectionConfig:
        return self._config

    @property
    def mode(self) -> InteractionMode:
        """Active interaction mode."""
        return self._state.mode

    @property
    def rectangle(self) -> Optional[Rectangle]:
        """Committed selection in canvas pixels."""
        return self._state.rectangle

    @property
    def draft(self) -> Optional[Rectangle]:
        """Rectangle being drawn, not yet committed."""
        if self._state.draw is None:
            return None
        return self._state.draw.draft

    @property
    def is_drawing(self) -> bool:
        return self._state.mode is InteractionMode.DRAWING

    @property
    def is_dragging(self) -> bool:
        return self._state.mode is InteractionMode.DRAGGING

    @property
    def is_resizing(self) -> bool:
        return self._state.mode is InteractionMode.RESIZING

    def content_region(
        self,
        scale: float,
        origin: Union[OriginMode, str, None] = OriginMode.TOP_LEFT,
    ) -> Optional[ContentRegion]:
        """Committed selection in content coordinates, or None."""
        rect = self._state.rectangle
        if rect is None:
            return None
        canvas_w, canvas_h = self._canvas_size()
        return transform.to_content_rect(
            rect.x, rect.y, rect.width, rect.height,
            canvas_w, canvas_h, scale, origin,
        )

    def cursor_at(self, x: float, y: float) -> str:
        """Cursor token for the pointer at (x, y) in the current mode."""
        mode = self._state.mode
        if mode is InteractionMode.DRAGGING:
            return handles.CURSOR_MOVE
        if mode is InteractionMode.RESIZING:
            return handles.cursor_for(self._state.resize.direction)
        if mode is InteractionMode.DRAWING:
            return handles.CURSOR_CROSSHAIR

        rect = self._state.rectangle
        direction = handles.hit_test(x, y, rect, self._config.handle_size)
        if direction is not None:
            return handles.cursor_for(direction)
        if handles.contains_point(rect, x, y):
            return handles.CURSOR_MOVE
        return handles.CURSOR_CROSSHAIR

    # Pointer events

    def pointer_down(self, x: float, y: float) -> None:
        """Start resizing, moving or drawing depending on what is under (x, y)."""
        if self._state.mode is not InteractionMode.IDLE:
            logger.debug("pointer_down ignored while %s", self._state.mode.value)
            return

        rect = self._state.rectangle
        direction = handles.hit_test(x, y, rect, self._config.handle_size)

        if direction is not None:
            self._state.resize = ResizeSession(
                direction=direction,
                anchor_rect=rect,
                pointer_start=(x, y),
            )
            self._state.mode = InteractionMode.RESIZING
        elif handles.contains_point(rect, x, y):
            self._state.drag = DragSession(
                pointer_start=(x, y),
                rect_start_origin=(rect.x, rect.y),
            )
            self._state.mode = InteractionMode.DRAGGING
        else:
            self._state.draw = DrawSession(anchor=(x, y))
            self._state.mode = InteractionMode.DRAWING

        logger.debug("Entered %s at (%s, %s)", self._state.mode.value, x, y)

    def pointer_move(self, x: float, y: float) -> None:
        """Update the active gesture."""
        mode = self._state.mode
        if mode is InteractionMode.DRAWING:
            ax, ay = self._state.draw.anchor
            self._state.draw.draft = Rectangle.from_points(ax, ay, x, y)
        elif mode is InteractionMode.DRAGGING:
            self._commit(self._dragged(x, y))
        elif mode is InteractionMode.RESIZING:
            self._commit(self._resized(x, y))

    def pointer_up(self, x: float, y: float) -> None:
        """Finish the active gesture."""
        if self._state.mode is InteractionMode.DRAWING:
            ax, ay = self._state.draw.anchor
            rect = Rectangle.from_points(ax, ay, x, y)
            self._to_idle()

            threshold = self._config.draw_threshold
            if rect.width > threshold and rect.height > threshold:
                self._commit(rect)
            else:
                logger.debug("Draw of %sx%s discarded", rect.width, rect.height)
        else:
            self._to_idle()

    def pointer_leave(self) -> None:
        """Cancel any gesture; the committed rectangle is kept."""
        if self._state.mode is not InteractionMode.IDLE:
            logger.debug("Pointer left canvas while %s", self._state.mode.value)
        self._to_idle()

    def double_click(self) -> None:
        """Drop the selection entirely."""
        self._to_idle()
        self._state.rectangle = None
        self._notify()

    def clear(self) -> None:
        """Reset for a new page."""
        had_selection = self._state.rectangle is not None
        self._state = SelectionState()
        if had_selection:
            self._notify()

    def set_rectangle(self, rect: Optional[Rectangle]) -> None:
        """Replace the committed rectangle without a gesture (e.g. after zoom)."""
        self._to_idle()
        self._commit(rect)

    # Private methods

    def _dragged(self, x: float, y: float) -> Rectangle:
        session = self._state.drag
        rect = self._state.rectangle
        canvas_w, canvas_h = self._canvas_size()

        start_x, start_y = session.pointer_start
        origin_x, origin_y = session.rect_start_origin
        new_x = origin_x + (x - start_x)
        new_y = origin_y + (y - start_y)

        new_x = max(0, min(new_x, canvas_w - rect.width))
        new_y = max(0, min(new_y, canvas_h - rect.height))
        return replace(rect, x=new_x, y=new_y)

    def _resized(self, x: float, y: float) -> Rectangle:
        session = self._state.resize
        anchor = session.anchor_rect
        canvas_w, canvas_h = self._canvas_size()
        min_extent = self._config.min_extent

        dx = x - session.pointer_start[0]
        dy = y - session.pointer_start[1]

        new_x, new_w = _resize_span(
            anchor.x, anchor.width, dx,
            session.direction.horizontal, canvas_w, min_extent,
        )
        new_y, new_h = _resize_span(
            anchor.y, anchor.height, dy,
            session.direction.vertical, canvas_h, min_extent,
        )
        return Rectangle(x=new_x, y=new_y, width=new_w, height=new_h)

    def _to_idle(self) -> None:
        self._state.mode = InteractionMode.IDLE
        self._state.draw = None
        self._state.drag = None
        self._state.resize = None

    def _commit(self, rect: Optional[Rectangle]) -> None:
        self._state.rectangle = rect
        self._notify()

    def _notify(self) -> None:
        if self._on_change:
            self._on_change(self._state.rectangle)
