"""
Coordinate picker - main viewer component.

Composes a content backend, the selection state machine and the renderer
into a single Flet control.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple, Union

import flet as ft

from .backends.base import ContentBackend
from .geometry import handles, transform
from .interactions.selection import SelectionStateMachine
from .rendering.renderer import SelectionRenderer
from .types import (
    ContentRegion,
    OriginMode,
    Rectangle,
    SelectionConfig,
    SelectionStyle,
)

logger = logging.getLogger(__name__)

MIN_SCALE = 0.1
MAX_SCALE = 5.0

_CURSORS = {
    handles.CURSOR_CROSSHAIR: ft.MouseCursor.PRECISE,
    handles.CURSOR_MOVE: ft.MouseCursor.MOVE,
    "n-resize": ft.MouseCursor.RESIZE_UP_DOWN,
    "s-resize": ft.MouseCursor.RESIZE_UP_DOWN,
    "e-resize": ft.MouseCursor.RESIZE_LEFT_RIGHT,
    "w-resize": ft.MouseCursor.RESIZE_LEFT_RIGHT,
    "nw-resize": ft.MouseCursor.RESIZE_UP_LEFT_DOWN_RIGHT,
    "se-resize": ft.MouseCursor.RESIZE_UP_LEFT_DOWN_RIGHT,
    "ne-resize": ft.MouseCursor.RESIZE_UP_RIGHT_DOWN_LEFT,
    "sw-resize": ft.MouseCursor.RESIZE_UP_RIGHT_DOWN_LEFT,
}


def _fit_canvas(rect: Rectangle, canvas_w: float, canvas_h: float) -> Rectangle:
    """Shift (and if needed shrink) a rectangle so it lies inside the canvas.

    Rasters are whole pixels, so a region projected from content space can
    overhang the canvas by a fraction of a pixel.
    """
    width = min(rect.width, canvas_w)
    height = min(rect.height, canvas_h)
    return Rectangle(
        x=max(0, min(rect.x, canvas_w - width)),
        y=max(0, min(rect.y, canvas_h - height)),
        width=width,
        height=height,
    )


def format_region(region: Optional[ContentRegion]) -> str:
    """Readout text for a region, e.g. "x: 67, y: 67, w: 67, h: 40"."""
    if region is None:
        return ""
    return f"x: {region.x}, y: {region.y}, w: {region.width}, h: {region.height}"


def format_region_clipboard(region: ContentRegion) -> str:
    """Clipboard text for a region, e.g. "{x: 67, y: 67, w: 67, h: 40}"."""
    return "{" + format_region(region) + "}"


class CoordPicker:
    """
    Region picker component.

    Usage:
        from flet_coord_picker import CoordDocument, CoordPicker, OriginMode

        document = CoordDocument("/path/to/file.pdf")
        picker = CoordPicker(document, origin=OriginMode.BOTTOM_LEFT)
        page.add(picker.control)
    """

    def __init__(
        self,
        source: Optional[ContentBackend] = None,
        current_page: int = 0,
        scale: float = 1.5,
        origin: Union[OriginMode, str] = OriginMode.TOP_LEFT,
        config: Optional[SelectionConfig] = None,
        style: Optional[SelectionStyle] = None,
        bgcolor: str = "#ffffff",
        on_page_change: Optional[Callable[[int], None]] = None,
        on_selection_change: Optional[Callable[[Optional[ContentRegion]], None]] = None,
        on_pointer_move: Optional[Callable[[float, float], None]] = None,
    ):
        self._source = source
        self._current_page = current_page
        self._scale = max(MIN_SCALE, min(MAX_SCALE, scale))
        self._origin = OriginMode.coerce(origin)
        self._bgcolor = bgcolor
        self._on_page_change = on_page_change
        self._on_selection_change = on_selection_change
        self._on_pointer_move = on_pointer_move

        # Components
        config = config or SelectionConfig()
        self._renderer = SelectionRenderer(style, handle_size=config.handle_size)
        self._selection = SelectionStateMachine(
            canvas_size=lambda: self._renderer.canvas_size,
            on_change=self._on_rect_change,
            config=config,
        )

        # UI state
        self._wrapper: Optional[ft.Container] = None
        self._gestures: Optional[ft.GestureDetector] = None
        self._last_pointer: Tuple[float, float] = (0, 0)

        self._build()
        if self._source:
            self._show_page()

    # Properties

    @property
    def control(self) -> ft.Control:
        """The Flet control to add to a page."""
        return self._wrapper

    @property
    def source(self) -> Optional[ContentBackend]:
        """The document being displayed."""
        return self._source

    @source.setter
    def source(self, value: Optional[ContentBackend]):
        self._source = value
        self._current_page = 0
        self._show_page()

    @property
    def current_page(self) -> int:
        """Current page index (0-based)."""
        return self._current_page

    @current_page.setter
    def current_page(self, value: int):
        if self._source and 0 <= value < self._source.page_count:
            self._current_page = value
            self._show_page()
            if self._on_page_change:
                self._on_page_change(value)

    @property
    def page_count(self) -> int:
        """Total number of pages."""
        return self._source.page_count if self._source else 0

    @property
    def scale(self) -> float:
        """Render scale (canvas pixels per content unit)."""
        return self._scale

    @scale.setter
    def scale(self, value: float):
        value = max(MIN_SCALE, min(MAX_SCALE, value))
        if value == self._scale:
            return

        # Keep the selection over the same content at the new scale.
        region = None
        rect = self._selection.rectangle
        if rect is not None:
            canvas_w, canvas_h = self._renderer.canvas_size
            region = transform.to_content_rect(
                rect.x, rect.y, rect.width, rect.height,
                canvas_w, canvas_h, self._scale, self._origin, rounded=False,
            )

        self._scale = value
        if not self._source:
            return
        self._show_page(keep_selection=region is not None)

        if region is not None:
            canvas_w, canvas_h = self._renderer.canvas_size
            rect = transform.from_content_rect(
                region, canvas_w, canvas_h, self._scale, self._origin
            )
            self._selection.set_rectangle(_fit_canvas(rect, canvas_w, canvas_h))
            self._repaint()

    @property
    def origin(self) -> OriginMode:
        """Corner used as (0, 0) for reported coordinates."""
        return self._origin

    @origin.setter
    def origin(self, value: Union[OriginMode, str]):
        self._origin = OriginMode.coerce(value)
        # Same canvas rectangle, new content coordinates.
        if self._selection.rectangle is not None:
            self._emit_selection()

    @property
    def selection(self) -> Optional[Rectangle]:
        """Committed selection in canvas pixels."""
        return self._selection.rectangle

    @property
    def content_region(self) -> Optional[ContentRegion]:
        """Committed selection in content coordinates."""
        return self._selection.content_region(self._scale, self._origin)

    @property
    def selection_text(self) -> str:
        """Readout text for the current selection."""
        return format_region(self.content_region)

    # Navigation

    def next_page(self) -> bool:
        """Go to next page."""
        if self._source and self._current_page < self._source.page_count - 1:
            self.current_page = self._current_page + 1
            return True
        return False

    def previous_page(self) -> bool:
        """Go to previous page."""
        if self._source and self._current_page > 0:
            self.current_page = self._current_page - 1
            return True
        return False

    def goto(self, page_index: int) -> bool:
        """Go to specific page."""
        if self._source and 0 <= page_index < self._source.page_count:
            self.current_page = page_index
            return True
        return False

    def zoom_in(self, factor: float = 1.25):
        """Increase zoom."""
        self.scale = self._scale * factor

    def zoom_out(self, factor: float = 1.25):
        """Decrease zoom."""
        self.scale = self._scale / factor

    # Selection actions

    def clear_selection(self):
        """Remove the selection."""
        self._selection.double_click()
        self._repaint()

    def copy_selection(self) -> bool:
        """Copy the selection as "{x: .., y: .., w: .., h: ..}" to the clipboard."""
        region = self.content_region
        if region is None or not self._wrapper or not self._wrapper.page:
            return False
        self._wrapper.page.set_clipboard(format_region_clipboard(region))
        return True

    # Private methods

    def _build(self):
        """Build the picker UI."""
        self._gestures = ft.GestureDetector(
            content=self._renderer.control,
            mouse_cursor=ft.MouseCursor.PRECISE,
            on_pan_start=self._on_pan_start,
            on_pan_update=self._on_pan_update,
            on_pan_end=self._on_pan_end,
            on_hover=self._on_hover,
            on_exit=self._on_exit,
            on_double_tap=self._on_double_tap,
        )
        self._wrapper = ft.Container(content=self._gestures, bgcolor=self._bgcolor)

    def _show_page(self, keep_selection: bool = False):
        """Rasterize and display the current page.

        The selection is dropped unless ``keep_selection`` is set, in which
        case the caller re-projects it onto the new raster.
        """
        if not self._source:
            self._renderer.clear()
            self._selection.clear()
            return

        raster = self._source.get_page(self._current_page, self._scale)
        self._renderer.show_page(raster)
        if not keep_selection:
            self._selection.clear()
        self._repaint()
        logger.info(
            "Showing page %d/%d at %.2fx",
            raster.page_number,
            self._source.page_count,
            self._scale,
        )

    def _repaint(self):
        self._renderer.repaint(self._selection.rectangle, self._selection.draft)

    def _on_rect_change(self, rect: Optional[Rectangle]):
        self._emit_selection()

    def _emit_selection(self):
        if self._on_selection_change:
            self._on_selection_change(self.content_region)

    def _update_cursor(self, x: float, y: float):
        if not self._gestures:
            return
        cursor = _CURSORS.get(self._selection.cursor_at(x, y), ft.MouseCursor.PRECISE)
        if self._gestures.mouse_cursor != cursor:
            self._gestures.mouse_cursor = cursor
            if self._gestures.page:
                self._gestures.update()

    def _report_pointer(self, x: float, y: float):
        if not self._on_pointer_move:
            return
        canvas_w, canvas_h = self._renderer.canvas_size
        self._on_pointer_move(
            *transform.to_content(x, y, canvas_w, canvas_h, self._scale, self._origin)
        )

    # Event handlers

    def _on_pan_start(self, e: ft.DragStartEvent):
        self._last_pointer = (e.local_x, e.local_y)
        self._selection.pointer_down(e.local_x, e.local_y)
        self._update_cursor(e.local_x, e.local_y)
        self._repaint()

    def _on_pan_update(self, e: ft.DragUpdateEvent):
        self._last_pointer = (e.local_x, e.local_y)
        self._selection.pointer_move(e.local_x, e.local_y)
        self._report_pointer(e.local_x, e.local_y)
        self._repaint()

    def _on_pan_end(self, e: ft.DragEndEvent):
        # Flet does not report a position on pan end.
        x, y = self._last_pointer
        self._selection.pointer_up(x, y)
        self._update_cursor(x, y)
        self._repaint()

    def _on_hover(self, e: ft.HoverEvent):
        self._report_pointer(e.local_x, e.local_y)
        self._update_cursor(e.local_x, e.local_y)

    def _on_exit(self, e: ft.HoverEvent):
        self._selection.pointer_leave()
        self._update_cursor(*self._last_pointer)
        self._repaint()

    def _on_double_tap(self, e):
        self._selection.double_click()
        self._repaint()
