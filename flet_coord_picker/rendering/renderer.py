"""
Selection renderer - paints the page raster and the selection overlay.

The page raster is an ``ft.Image`` that never changes between pointer
events; the selection lives on a ``cv.Canvas`` stacked on top whose shape
list is rebuilt from scratch on every repaint, so nothing accumulates.
"""

from __future__ import annotations

import base64
from typing import Any, List, Optional

import flet as ft
import flet.canvas as cv

from ..geometry.handles import HANDLE_SIZE, handles_for
from ..types import RasterPage, Rectangle, SelectionStyle, Size


class SelectionRenderer:
    """Renders a raster page with the current selection on top."""

    def __init__(
        self,
        style: Optional[SelectionStyle] = None,
        handle_size: float = HANDLE_SIZE,
    ):
        self.style = style or SelectionStyle()
        self.handle_size = handle_size

        self._raster: Optional[RasterPage] = None
        self._image: Optional[ft.Image] = None
        self._overlay = cv.Canvas(shapes=[], width=0, height=0)
        self._stack = ft.Stack(controls=[self._overlay], width=0, height=0)

    @property
    def control(self) -> ft.Stack:
        """The Flet control holding the raster and the overlay."""
        return self._stack

    @property
    def overlay(self) -> cv.Canvas:
        return self._overlay

    @property
    def raster(self) -> Optional[RasterPage]:
        """Page currently shown, if any."""
        return self._raster

    @property
    def canvas_size(self) -> Size:
        """(width, height) of the drawing surface in pixels."""
        if self._raster is None:
            return (0, 0)
        return (self._raster.width, self._raster.height)

    def show_page(self, raster: RasterPage) -> None:
        """Replace the base raster; the canvas takes the raster's pixel size."""
        self._raster = raster
        width, height = raster.width, raster.height

        self._image = ft.Image(
            src_base64=base64.b64encode(raster.png).decode("ascii"),
            width=width,
            height=height,
            fit=ft.ImageFit.FILL,
            gapless_playback=True,
        )
        self._overlay.width = width
        self._overlay.height = height
        self._overlay.shapes = []
        self._stack.width = width
        self._stack.height = height
        self._stack.controls = [self._image, self._overlay]

        if self._stack.page:
            self._stack.update()

    def clear(self) -> None:
        """Drop the raster and the overlay."""
        self._raster = None
        self._image = None
        self._overlay.shapes = []
        self._overlay.width = self._overlay.height = 0
        self._stack.width = self._stack.height = 0
        self._stack.controls = [self._overlay]

        if self._stack.page:
            self._stack.update()

    def repaint(
        self,
        rectangle: Optional[Rectangle],
        draft: Optional[Rectangle] = None,
    ) -> None:
        """Redraw the overlay for the given selection snapshot."""
        self._overlay.shapes = self.build_shapes(rectangle, draft)
        if self._overlay.page:
            self._overlay.update()

    def build_shapes(
        self,
        rectangle: Optional[Rectangle],
        draft: Optional[Rectangle] = None,
    ) -> List[Any]:
        """Overlay shapes: committed selection with handles, then the draft."""
        shapes: List[Any] = []

        if rectangle is not None and rectangle.width > 0 and rectangle.height > 0:
            self._render_rect(
                rectangle,
                self.style.stroke_color,
                self.style.fill_color,
                self.style.fill_opacity,
                self.style.dash_pattern,
                shapes,
            )
            self._render_handles(rectangle, shapes)

        if draft is not None and draft.width > 0 and draft.height > 0:
            self._render_rect(
                draft,
                self.style.draft_stroke_color,
                self.style.draft_fill_color,
                self.style.draft_fill_opacity,
                self.style.draft_dash_pattern,
                shapes,
            )

        return shapes

    def _render_rect(
        self,
        rect: Rectangle,
        stroke_color: str,
        fill_color: str,
        fill_opacity: float,
        dash_pattern: List[float],
        shapes: List[Any],
    ) -> None:
        """Render a translucent rectangle with a dashed border."""
        shapes.append(
            cv.Rect(
                x=rect.x,
                y=rect.y,
                width=rect.width,
                height=rect.height,
                paint=ft.Paint(
                    color=ft.Colors.with_opacity(fill_opacity, fill_color),
                    style=ft.PaintingStyle.FILL,
                ),
            )
        )
        stroke_paint = ft.Paint(
            color=stroke_color,
            stroke_width=self.style.stroke_width,
            style=ft.PaintingStyle.STROKE,
        )
        if dash_pattern:
            stroke_paint.stroke_dash_pattern = list(dash_pattern)
        shapes.append(
            cv.Rect(
                x=rect.x,
                y=rect.y,
                width=rect.width,
                height=rect.height,
                paint=stroke_paint,
            )
        )

    def _render_handles(self, rect: Rectangle, shapes: List[Any]) -> None:
        """Render the 8 resize handles."""
        for handle in handles_for(rect, self.handle_size):
            shapes.append(
                cv.Rect(
                    x=handle.left,
                    y=handle.top,
                    width=handle.size,
                    height=handle.size,
                    paint=ft.Paint(
                        color=self.style.handle_fill,
                        style=ft.PaintingStyle.FILL,
                    ),
                )
            )
            shapes.append(
                cv.Rect(
                    x=handle.left,
                    y=handle.top,
                    width=handle.size,
                    height=handle.size,
                    paint=ft.Paint(
                        color=self.style.handle_stroke,
                        stroke_width=self.style.handle_stroke_width,
                        style=ft.PaintingStyle.STROKE,
                    ),
                )
            )
