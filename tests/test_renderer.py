import flet as ft

from flet_coord_picker.rendering.renderer import SelectionRenderer
from flet_coord_picker.types import RasterPage, Rectangle, SelectionStyle

RASTER = RasterPage(index=0, width=300, height=150, png=b"\x89PNG fake", scale=1.5)


def test_empty_renderer_has_no_canvas() -> None:
    renderer = SelectionRenderer()

    assert renderer.raster is None
    assert renderer.canvas_size == (0, 0)
    assert renderer.build_shapes(None) == []


def test_show_page_sizes_canvas_to_raster() -> None:
    renderer = SelectionRenderer()

    renderer.show_page(RASTER)

    assert renderer.canvas_size == (300, 150)
    assert (renderer.overlay.width, renderer.overlay.height) == (300, 150)
    assert (renderer.control.width, renderer.control.height) == (300, 150)
    image, overlay = renderer.control.controls
    assert isinstance(image, ft.Image)
    assert overlay is renderer.overlay


def test_clear_drops_raster_and_shapes() -> None:
    renderer = SelectionRenderer()
    renderer.show_page(RASTER)
    renderer.repaint(Rectangle(10, 10, 50, 50))

    renderer.clear()

    assert renderer.raster is None
    assert renderer.canvas_size == (0, 0)
    assert renderer.overlay.shapes == []
    assert renderer.control.controls == [renderer.overlay]


def test_committed_rectangle_draws_body_and_handles() -> None:
    renderer = SelectionRenderer()

    shapes = renderer.build_shapes(Rectangle(50, 50, 40, 40))

    # fill + dashed stroke, then fill + stroke for each of the 8 handles
    assert len(shapes) == 18
    fill, stroke = shapes[:2]
    assert (fill.x, fill.y, fill.width, fill.height) == (50, 50, 40, 40)
    assert stroke.paint.stroke_dash_pattern == [5, 5]
    assert stroke.paint.color == "#007bff"

    nw_fill = shapes[2]
    assert (nw_fill.x, nw_fill.y, nw_fill.width, nw_fill.height) == (46, 46, 8, 8)


def test_draft_is_drawn_after_committed_rectangle() -> None:
    renderer = SelectionRenderer()

    shapes = renderer.build_shapes(Rectangle(50, 50, 40, 40), Rectangle(200, 200, 30, 20))

    assert len(shapes) == 20
    draft_stroke = shapes[-1]
    assert (draft_stroke.x, draft_stroke.y) == (200, 200)
    assert draft_stroke.paint.stroke_dash_pattern == [3, 3]
    assert draft_stroke.paint.color == "#ff6b6b"


def test_zero_sized_rectangles_are_skipped() -> None:
    renderer = SelectionRenderer()

    assert renderer.build_shapes(Rectangle(10, 10, 0, 20), Rectangle(5, 5, 10, 0)) == []


def test_repaint_replaces_previous_shapes() -> None:
    renderer = SelectionRenderer()
    renderer.show_page(RASTER)

    renderer.repaint(Rectangle(10, 10, 50, 50), Rectangle(100, 100, 20, 20))
    renderer.repaint(None, Rectangle(100, 100, 30, 30))

    assert len(renderer.overlay.shapes) == 2


def test_style_and_handle_size_are_applied() -> None:
    style = SelectionStyle(stroke_color="#00aa00", dash_pattern=[])
    renderer = SelectionRenderer(style=style, handle_size=12)

    shapes = renderer.build_shapes(Rectangle(50, 50, 40, 40))

    stroke = shapes[1]
    assert stroke.paint.color == "#00aa00"
    assert not stroke.paint.stroke_dash_pattern
    assert (shapes[2].width, shapes[2].x) == (12, 44)
