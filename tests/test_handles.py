from flet_coord_picker.geometry.handles import (
    Handle,
    contains_point,
    cursor_for,
    handles_for,
    hit_test,
)
from flet_coord_picker.types import Edge, Rectangle, ResizeDirection

RECT = Rectangle(x=50, y=50, width=40, height=40)


def test_handles_are_corners_then_edge_midpoints() -> None:
    handles = handles_for(RECT)

    assert [(h.direction.value, h.x, h.y) for h in handles] == [
        ("nw", 50, 50),
        ("ne", 90, 50),
        ("sw", 50, 90),
        ("se", 90, 90),
        ("n", 70, 50),
        ("s", 70, 90),
        ("w", 50, 70),
        ("e", 90, 70),
    ]
    assert all(h.size == 8 for h in handles)


def test_handle_hitbox_is_centered_and_inclusive() -> None:
    handle = Handle(x=50, y=50, direction=ResizeDirection.NW, size=8)

    assert (handle.left, handle.top) == (46, 46)
    assert handle.contains(54, 54)
    assert handle.contains(46, 46)
    assert not handle.contains(54.5, 50)


def test_hit_test_finds_handle_under_pointer() -> None:
    assert hit_test(52, 48, RECT) is ResizeDirection.NW
    assert hit_test(91, 70, RECT) is ResizeDirection.E
    assert hit_test(70, 93, RECT) is ResizeDirection.S


def test_hit_test_misses_inside_and_without_rectangle() -> None:
    assert hit_test(70, 70, RECT) is None
    assert hit_test(10, 10, RECT) is None
    assert hit_test(50, 50, None) is None


def test_hit_test_prefers_corners_on_tiny_rectangles() -> None:
    tiny = Rectangle(x=10, y=10, width=4, height=4)

    # (12, 11) is inside the nw, ne and n hitboxes.
    assert hit_test(12, 11, tiny) is ResizeDirection.NW
    assert hit_test(14, 14, tiny) is ResizeDirection.NW


def test_hit_test_respects_handle_size() -> None:
    assert hit_test(58, 50, RECT) is None
    assert hit_test(58, 50, RECT, size=20) is ResizeDirection.NW


def test_contains_point_includes_edges() -> None:
    assert contains_point(RECT, 50, 50)
    assert contains_point(RECT, 90, 90)
    assert contains_point(RECT, 70, 70)
    assert not contains_point(RECT, 91, 70)
    assert not contains_point(None, 70, 70)


def test_cursor_tokens() -> None:
    assert cursor_for(ResizeDirection.SE) == "se-resize"
    assert cursor_for(ResizeDirection.N) == "n-resize"
    assert cursor_for(None) == "crosshair"


def test_directions_compose_from_axis_edges() -> None:
    assert (ResizeDirection.SE.vertical, ResizeDirection.SE.horizontal) == (
        Edge.BOTTOM,
        Edge.RIGHT,
    )
    assert (ResizeDirection.NW.vertical, ResizeDirection.NW.horizontal) == (
        Edge.TOP,
        Edge.LEFT,
    )
    assert ResizeDirection.N.horizontal is Edge.NONE
    assert ResizeDirection.W.vertical is Edge.NONE
