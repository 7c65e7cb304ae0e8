"""
Canvas <-> content coordinate conversion.

Canvas coordinates are on-screen pixels of the rendered page, measured from
its top-left corner. Content coordinates are in the page's native resolution
(canvas / scale), measured from whichever corner the user picked as origin.

All functions are pure. Results are rounded only when leaving this module
(``rounded=True``), never between chained conversions.
"""

from __future__ import annotations

import math
from typing import Tuple, Union

from ..types import ContentRegion, OriginMode, Rectangle

__all__ = [
    "round_half_up",
    "to_content",
    "from_content",
    "to_content_rect",
    "from_content_rect",
]

OriginLike = Union[OriginMode, str, None]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def _check_scale(scale: float) -> None:
    if scale <= 0:
        raise ValueError(f"Render scale must be positive, got {scale}")


def to_content(
    canvas_x: float,
    canvas_y: float,
    canvas_w: float,
    canvas_h: float,
    scale: float,
    origin: OriginLike = OriginMode.TOP_LEFT,
    rounded: bool = True,
) -> Tuple[float, float]:
    """Convert a canvas point to content coordinates.

    Args:
        canvas_x, canvas_y: Point in canvas pixels
        canvas_w, canvas_h: Canvas size in pixels
        scale: Render scale (canvas pixels per content unit)
        origin: Origin corner; unknown values mean top-left
        rounded: Round the result to integers

    Returns:
        (x, y) in content space
    """
    _check_scale(scale)
    mode = OriginMode.coerce(origin)

    x = canvas_w - canvas_x if mode.flips_x else canvas_x
    y = canvas_h - canvas_y if mode.flips_y else canvas_y
    x, y = x / scale, y / scale

    if rounded:
        return round_half_up(x), round_half_up(y)
    return x, y


def from_content(
    content_x: float,
    content_y: float,
    canvas_w: float,
    canvas_h: float,
    scale: float,
    origin: OriginLike = OriginMode.TOP_LEFT,
) -> Tuple[float, float]:
    """Convert a content point back to canvas pixels (inverse of to_content)."""
    _check_scale(scale)
    mode = OriginMode.coerce(origin)

    x = content_x * scale
    y = content_y * scale
    if mode.flips_x:
        x = canvas_w - x
    if mode.flips_y:
        y = canvas_h - y
    return x, y


def to_content_rect(
    x: float,
    y: float,
    width: float,
    height: float,
    canvas_w: float,
    canvas_h: float,
    scale: float,
    origin: OriginLike = OriginMode.TOP_LEFT,
    rounded: bool = True,
) -> ContentRegion:
    """Convert a canvas rectangle to a content region.

    On a flipped axis the position is taken from the rectangle's far edge,
    so the region is anchored at the corner nearest the origin. Width and
    height are always positive.
    """
    _check_scale(scale)
    mode = OriginMode.coerce(origin)

    cx = canvas_w - x - width if mode.flips_x else x
    cy = canvas_h - y - height if mode.flips_y else y

    values = (cx / scale, cy / scale, abs(width) / scale, abs(height) / scale)
    if rounded:
        values = tuple(round_half_up(v) for v in values)
    return ContentRegion(*values)


def from_content_rect(
    region: ContentRegion,
    canvas_w: float,
    canvas_h: float,
    scale: float,
    origin: OriginLike = OriginMode.TOP_LEFT,
) -> Rectangle:
    """Convert a content region back to a canvas rectangle."""
    _check_scale(scale)
    mode = OriginMode.coerce(origin)

    width = abs(region.width) * scale
    height = abs(region.height) * scale
    x = region.x * scale
    y = region.y * scale
    if mode.flips_x:
        x = canvas_w - x - width
    if mode.flips_y:
        y = canvas_h - y - height
    return Rectangle(x=x, y=y, width=width, height=height)
