"""
Pure geometry - coordinate transforms and resize handles.
"""

from .handles import Handle, contains_point, cursor_for, handles_for, hit_test
from .transform import from_content, from_content_rect, to_content, to_content_rect

__all__ = [
    "Handle",
    "contains_point",
    "cursor_for",
    "handles_for",
    "hit_test",
    "from_content",
    "from_content_rect",
    "to_content",
    "to_content_rect",
]
