"""Shared geometry utilities for axis-aligned rectangles and pixel sets."""

from __future__ import annotations

import math
from typing import Iterable

# Rectangle as (x, y, width, height)
Rect = tuple[int, int, int, int]


def bounding_box(positions: Iterable[int], width: int) -> Rect:
    """Compute the bounding box of a set of linear pixel positions.

    Width and height are the coordinate spans (max - min), so a single pixel
    has a 0x0 box.

    Args:
        positions: Linear indices (y * width + x).
        width: Row width of the mask the positions belong to.

    Returns:
        (x, y, w, h) of the smallest rectangle containing every position.

    Raises:
        ValueError: If positions is empty.
    """
    min_x = min_y = math.inf
    max_x = max_y = -math.inf

    for pos in positions:
        y, x = divmod(pos, width)
        min_x = min(min_x, x)
        max_x = max(max_x, x)
        min_y = min(min_y, y)
        max_y = max(max_y, y)

    if min_x == math.inf:
        raise ValueError("Cannot compute bounding box of an empty position set")

    return int(min_x), int(min_y), int(max_x - min_x), int(max_y - min_y)


def aspect_ratio(width: float, height: float) -> float:
    """Return width / height with IEEE semantics for a zero height.

    0/0 is nan (fails every comparison), w/0 is inf.
    """
    if height == 0:
        return math.nan if width == 0 else math.inf
    return width / height


def intersection_area(rect_a: Rect, rect_b: Rect) -> int:
    """Area of the intersection of two (x, y, w, h) rectangles, 0 if disjoint."""
    ax, ay, aw, ah = rect_a
    bx, by, bw, bh = rect_b

    inter_w = max(0, min(ax + aw, bx + bw) - max(ax, bx))
    inter_h = max(0, min(ay + ah, by + bh) - max(ay, by))
    return inter_w * inter_h


def overlap_ratio(rect_a: Rect, rect_b: Rect) -> float:
    """Fraction of the smaller rectangle covered by the intersection.

    Catches a small box sitting inside a large one, which IoU would score low.
    Returns 0.0 when the rectangles are disjoint or the smaller one has no area.
    """
    intersection = intersection_area(rect_a, rect_b)
    if intersection == 0:
        return 0.0

    smaller_area = min(rect_a[2] * rect_a[3], rect_b[2] * rect_b[3])
    return intersection / smaller_area if smaller_area > 0 else 0.0
