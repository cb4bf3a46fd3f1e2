"""
Connected-component discovery over binary masks.

A mask is a flat, row-major byte buffer where a value of exactly 0 marks a
foreground pixel. Components use 4-connectivity (shared edges only).
"""

from __future__ import annotations

from typing import Sequence

# Flat mask buffer: bytes, bytearray or anything indexable yielding ints
Mask = Sequence[int]

# One flag per mask position; non-zero means already assigned to a component
VisitedSet = bytearray


def to_index(x: int, y: int, width: int) -> int:
    """Convert an (x, y) coordinate to a linear position."""
    return y * width + x


def to_xy(index: int, width: int) -> tuple[int, int]:
    """Convert a linear position to an (x, y) coordinate."""
    y, x = divmod(index, width)
    return x, y


def new_visited(width: int, height: int) -> VisitedSet:
    """Allocate an empty visited set for a width x height mask."""
    return bytearray(width * height)


def find_component(
    mask: Mask,
    width: int,
    height: int,
    x: int,
    y: int,
    visited: VisitedSet,
) -> list[int]:
    """Flood fill the 4-connected foreground component containing (x, y).

    Uses an explicit stack, so a component spanning the entire mask does not
    hit the recursion limit. Every returned position is marked in `visited`.

    Args:
        mask: Flat row-major buffer of length width * height.
        width: Mask width.
        height: Mask height.
        x: Seed column.
        y: Seed row.
        visited: Shared visited flags for the current detection call.

    Returns:
        Linear positions of the component, in discovery order. Empty if the
        seed is background or already visited.
    """
    component: list[int] = []
    stack = [(x, y)]

    while stack:
        cx, cy = stack.pop()
        if cx < 0 or cx >= width or cy < 0 or cy >= height:
            continue

        pos = cy * width + cx
        if visited[pos] or mask[pos] != 0:
            continue

        visited[pos] = 1
        component.append(pos)

        stack.append((cx + 1, cy))
        stack.append((cx - 1, cy))
        stack.append((cx, cy + 1))
        stack.append((cx, cy - 1))

    return component
