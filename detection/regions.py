"""
Region detection over binary masks.

Candidate objects (people, vehicles) show up as connected blobs of
foreground pixels in a thresholded frame. This module finds those blobs,
keeps the ones whose bounding box has a plausible size and shape, and
scores them.
"""

from __future__ import annotations

from geometry import bounding_box

from .components import Mask, find_component, new_visited
from .filtering import filter_overlapping_regions
from .types import DetectionConfig, Region, RegionCandidate


def check_mask(mask: Mask, width: int, height: int) -> None:
    """Validate mask dimensions against the buffer length.

    Raises:
        ValueError: If dimensions are not positive or the buffer length
                    differs from width * height.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Mask dimensions must be positive, got {width}x{height}")
    if len(mask) != width * height:
        raise ValueError(
            f"Mask length {len(mask)} does not match {width}x{height}={width * height}"
        )


def evaluate_component(
    positions: list[int],
    width: int,
    config: DetectionConfig,
) -> RegionCandidate:
    """Build a candidate for one component and apply the size/shape filters.

    A single pixel gives a 0x0 box whose aspect ratio is nan; nan fails every
    comparison, so single-pixel components are always rejected.
    """
    x, y, w, h = bounding_box(positions, width)
    region = Region(x=x, y=y, width=w, height=h)
    area = region.area
    ratio = region.aspect_ratio

    rejection_reason = None
    if not (config.min_area <= area <= config.max_area):
        rejection_reason = f"area {area} outside [{config.min_area}, {config.max_area}]"
    elif not (config.min_aspect_ratio <= ratio <= config.max_aspect_ratio):
        rejection_reason = (
            f"aspect_ratio {ratio:.2f} outside "
            f"[{config.min_aspect_ratio}, {config.max_aspect_ratio}]"
        )

    if rejection_reason is not None:
        return RegionCandidate(
            region=region,
            pixel_count=len(positions),
            passed=False,
            rejection_reason=rejection_reason,
        )

    confidence = area / config.max_area * 100
    return RegionCandidate(
        region=Region(x=x, y=y, width=w, height=h, confidence=confidence),
        pixel_count=len(positions),
    )


def find_region_candidates(
    mask: Mask,
    width: int,
    height: int,
    config: DetectionConfig,
    include_rejected: bool = False,
) -> list[RegionCandidate]:
    """Find every connected component and evaluate it against config.

    Pixels are scanned in row-major order, so candidates come out in the
    order of their first (top-most, then left-most) pixel.

    Args:
        mask: Flat row-major buffer; 0 is foreground. Not modified.
        width: Mask width.
        height: Mask height.
        config: Detection thresholds.
        include_rejected: If True, include candidates that failed filters
                         (with rejection_reason set).

    Returns:
        List of RegionCandidate objects, before overlap deduplication.

    Raises:
        ValueError: If the mask does not match width x height or config is invalid.
    """
    check_mask(mask, width, height)
    config.validate()
    visited = new_visited(width, height)
    candidates = []

    for y in range(height):
        row_start = y * width
        for x in range(width):
            pos = row_start + x
            if mask[pos] != 0 or visited[pos]:
                continue

            positions = find_component(mask, width, height, x, y, visited)
            candidate = evaluate_component(positions, width, config)
            if candidate.passed or include_rejected:
                candidates.append(candidate)

    return candidates


def find_regions(
    mask: Mask,
    width: int,
    height: int,
    config: DetectionConfig,
    overlap_threshold: float | None = None,
) -> list[Region]:
    """Find size/shape-filtered, non-overlapping regions in a binary mask.

    Deterministic: the same mask and config always give the same regions in
    the same order.

    Args:
        mask: Flat row-major buffer of length width * height; 0 is foreground.
        width: Mask width.
        height: Mask height.
        config: Detection thresholds.
        overlap_threshold: Deduplication threshold (defaults to OVERLAP_THRESHOLD).

    Returns:
        Accepted regions; empty if nothing qualifies.
    """
    candidates = find_region_candidates(mask, width, height, config)
    regions = [candidate.region for candidate in candidates]
    return filter_overlapping_regions(regions, overlap_threshold)
