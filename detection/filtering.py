"""
Region filtering functions.

Removes regions that overlap each other too much.
"""

from __future__ import annotations

from config import OVERLAP_THRESHOLD
from geometry import overlap_ratio

from .types import Region


def regions_overlap(region_a: Region, region_b: Region, threshold: float) -> bool:
    """Check whether two regions overlap by more than threshold.

    Overlap is measured against the smaller region's area.
    """
    return overlap_ratio(region_a.to_xywh(), region_b.to_xywh()) > threshold


def filter_overlapping_regions(
    regions: list[Region],
    threshold: float | None = None,
) -> list[Region]:
    """Drop every region that overlaps any other region above threshold.

    The test is symmetric and all-pairs: when two regions overlap, both are
    removed. No region is preferred over another (confidence is ignored), so
    the result does not depend on input order, and order is preserved.

    Args:
        regions: Candidate regions.
        threshold: Overlap ratio above which two regions count as duplicates.

    Returns:
        Regions that overlap no other input region above threshold.
    """
    if threshold is None:
        threshold = OVERLAP_THRESHOLD

    if len(regions) <= 1:
        return list(regions)

    kept = []
    for i, region in enumerate(regions):
        overlapping = any(
            regions_overlap(region, other, threshold)
            for j, other in enumerate(regions)
            if j != i
        )
        if not overlapping:
            kept.append(region)
    return kept
