"""
Region detection on decoded frames.

Ties together binarization (an OpenCV call outside the core) and the
mask-based region detector for one detection profile.
"""

import logging

import numpy as np

from logging_utils import log_duration
from preprocessing import binarize, mask_to_buffer, to_grayscale

from .profiles import DetectionProfile
from .regions import find_regions
from .types import Region

logger = logging.getLogger(__name__)


def detect_regions(
    image: np.ndarray,
    profile: DetectionProfile,
    overlap_threshold: float | None = None,
) -> list[Region]:
    """Detect candidate regions for one profile in a decoded image.

    Args:
        image: Decoded image (BGR, BGRA or grayscale numpy array).
        profile: Thresholds for the object class being looked for.
        overlap_threshold: Deduplication threshold (defaults to OVERLAP_THRESHOLD).

    Returns:
        Regions in mask (= image) coordinates.
    """
    gray = to_grayscale(image)
    with log_duration(logger, f"{profile.name} detection"):
        mask = binarize(gray, profile.blur_sigma, profile.threshold)
        buffer, width, height = mask_to_buffer(mask)
        regions = find_regions(buffer, width, height, profile.detection, overlap_threshold)

    logger.debug("Detected %d %s regions", len(regions), profile.name)
    return regions


def crop_region(image: np.ndarray, region: Region) -> np.ndarray:
    """Extract a region from an image.

    The box spans width+1 x height+1 pixels because region sizes are
    coordinate spans. The crop is clipped to the image bounds.
    """
    img_height, img_width = image.shape[:2]
    x1 = max(0, region.x)
    y1 = max(0, region.y)
    x2 = min(img_width, region.x + region.width + 1)
    y2 = min(img_height, region.y + region.height + 1)
    return image[y1:y2, x1:x2]
