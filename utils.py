"""Debug image helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np

from detection.types import Region

logger = logging.getLogger(__name__)


def get_debug_image_path(debug_dir: str | Path, prefix: str, frame_number: int) -> Path:
    """Path for an annotated frame, e.g. debug_output/detected_people_000042.jpg."""
    return Path(debug_dir) / f"{prefix}_{frame_number:06d}.jpg"


def draw_regions(
    image: np.ndarray,
    regions: list[Region],
    color: tuple[int, int, int],
    output_path: Path,
) -> bool:
    """Draw region rectangles on a copy of an image and save it.

    Args:
        image: BGR or grayscale image as numpy array.
        regions: Regions in image coordinates.
        color: Rectangle color (BGR).
        output_path: Where to save the annotated image.

    Returns:
        True on success
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        if image.ndim == 2:
            annotated = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        else:
            annotated = image.copy()

        font = cv2.FONT_HERSHEY_SIMPLEX
        for region in regions:
            x1, y1, x2, y2 = region.to_rect()
            cv2.rectangle(annotated, (x1, y1), (x2, y2), color, 3)

            label = f"{region.confidence:.1f}%"
            (_, text_height), _ = cv2.getTextSize(label, font, 0.6, 2)
            label_y = max(y1 - 8, text_height + 4)
            cv2.putText(annotated, label, (x1, label_y), font, 0.6, color, 2)

        if not cv2.imwrite(str(output_path), annotated):
            logger.error("Could not write debug image %s", output_path)
            return False
        return True

    except (cv2.error, OSError) as e:
        logger.error("Error drawing regions to %s: %s", output_path, e)
        return False
