"""
Detection profiles.

A profile bundles the binarization parameters and the size/shape thresholds
used to look for one class of object. People and vehicles use the same
detector with different numbers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import config

from .types import DetectionConfig


@dataclass(frozen=True)
class DetectionProfile:
    """Thresholds for one object class.

    Attributes:
        name: Profile name used in logs and debug image names.
        detection: Area and aspect ratio bounds for accepted regions.
        blur_sigma: Gaussian blur sigma applied before thresholding.
        threshold: Gray level at or above which a pixel becomes background.
    """

    name: str
    detection: DetectionConfig
    blur_sigma: float
    threshold: int

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        self.detection.validate()
        if not math.isfinite(self.blur_sigma):
            raise ValueError(f"{self.name}: blur_sigma must be finite, got {self.blur_sigma}")
        if self.blur_sigma < 0:
            raise ValueError(f"{self.name}: blur_sigma must be non-negative, got {self.blur_sigma}")
        if not 0 <= self.threshold <= 255:
            raise ValueError(f"{self.name}: threshold must be in [0, 255], got {self.threshold}")


PERSON_PROFILE = DetectionProfile(
    name="person",
    detection=DetectionConfig(
        min_area=config.MIN_PERSON_AREA,
        max_area=config.MAX_PERSON_AREA,
        min_aspect_ratio=config.MIN_PERSON_ASPECT_RATIO,
        max_aspect_ratio=config.MAX_PERSON_ASPECT_RATIO,
    ),
    blur_sigma=config.PERSON_BLUR_SIGMA,
    threshold=config.PERSON_THRESHOLD,
)

VEHICLE_PROFILE = DetectionProfile(
    name="vehicle",
    detection=DetectionConfig(
        min_area=config.MIN_VEHICLE_AREA,
        max_area=config.MAX_VEHICLE_AREA,
        min_aspect_ratio=config.MIN_VEHICLE_ASPECT_RATIO,
        max_aspect_ratio=config.MAX_VEHICLE_ASPECT_RATIO,
    ),
    blur_sigma=config.VEHICLE_BLUR_SIGMA,
    threshold=config.VEHICLE_THRESHOLD,
)
