"""
Type definitions for the detection module.

This module defines the core data structures used throughout the region
detection pipeline.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from geometry import Rect, aspect_ratio


class VehicleType(str, Enum):
    """Vehicle classes a recognition backend can assign to a region."""

    CAR = "Car"
    MOTORCYCLE = "Motorcycle"
    BUS = "Bus"
    VAN = "Van"
    TRUCK = "Truck"
    BICYCLE = "Bicycle"
    SCOOTER = "Scooter"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class DetectionConfig:
    """Size and shape thresholds for one detection pass.

    Attributes:
        min_area: Smallest accepted bounding box area (width * height).
        max_area: Largest accepted bounding box area. Also the reference for
                  the confidence score.
        min_aspect_ratio: Smallest accepted width / height.
        max_aspect_ratio: Largest accepted width / height.
    """

    min_area: float
    max_area: float
    min_aspect_ratio: float
    max_aspect_ratio: float

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        for name in ("min_area", "max_area", "min_aspect_ratio", "max_aspect_ratio"):
            if math.isnan(getattr(self, name)):
                raise ValueError(f"{name} must be a number, got nan")
        if not math.isfinite(self.max_area):
            raise ValueError(f"max_area must be finite, got {self.max_area}")
        if not math.isfinite(self.min_aspect_ratio):
            raise ValueError(f"min_aspect_ratio must be finite, got {self.min_aspect_ratio}")
        if self.min_area < 0:
            raise ValueError(f"min_area must be non-negative, got {self.min_area}")
        if self.max_area <= 0:
            raise ValueError(f"max_area must be positive, got {self.max_area}")
        if self.min_area > self.max_area:
            raise ValueError(
                f"min_area ({self.min_area}) must not exceed max_area ({self.max_area})"
            )
        if self.min_aspect_ratio < 0:
            raise ValueError(
                f"min_aspect_ratio must be non-negative, got {self.min_aspect_ratio}"
            )
        if self.min_aspect_ratio > self.max_aspect_ratio:
            raise ValueError(
                f"min_aspect_ratio ({self.min_aspect_ratio}) must not exceed "
                f"max_aspect_ratio ({self.max_aspect_ratio})"
            )


@dataclass(frozen=True)
class Region:
    """An axis-aligned bounding box of a connected component.

    Coordinates are in mask pixels. Width and height are coordinate spans,
    so a single-pixel component is 0x0.

    Attributes:
        x: Left edge.
        y: Top edge.
        width: max_x - min_x of the component.
        height: max_y - min_y of the component.
        confidence: Heuristic score in [0, 100] (area relative to max_area).
    """

    x: int
    y: int
    width: int
    height: int
    confidence: float = 0.0

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        return aspect_ratio(self.width, self.height)

    def to_xywh(self) -> Rect:
        """Return (x, y, w, h) tuple."""
        return (self.x, self.y, self.width, self.height)

    def to_rect(self) -> tuple[int, int, int, int]:
        """Return (x1, y1, x2, y2) corners."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class VehicleRegion(Region):
    """A region from the vehicle profile, labelled by a classifier if one ran."""

    vehicle_type: VehicleType = VehicleType.UNKNOWN


@dataclass(frozen=True)
class RegionCandidate:
    """A connected component's bounding box before filtering.

    Includes metadata about why the region was accepted or rejected,
    enabling debugging of the detection pipeline.

    Attributes:
        region: Bounding box (confidence set only for passed candidates).
        pixel_count: Number of foreground pixels in the component.
        passed: Whether this candidate passed the area and aspect filters.
        rejection_reason: Why the candidate was rejected (None if passed).
    """

    region: Region
    pixel_count: int
    passed: bool = True
    rejection_reason: str | None = None

    @property
    def area(self) -> int:
        return self.region.area

    @property
    def aspect_ratio(self) -> float:
        return self.region.aspect_ratio


@dataclass(frozen=True)
class PlateReading:
    """A license plate string read by OCR.

    Attributes:
        text: Normalized plate text (A-Z, 0-9).
        confidence: OCR confidence between 0 and 1.
    """

    text: str
    confidence: float
