"""
Region detection module.

This module finds candidate object regions (people, vehicles) in binary
masks. It follows the same design philosophy as the preprocessing module:
pure functions, early validation, and clear separation of concerns.

Key components:
- types: Core data structures (Region, DetectionConfig, RegionCandidate, PlateReading)
- components: Iterative flood fill over a flat mask (4-connectivity)
- regions: Raster scan, size/shape filtering and confidence scoring
- filtering: All-pairs overlap deduplication
- profiles: Person and vehicle threshold bundles
- validation: License plate text validation, vehicle label mapping
- detector: Detection on decoded frames (binarize + find_regions)

The main entry point is `find_regions()`, which turns a binary mask into a
list of non-overlapping regions.
"""

from .types import (
    DetectionConfig,
    PlateReading,
    Region,
    RegionCandidate,
    VehicleRegion,
    VehicleType,
)
from .components import find_component, to_index, to_xy
from .regions import find_regions, find_region_candidates
from .filtering import filter_overlapping_regions
from .profiles import DetectionProfile, PERSON_PROFILE, VEHICLE_PROFILE
from .validation import (
    is_valid_plate,
    normalize_plate_text,
    plates_from_ocr_results,
    vehicle_type_from_label,
)
from .detector import crop_region, detect_regions

__all__ = [
    "DetectionConfig",
    "PlateReading",
    "Region",
    "RegionCandidate",
    "VehicleRegion",
    "VehicleType",
    "find_component",
    "to_index",
    "to_xy",
    "find_regions",
    "find_region_candidates",
    "filter_overlapping_regions",
    "DetectionProfile",
    "PERSON_PROFILE",
    "VEHICLE_PROFILE",
    "is_valid_plate",
    "normalize_plate_text",
    "plates_from_ocr_results",
    "vehicle_type_from_label",
    "crop_region",
    "detect_regions",
]
