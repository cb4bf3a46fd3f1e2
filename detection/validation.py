"""
License plate validation and parsing.

Functions for deciding whether OCR text looks like a license plate, and for
mapping classifier labels to vehicle types.
"""

import re

from config import MAX_PLATE_LENGTH, MIN_PLATE_LENGTH, PLATE_PATTERNS

from .types import PlateReading, VehicleType

_COMPILED_PATTERNS = [re.compile(pattern) for pattern in PLATE_PATTERNS.values()]

_VEHICLE_LABELS = {
    "car": VehicleType.CAR,
    "motorcycle": VehicleType.MOTORCYCLE,
    "motorbike": VehicleType.MOTORCYCLE,
    "bus": VehicleType.BUS,
    "truck": VehicleType.TRUCK,
    "bicycle": VehicleType.BICYCLE,
    "van": VehicleType.VAN,
    "scooter": VehicleType.SCOOTER,
}


def normalize_plate_text(word: str) -> str:
    """Uppercase a word and drop everything except A-Z and 0-9."""
    return re.sub(r"[^A-Z0-9]", "", word.upper())


def is_valid_plate(text: str) -> bool:
    """Check if normalized text matches a known plate format.

    Args:
        text: Text to validate (already normalized).

    Returns:
        True if text has a plausible length and matches any plate pattern.
    """
    if not MIN_PLATE_LENGTH <= len(text) <= MAX_PLATE_LENGTH:
        return False
    return any(pattern.match(text) for pattern in _COMPILED_PATTERNS)


def plates_from_ocr_results(results) -> list[PlateReading]:
    """Extract plate readings from OCR output.

    Args:
        results: Iterable of (bbox, text, confidence) tuples as returned by
                 an OCR reader. Text may contain several whitespace-separated
                 words; each is checked on its own.

    Returns:
        Valid plate readings in OCR order.
    """
    readings = []
    for _bbox, text, confidence in results:
        for word in text.split():
            cleaned = normalize_plate_text(word)
            if is_valid_plate(cleaned):
                readings.append(PlateReading(text=cleaned, confidence=float(confidence)))
    return readings


def vehicle_type_from_label(label: str | None) -> VehicleType:
    """Map a classifier label (e.g. "car", "motorbike") to a VehicleType."""
    if not label:
        return VehicleType.UNKNOWN
    return _VEHICLE_LABELS.get(label.strip().lower(), VehicleType.UNKNOWN)
