"""
Runtime settings built once at startup.

Defaults come from `config.py`, may be overridden by a YAML file, and then
by environment variables. The resulting `Settings` object is immutable and
validated; it is passed explicitly to whatever needs it, and no other module
reads the environment.

Recognized options (YAML key / environment variable):

    frame_queue_size / FRAME_QUEUE_SIZE
        Capacity of the frame queue before the oldest frame is dropped.
    min_person_area, max_person_area / MIN_PERSON_AREA, MAX_PERSON_AREA
    min_person_aspect_ratio, max_person_aspect_ratio / MIN_PERSON_ASPECT_RATIO, ...
        Bounds for person regions.
    min_vehicle_area, max_vehicle_area / MIN_VEHICLE_AREA, MAX_VEHICLE_AREA
    min_vehicle_aspect_ratio, max_vehicle_aspect_ratio / MIN_VEHICLE_ASPECT_RATIO, ...
        Bounds for vehicle regions.
    person_blur_sigma, person_threshold / PERSON_BLUR_SIGMA, PERSON_THRESHOLD
    vehicle_blur_sigma, vehicle_threshold / VEHICLE_BLUR_SIGMA, VEHICLE_THRESHOLD
        Binarization before each detection pass.
    overlap_threshold / OVERLAP_THRESHOLD
        Overlap ratio above which regions are treated as duplicates.
    debug_mode, debug_dir / DEBUG_MODE, DEBUG_DIR
        Save annotated frames with detections under debug_dir.
    ocr_languages / OCR_LANGUAGES
        Languages for the plate OCR reader (comma separated in the environment).
"""

from __future__ import annotations

import dataclasses
import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

import config
from detection.profiles import DetectionProfile
from detection.types import DetectionConfig

logger = logging.getLogger(__name__)


def _parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    return int(str(value).strip())


def _parse_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    number = float(str(value).strip()) if isinstance(value, str) else float(value)
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value!r}")
    return number


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def _parse_languages(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(item) for item in value]
    languages = tuple(item.strip() for item in items if item.strip())
    if not languages:
        raise ValueError("expected at least one language")
    return languages


@dataclass(frozen=True)
class Settings:
    """Validated process configuration. See the module docstring for options."""

    frame_queue_size: int = config.FRAME_QUEUE_SIZE

    min_person_area: int = config.MIN_PERSON_AREA
    max_person_area: int = config.MAX_PERSON_AREA
    min_person_aspect_ratio: float = config.MIN_PERSON_ASPECT_RATIO
    max_person_aspect_ratio: float = config.MAX_PERSON_ASPECT_RATIO
    person_blur_sigma: float = config.PERSON_BLUR_SIGMA
    person_threshold: int = config.PERSON_THRESHOLD

    min_vehicle_area: int = config.MIN_VEHICLE_AREA
    max_vehicle_area: int = config.MAX_VEHICLE_AREA
    min_vehicle_aspect_ratio: float = config.MIN_VEHICLE_ASPECT_RATIO
    max_vehicle_aspect_ratio: float = config.MAX_VEHICLE_ASPECT_RATIO
    vehicle_blur_sigma: float = config.VEHICLE_BLUR_SIGMA
    vehicle_threshold: int = config.VEHICLE_THRESHOLD

    overlap_threshold: float = config.OVERLAP_THRESHOLD

    debug_mode: bool = config.DEBUG_MODE
    debug_dir: str = config.DEBUG_DIR

    ocr_languages: tuple[str, ...] = config.OCR_LANGUAGES

    def person_profile(self) -> DetectionProfile:
        return DetectionProfile(
            name="person",
            detection=DetectionConfig(
                min_area=self.min_person_area,
                max_area=self.max_person_area,
                min_aspect_ratio=self.min_person_aspect_ratio,
                max_aspect_ratio=self.max_person_aspect_ratio,
            ),
            blur_sigma=self.person_blur_sigma,
            threshold=self.person_threshold,
        )

    def vehicle_profile(self) -> DetectionProfile:
        return DetectionProfile(
            name="vehicle",
            detection=DetectionConfig(
                min_area=self.min_vehicle_area,
                max_area=self.max_vehicle_area,
                min_aspect_ratio=self.min_vehicle_aspect_ratio,
                max_aspect_ratio=self.max_vehicle_aspect_ratio,
            ),
            blur_sigma=self.vehicle_blur_sigma,
            threshold=self.vehicle_threshold,
        )

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        if self.frame_queue_size < 1:
            raise ValueError(
                f"frame_queue_size must be at least 1, got {self.frame_queue_size}"
            )
        if not 0.0 <= self.overlap_threshold <= 1.0:
            raise ValueError(
                f"overlap_threshold must be in [0, 1], got {self.overlap_threshold}"
            )
        if not self.debug_dir:
            raise ValueError("debug_dir must not be empty")
        self.person_profile().validate()
        self.vehicle_profile().validate()

    def to_dict(self) -> dict[str, Any]:
        d = dataclasses.asdict(self)
        d["ocr_languages"] = list(self.ocr_languages)
        return d


# Parser per option; the environment variable is the upper-cased field name
OPTION_PARSERS: dict[str, Callable[[Any], Any]] = {
    "frame_queue_size": _parse_int,
    "min_person_area": _parse_int,
    "max_person_area": _parse_int,
    "min_person_aspect_ratio": _parse_float,
    "max_person_aspect_ratio": _parse_float,
    "person_blur_sigma": _parse_float,
    "person_threshold": _parse_int,
    "min_vehicle_area": _parse_int,
    "max_vehicle_area": _parse_int,
    "min_vehicle_aspect_ratio": _parse_float,
    "max_vehicle_aspect_ratio": _parse_float,
    "vehicle_blur_sigma": _parse_float,
    "vehicle_threshold": _parse_int,
    "overlap_threshold": _parse_float,
    "debug_mode": _parse_bool,
    "debug_dir": str,
    "ocr_languages": _parse_languages,
}


def _parse_option(name: str, value: Any, source: str) -> Any:
    try:
        return OPTION_PARSERS[name](value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid value for {source}: {value!r} ({e})") from e


def load_settings_file(path: str | Path) -> dict[str, Any]:
    """Load option overrides from a YAML mapping.

    Raises:
        ValueError: If the file is not a mapping or has unknown keys.
    """
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")

    unknown = sorted(set(data) - set(OPTION_PARSERS))
    if unknown:
        raise ValueError(f"Unknown settings in {path}: {', '.join(unknown)}")

    return {
        name: _parse_option(name, value, f"{name} in {path}")
        for name, value in data.items()
    }


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build validated settings from defaults, a YAML file and the environment.

    Args:
        path: Optional YAML file with lower-case option names.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Validated Settings.

    Raises:
        ValueError: If any option is malformed or out of range.
    """
    if environ is None:
        environ = os.environ

    overrides: dict[str, Any] = {}
    if path is not None:
        overrides.update(load_settings_file(path))

    for name in OPTION_PARSERS:
        env_name = name.upper()
        value = environ.get(env_name)
        if value is not None and value != "":
            overrides[name] = _parse_option(name, value, env_name)

    settings = Settings(**overrides)
    settings.validate()
    if overrides:
        logger.debug("Settings overrides: %s", ", ".join(sorted(overrides)))
    return settings
