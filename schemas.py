"""Pydantic schemas for JSON output of detections and frame reports."""

from __future__ import annotations

from pydantic import BaseModel, Field

from detection.types import PlateReading, Region, VehicleRegion
from frames.processor import FrameReport


class RegionOut(BaseModel):
    """Output shape for a single region."""
    x: int
    y: int
    width: int
    height: int
    confidence: float
    vehicle_type: str | None = None

    @classmethod
    def from_region(cls, region: Region) -> RegionOut:
        vehicle_type = region.vehicle_type.value if isinstance(region, VehicleRegion) else None
        return cls(
            x=region.x,
            y=region.y,
            width=region.width,
            height=region.height,
            confidence=round(region.confidence, 2),
            vehicle_type=vehicle_type,
        )


class PlateOut(BaseModel):
    """Output shape for a single plate reading."""
    text: str
    confidence: float

    @classmethod
    def from_reading(cls, reading: PlateReading) -> PlateOut:
        return cls(text=reading.text, confidence=round(reading.confidence, 4))


class FrameReportOut(BaseModel):
    """Output shape for everything found in one frame."""
    frame_number: int
    timestamp: float
    people: list[RegionOut] = Field(default_factory=list)
    vehicles: list[RegionOut] = Field(default_factory=list)
    plates: list[PlateOut] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: FrameReport) -> FrameReportOut:
        return cls(
            frame_number=report.frame_number,
            timestamp=report.timestamp,
            people=[RegionOut.from_region(r) for r in report.people],
            vehicles=[RegionOut.from_region(r) for r in report.vehicles],
            plates=[PlateOut.from_reading(p) for p in report.plates],
        )


class DetectOut(BaseModel):
    """Output of the detect command for one image."""
    image: str
    width: int
    height: int
    regions: dict[str, list[RegionOut]] = Field(default_factory=dict)
