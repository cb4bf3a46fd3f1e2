"""
Frame processing stage.

Turns one queued frame into people and vehicle regions, and hands vehicle
crops to the recognition context for classification and plate OCR.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

import numpy as np

import config
from detection import (
    PlateReading,
    Region,
    VehicleRegion,
    VehicleType,
    crop_region,
    detect_regions,
)
from logging_utils import log_duration
from preprocessing import decode_frame, to_grayscale
from recognition import RecognitionContext
from settings import Settings
from utils import draw_regions, get_debug_image_path

from .queue import FramePacket

logger = logging.getLogger(__name__)


@dataclass
class FrameReport:
    """Everything found in one frame.

    Attributes:
        frame_number: Sequence number from the frame metadata.
        timestamp: Arrival time from the frame metadata.
        people: Person regions.
        vehicles: Vehicle regions, labelled when a classifier ran.
        plates: Plate readings from all vehicle crops.
    """

    frame_number: int
    timestamp: float
    people: list[Region] = field(default_factory=list)
    vehicles: list[VehicleRegion] = field(default_factory=list)
    plates: list[PlateReading] = field(default_factory=list)


class FrameProcessor:
    """Async frame handler for `FrameQueue`.

    Usage:
        processor = FrameProcessor(settings, context)
        queue = FrameQueue(processor, max_size=settings.frame_queue_size)
    """

    def __init__(
        self,
        settings: Settings,
        context: RecognitionContext | None = None,
        on_report: Callable[[FrameReport], None] | None = None,
    ):
        self.settings = settings
        self.context = context
        self.on_report = on_report
        self.person_profile = settings.person_profile()
        self.vehicle_profile = settings.vehicle_profile()

    async def __call__(self, packet: FramePacket) -> FrameReport:
        return await self.process(packet)

    async def process(self, packet: FramePacket) -> FrameReport:
        """Process one frame.

        Raises:
            ValueError: If the frame cannot be decoded.
        """
        metadata = packet.metadata
        logger.info(
            "Processing frame #%d (%d bytes)",
            metadata.frame_number,
            len(packet.frame_buffer),
        )

        with log_duration(logger, f"Frame #{metadata.frame_number}"):
            image = decode_frame(packet.frame_buffer)
            gray = to_grayscale(image)
            threshold = self.settings.overlap_threshold

            people = detect_regions(gray, self.person_profile, threshold)
            vehicles = [
                self._label_vehicle(image, region)
                for region in detect_regions(gray, self.vehicle_profile, threshold)
            ]
            plates = await self._read_plates(image, vehicles)

        report = FrameReport(
            frame_number=metadata.frame_number,
            timestamp=metadata.timestamp,
            people=people,
            vehicles=vehicles,
            plates=plates,
        )
        self._log_report(report)

        if self.settings.debug_mode:
            self._save_debug_images(image, report)

        if self.on_report is not None:
            self.on_report(report)
        return report

    def _label_vehicle(self, image: np.ndarray, region: Region) -> VehicleRegion:
        vehicle_type = VehicleType.UNKNOWN
        if self.context is not None:
            crop = crop_region(image, region)
            if crop.size:
                vehicle_type = self.context.classify(crop) or VehicleType.UNKNOWN
        return VehicleRegion(
            x=region.x,
            y=region.y,
            width=region.width,
            height=region.height,
            confidence=region.confidence,
            vehicle_type=vehicle_type,
        )

    async def _read_plates(
        self,
        image: np.ndarray,
        vehicles: list[VehicleRegion],
    ) -> list[PlateReading]:
        if self.context is None or not self.context.started:
            return []

        plates: list[PlateReading] = []
        for vehicle in vehicles:
            crop = crop_region(image, vehicle)
            if crop.size == 0:
                continue
            plates.extend(await self.context.read_plates(crop))
        return plates

    def _log_report(self, report: FrameReport) -> None:
        for person in report.people:
            logger.info(
                "Person at (%d, %d): %.1f%% confidence",
                person.x, person.y, person.confidence,
            )
        for vehicle in report.vehicles:
            logger.info(
                "%s at (%d, %d): %.1f%% confidence",
                vehicle.vehicle_type.value, vehicle.x, vehicle.y, vehicle.confidence,
            )
        for plate in report.plates:
            logger.info("Detected plate: %s (%.1f%% confidence)", plate.text, plate.confidence * 100)

    def _save_debug_images(self, image: np.ndarray, report: FrameReport) -> None:
        debug_dir = self.settings.debug_dir
        if report.people:
            path = get_debug_image_path(debug_dir, "detected_people", report.frame_number)
            if draw_regions(image, report.people, config.PERSON_BOX_COLOR, path):
                logger.debug("Saved person debug image %s", path)
        if report.vehicles:
            path = get_debug_image_path(debug_dir, "detected_vehicles", report.frame_number)
            if draw_regions(image, report.vehicles, config.VEHICLE_BOX_COLOR, path):
                logger.debug("Saved vehicle debug image %s", path)
