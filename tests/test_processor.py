"""Tests for the per-frame processing stage."""

import asyncio
import json

import cv2
import numpy as np
import pytest

from detection import VehicleType, crop_region, detect_regions
from detection.types import Region, VehicleRegion
from frames import FrameMetadata, FramePacket, FrameProcessor, FrameQueue
from recognition import RecognitionContext
from schemas import FrameReportOut, RegionOut
from settings import Settings

# Dark blobs on a white frame: one tall (person-shaped), one wide (vehicle-shaped)
PERSON_BOX = (20, 20, 60, 150)
VEHICLE_BOX = (150, 180, 160, 80)


def synthetic_frame():
    image = np.full((300, 400, 3), 255, dtype=np.uint8)
    for x, y, w, h in (PERSON_BOX, VEHICLE_BOX):
        image[y:y + h, x:x + w] = 0
    return image


def encode_png(image):
    ok, encoded = cv2.imencode(".png", image)
    assert ok
    return encoded.tobytes()


def packet(data, frame_number=7):
    return FramePacket(frame_buffer=data, metadata=FrameMetadata(timestamp=1234.5, frame_number=frame_number))


def close_to(region, box, tolerance=3):
    x, y, w, h = box
    expected = (x, y, w - 1, h - 1)
    return all(abs(a - b) <= tolerance for a, b in zip(region.to_xywh(), expected))


class FakeReader:
    def readtext(self, image):
        return [(None, "AB12CDE", 0.9)]


class FakeClassifier:
    def __init__(self):
        self.shapes = []

    def classify(self, image):
        self.shapes.append(image.shape)
        return "car"


class TestDetectRegions:
    """Tests for detection on decoded images."""

    def test_person_and_vehicle_profiles(self):
        settings = Settings()
        image = synthetic_frame()

        people = detect_regions(image, settings.person_profile())
        vehicles = detect_regions(image, settings.vehicle_profile())

        assert len(people) == 1
        assert close_to(people[0], PERSON_BOX)
        assert len(vehicles) == 1
        assert close_to(vehicles[0], VEHICLE_BOX)

    def test_blank_image(self):
        image = np.full((100, 100, 3), 255, dtype=np.uint8)
        assert detect_regions(image, Settings().person_profile()) == []

    def test_crop_region_is_inclusive_and_clipped(self):
        image = np.zeros((10, 10), dtype=np.uint8)
        assert crop_region(image, Region(x=2, y=3, width=4, height=2)).shape == (3, 5)
        assert crop_region(image, Region(x=8, y=8, width=5, height=5)).shape == (2, 2)


class TestFrameProcessor:
    """Tests for FrameProcessor.process."""

    def test_without_context(self):
        processor = FrameProcessor(Settings())
        report = asyncio.run(processor.process(packet(encode_png(synthetic_frame()))))

        assert report.frame_number == 7
        assert report.timestamp == 1234.5
        assert len(report.people) == 1
        assert len(report.vehicles) == 1
        assert report.vehicles[0].vehicle_type is VehicleType.UNKNOWN
        assert report.plates == []

    def test_with_recognition_context(self):
        classifier = FakeClassifier()
        context = RecognitionContext(reader_factory=lambda languages: FakeReader(), classifier=classifier)
        context.start()
        processor = FrameProcessor(Settings(), context)

        report = asyncio.run(processor(packet(encode_png(synthetic_frame()))))

        assert report.vehicles[0].vehicle_type is VehicleType.CAR
        assert [p.text for p in report.plates] == ["AB12CDE"]
        assert len(classifier.shapes) == 1
        assert classifier.shapes[0][2] == 3

    def test_unstarted_context_skips_ocr(self):
        context = RecognitionContext(reader_factory=lambda languages: FakeReader())
        processor = FrameProcessor(Settings(), context)
        report = asyncio.run(processor.process(packet(encode_png(synthetic_frame()))))
        assert report.plates == []

    def test_on_report_callback(self):
        reports = []
        processor = FrameProcessor(Settings(), on_report=reports.append)
        report = asyncio.run(processor.process(packet(encode_png(synthetic_frame()))))
        assert reports == [report]

    def test_undecodable_frame_raises(self):
        processor = FrameProcessor(Settings())
        with pytest.raises(ValueError):
            asyncio.run(processor.process(packet(b"garbage")))

    def test_debug_images(self, tmp_path):
        settings = Settings(debug_mode=True, debug_dir=str(tmp_path / "debug"))
        processor = FrameProcessor(settings)
        asyncio.run(processor.process(packet(encode_png(synthetic_frame()), frame_number=42)))

        assert (tmp_path / "debug" / "detected_people_000042.jpg").is_file()
        assert (tmp_path / "debug" / "detected_vehicles_000042.jpg").is_file()

    def test_no_debug_images_by_default(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        processor = FrameProcessor(Settings())
        asyncio.run(processor.process(packet(encode_png(synthetic_frame()))))
        assert list(tmp_path.iterdir()) == []

    def test_bad_frame_does_not_stop_queue(self):
        reports = []
        processor = FrameProcessor(Settings(), on_report=reports.append)

        async def scenario():
            queue = FrameQueue(processor, max_size=5)
            queue.enqueue(b"garbage", FrameMetadata(1.0, 1))
            queue.enqueue(encode_png(synthetic_frame()), FrameMetadata(2.0, 2))
            await queue.join()
            return queue

        queue = asyncio.run(scenario())
        assert queue.failed == 1
        assert queue.processed == 1
        assert [r.frame_number for r in reports] == [2]


class TestReportSchema:
    def test_json_output(self):
        context = RecognitionContext(
            reader_factory=lambda languages: FakeReader(),
            classifier=FakeClassifier(),
        )
        context.start()
        processor = FrameProcessor(Settings(), context)
        report = asyncio.run(processor.process(packet(encode_png(synthetic_frame()))))

        data = json.loads(FrameReportOut.from_report(report).model_dump_json())

        assert data["frame_number"] == 7
        assert data["people"][0]["vehicle_type"] is None
        assert data["vehicles"][0]["vehicle_type"] == "Car"
        assert data["plates"] == [{"text": "AB12CDE", "confidence": 0.9}]
        assert 0 < data["people"][0]["confidence"] <= 100

    def test_region_serialization(self):
        person = RegionOut.from_region(Region(1, 2, 3, 4, confidence=12.3456))
        vehicle = RegionOut.from_region(
            VehicleRegion(5, 6, 7, 8, confidence=50.0, vehicle_type=VehicleType.BUS)
        )
        assert person.model_dump() == {
            "x": 1, "y": 2, "width": 3, "height": 4,
            "confidence": 12.35, "vehicle_type": None,
        }
        assert vehicle.vehicle_type == "Bus"
        assert vehicle.confidence == 50.0
