"""Tests for debug image helpers."""

from pathlib import Path

import cv2
import numpy as np

from detection import Region
from utils import draw_regions, get_debug_image_path


def test_debug_image_path():
    path = get_debug_image_path("debug_output", "detected_people", 42)
    assert path == Path("debug_output") / "detected_people_000042.jpg"


def test_draw_regions_writes_annotated_copy(tmp_path):
    image = np.full((50, 60, 3), 255, dtype=np.uint8)
    output = tmp_path / "nested" / "out.png"
    regions = [Region(x=10, y=10, width=20, height=25, confidence=42.0)]

    assert draw_regions(image, regions, (0, 0, 255), output)

    saved = cv2.imread(str(output))
    assert saved.shape == (50, 60, 3)
    assert tuple(saved[10, 20]) == (0, 0, 255)
    # Original untouched
    assert np.all(image == 255)


def test_draw_regions_grayscale_input(tmp_path):
    image = np.full((20, 20), 128, dtype=np.uint8)
    assert draw_regions(image, [], (0, 255, 0), tmp_path / "gray.png")


def test_draw_regions_unwritable_path(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    image = np.zeros((10, 10, 3), dtype=np.uint8)
    assert not draw_regions(image, [], (0, 255, 0), blocker / "out.png")
