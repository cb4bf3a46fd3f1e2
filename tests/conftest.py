"""Pytest configuration: fast by default.

Slow tests (real OCR model loading) are skipped unless --slow is passed.
Run the full suite:   pytest --slow
Run fast tests only:  pytest          (default)
"""
import pytest

BACKGROUND = 255
FOREGROUND = 0


def pytest_addoption(parser):
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="Run slow tests that load ML models (EasyOCR)",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--slow"):
        return  # run everything
    skip_slow = pytest.mark.skip(reason="slow test skipped, pass --slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def build_mask(width, height, rects=(), points=()):
    """Flat background mask with foreground rectangles (x, y, w, h) and points (x, y)."""
    mask = bytearray([BACKGROUND]) * (width * height)
    for x, y, w, h in rects:
        for row in range(y, y + h):
            for col in range(x, x + w):
                mask[row * width + col] = FOREGROUND
    for x, y in points:
        mask[y * width + x] = FOREGROUND
    return mask


@pytest.fixture
def make_mask():
    """Factory for flat masks: make_mask(width, height, rects=..., points=...)."""
    return build_mask
