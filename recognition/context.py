"""
Recognition context: OCR reader and object classifier handles.

The context is constructed at startup, started explicitly, and passed to the
frame processor. It owns the OCR reader for its whole lifetime and can
recreate it after a failure.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable, Protocol

import numpy as np

from config import OCR_LANGUAGES
from detection.types import PlateReading, VehicleType
from detection.validation import plates_from_ocr_results, vehicle_type_from_label

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    import easyocr


class TextReader(Protocol):
    """Interface of an OCR reader (easyocr.Reader satisfies it)."""

    def readtext(self, image: np.ndarray) -> list[tuple[Any, str, float]]:
        """Return (bbox, text, confidence) tuples found in an image."""


class ObjectClassifier(Protocol):
    """Interface for region classifiers."""

    def classify(self, image: np.ndarray) -> str | None:
        """Return a class label (e.g. "car") for an image crop, or None."""


ReaderFactory = Callable[[list[str]], TextReader]


def create_easyocr_reader(languages: list[str], gpu: bool = False) -> "easyocr.Reader":
    """Create an EasyOCR reader (loads model weights; slow)."""
    import easyocr

    return easyocr.Reader(languages, gpu=gpu)


class RecognitionContext:
    """Explicit lifecycle for the recognition collaborators.

    Usage:
        with RecognitionContext(["en"]) as context:
            plates = await context.read_plates(crop)
    """

    def __init__(
        self,
        languages: Iterable[str] = OCR_LANGUAGES,
        gpu: bool = False,
        reader_factory: ReaderFactory | None = None,
        classifier: ObjectClassifier | None = None,
    ):
        self.languages = list(languages)
        self.gpu = gpu
        self.classifier = classifier
        self._reader_factory = reader_factory
        self._reader: TextReader | None = None
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def _create_reader(self) -> TextReader:
        if self._reader_factory is not None:
            return self._reader_factory(self.languages)
        return create_easyocr_reader(self.languages, gpu=self.gpu)

    def start(self) -> None:
        """Create the OCR reader. Calling start() twice is a no-op."""
        if self._started:
            return
        self._reader = self._create_reader()
        self._started = True
        logger.info("OCR reader initialized (%s)", ", ".join(self.languages))

    def close(self) -> None:
        """Release the OCR reader."""
        if self._started:
            self._reader = None
            self._started = False
            logger.info("OCR reader released")

    async def _recreate_reader(self) -> bool:
        """Replace the reader off the event loop. Returns False on failure.

        A failed recreation leaves the context started without a reader;
        the next read_plates call tries again.
        """
        self._reader = None
        try:
            reader = await asyncio.to_thread(self._create_reader)
        except Exception:
            logger.exception("Could not recreate OCR reader; retrying on next crop")
            return False
        self._reader = reader
        logger.info("OCR reader reinitialized")
        return True

    def __enter__(self) -> RecognitionContext:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    async def read_plates(self, image: np.ndarray) -> list[PlateReading]:
        """Run OCR on an image crop and return valid plate readings.

        OCR runs in a worker thread so the event loop stays responsive. If
        the reader raises, it is recreated (also in a worker thread) and no
        readings are returned for this crop. If recreation fails, later
        calls retry it.

        Raises:
            RuntimeError: If the context has not been started.
        """
        if not self._started:
            raise RuntimeError("Recognition context is not started")

        if self._reader is None and not await self._recreate_reader():
            return []
        reader = self._reader

        try:
            results = await asyncio.to_thread(reader.readtext, image)
        except Exception:
            logger.exception("OCR failed; reinitializing reader")
            await self._recreate_reader()
            return []

        readings = plates_from_ocr_results(results)
        if readings:
            logger.info(
                "Found %d plate candidates: %s",
                len(readings),
                ", ".join(f"{r.text} ({r.confidence:.0%})" for r in readings),
            )
        return readings

    def classify(self, image: np.ndarray) -> VehicleType | None:
        """Classify a vehicle crop, or return None without a classifier."""
        if self.classifier is None:
            return None
        return vehicle_type_from_label(self.classifier.classify(image))
