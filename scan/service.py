"""Scan service: replay local images through the frame queue."""

from __future__ import annotations

import asyncio
import logging
import signal
import threading
from pathlib import Path
from typing import Callable

from tqdm import tqdm

from frames import FrameProcessor, FrameQueue, FrameReport
from recognition import RecognitionContext
from settings import Settings
from sources import iter_frames, scan_local_images

logger = logging.getLogger(__name__)


def empty_stats(frames_found: int = 0) -> dict:
    return {
        "frames_found": frames_found,
        "frames_enqueued": 0,
        "frames_processed": 0,
        "frames_failed": 0,
        "frames_dropped": 0,
        "frames_abandoned": 0,
        "people_detected": 0,
        "vehicles_detected": 0,
        "plates_detected": 0,
    }


async def scan_frames(
    paths: list[Path],
    settings: Settings,
    context: RecognitionContext | None = None,
    queue_size: int | None = None,
    fps: float = 0.0,
    shutdown: threading.Event | None = None,
    on_report: Callable[[FrameReport], None] | None = None,
) -> dict:
    """Push image files through a FrameQueue as if they were a live stream.

    Frames are produced at `fps` (0 means as fast as possible). When the
    producer outpaces processing, the queue drops the oldest frames.

    Args:
        paths: Image files, in stream order.
        settings: Validated settings.
        context: Started recognition context, or None to skip recognition.
        queue_size: Queue capacity (defaults to settings.frame_queue_size).
        fps: Producer frame rate.
        shutdown: Shutdown flag; once set, no further frames are produced.
        on_report: Called with each FrameReport.

    Returns:
        Dict of counters.
    """
    stats = empty_stats(len(paths))
    if shutdown is None:
        shutdown = threading.Event()

    def collect(report: FrameReport) -> None:
        stats["people_detected"] += len(report.people)
        stats["vehicles_detected"] += len(report.vehicles)
        stats["plates_detected"] += len(report.plates)
        if on_report is not None:
            on_report(report)

    processor = FrameProcessor(settings, context, on_report=collect)
    queue = FrameQueue(
        processor,
        max_size=queue_size or settings.frame_queue_size,
        shutdown=shutdown,
    )
    interval = 1.0 / fps if fps > 0 else 0.0

    for data, metadata in iter_frames(paths):
        if shutdown.is_set():
            logger.info("Shutdown requested; stopping after %d frames", stats["frames_enqueued"])
            break
        if queue.enqueue(data, metadata):
            stats["frames_enqueued"] += 1
        await asyncio.sleep(interval)

    await queue.join()
    stats["frames_abandoned"] = await queue.close()
    stats["frames_processed"] = queue.processed
    stats["frames_failed"] = queue.failed
    stats["frames_dropped"] = queue.dropped
    return stats


def _install_interrupt_handler(shutdown: threading.Event) -> None:
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, shutdown.set)
    except (NotImplementedError, RuntimeError):
        # Signal handlers are unavailable on some platforms and off the main thread
        logger.debug("SIGINT handler not installed")


def run_scan(
    source: str,
    settings: Settings,
    limit: int | None = None,
    ocr: bool = False,
    queue_size: int | None = None,
    fps: float = 0.0,
    show_progress: bool = True,
    on_report: Callable[[FrameReport], None] | None = None,
    context: RecognitionContext | None = None,
) -> dict:
    """Scan a local image file or directory through the frame pipeline.

    Ctrl-C sets the shutdown flag: the frame in flight finishes, the rest are
    abandoned.

    Raises:
        ValueError: If source is not an image file or directory.
    """
    paths = scan_local_images(source)
    if limit is not None:
        paths = paths[:limit]

    logger.info("Found %s images in %s", len(paths), source)
    if not paths:
        logger.warning("No images found.")
        return empty_stats()

    if context is None and ocr:
        context = RecognitionContext(settings.ocr_languages)

    progress = tqdm(total=len(paths), unit="frame", disable=not show_progress)

    def report_progress(report: FrameReport) -> None:
        progress.update(1)
        if on_report is not None:
            on_report(report)

    async def _run() -> dict:
        shutdown = threading.Event()
        _install_interrupt_handler(shutdown)
        return await scan_frames(
            paths,
            settings,
            context=context,
            queue_size=queue_size,
            fps=fps,
            shutdown=shutdown,
            on_report=report_progress,
        )

    try:
        if context is not None:
            context.start()
        stats = asyncio.run(_run())
        # Only frames that produce a report advance the bar.
        progress.total = progress.n
        progress.refresh()
        return stats
    finally:
        progress.close()
        if context is not None:
            context.close()
