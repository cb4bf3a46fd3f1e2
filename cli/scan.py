"""Scan command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging

from frames import FrameReport
from scan import run_scan
from schemas import FrameReportOut

logger = logging.getLogger(__name__)


def add_scan_subparser(subparsers: argparse._SubParsersAction) -> None:
    scan_parser = subparsers.add_parser(
        "scan",
        help="Replay a local image file or directory through the frame queue",
    )
    scan_parser.add_argument(
        "source",
        help="Local directory or image file path",
    )
    scan_parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Maximum number of images to process (default: all)",
    )
    scan_parser.add_argument(
        "--queue-size",
        type=int,
        default=None,
        help="Frame queue capacity (default: FRAME_QUEUE_SIZE setting)",
    )
    scan_parser.add_argument(
        "--fps",
        type=float,
        default=0.0,
        help="Frames per second to produce (default: as fast as possible)",
    )
    scan_parser.add_argument(
        "--ocr",
        action="store_true",
        help="Read license plates in vehicle regions (loads EasyOCR)",
    )
    scan_parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON report per frame",
    )
    scan_parser.set_defaults(_cmd=cmd_scan)


def cmd_scan(args: argparse.Namespace) -> int:
    if args.queue_size is not None and args.queue_size < 1:
        logger.error("--queue-size must be at least 1")
        return 1

    on_report = None
    if args.json:
        def on_report(report: FrameReport) -> None:
            print(FrameReportOut.from_report(report).model_dump_json())

    try:
        stats = run_scan(
            args.source,
            args.settings,
            limit=args.limit,
            ocr=args.ocr,
            queue_size=args.queue_size,
            fps=args.fps,
            show_progress=not args.json,
            on_report=on_report,
        )
    except ValueError as e:
        logger.error("%s", e)
        return 1
    except ImportError as e:
        logger.error("OCR backend unavailable (%s); install region-watch[ocr]", e)
        return 1

    logger.info(
        "Done: %d processed, %d failed, %d dropped, %d abandoned "
        "(%d people, %d vehicles, %d plates)",
        stats["frames_processed"],
        stats["frames_failed"],
        stats["frames_dropped"],
        stats["frames_abandoned"],
        stats["people_detected"],
        stats["vehicles_detected"],
        stats["plates_detected"],
    )
    return 0 if stats["frames_failed"] == 0 else 1
