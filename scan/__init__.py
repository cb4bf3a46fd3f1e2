"""Scanning service package."""

from .service import run_scan, scan_frames

__all__ = [
    "run_scan",
    "scan_frames",
]
