"""Detect command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from detection import detect_regions
from preprocessing import decode_frame
from schemas import DetectOut, RegionOut

logger = logging.getLogger(__name__)

PROFILE_CHOICES = ("person", "vehicle", "all")


def add_detect_subparser(subparsers: argparse._SubParsersAction) -> None:
    detect_parser = subparsers.add_parser(
        "detect",
        help="Detect person and vehicle regions in a single image",
    )
    detect_parser.add_argument("image", help="Image file path")
    detect_parser.add_argument(
        "--profile",
        choices=PROFILE_CHOICES,
        default="all",
        help="Detection profile to run (default: all)",
    )
    detect_parser.add_argument(
        "--json",
        action="store_true",
        help="Print regions as JSON",
    )
    detect_parser.set_defaults(_cmd=cmd_detect)


def cmd_detect(args: argparse.Namespace) -> int:
    settings = args.settings
    image_path = Path(args.image)

    try:
        image = decode_frame(image_path.read_bytes())
    except (OSError, ValueError) as e:
        logger.error("Cannot read %s: %s", image_path, e)
        return 1

    profiles = []
    if args.profile in ("person", "all"):
        profiles.append(settings.person_profile())
    if args.profile in ("vehicle", "all"):
        profiles.append(settings.vehicle_profile())

    height, width = image.shape[:2]
    result = DetectOut(image=str(image_path), width=width, height=height)
    for profile in profiles:
        regions = detect_regions(image, profile, settings.overlap_threshold)
        result.regions[profile.name] = [RegionOut.from_region(r) for r in regions]

    if args.json:
        print(result.model_dump_json(indent=2))
        return 0

    print(f"{image_path} ({width}x{height})")
    for name, regions in result.regions.items():
        print(f"  {name}: {len(regions)} region(s)")
        for region in regions:
            print(
                f"    ({region.x}, {region.y}) {region.width}x{region.height} "
                f"{region.confidence:.1f}%"
            )
    return 0
