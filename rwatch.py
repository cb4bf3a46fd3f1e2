#!/usr/bin/env python3
"""
Unified CLI for region-watch.

Usage:
    rwatch detect <image>                 # Detect person/vehicle regions in one image
    rwatch detect <image> --profile person --json
    rwatch scan <path>                    # Replay images through the frame queue
    rwatch scan <path> --fps 15 --ocr     # Paced replay with plate OCR
    rwatch config                         # Show resolved settings

Settings come from defaults, an optional --config YAML file, and the
environment (see settings.py for the option list).
"""

import argparse
import json
import logging
import sys

from logging_utils import configure_logging, add_logging_args
from settings import load_settings
from cli.detect import add_detect_subparser
from cli.scan import add_scan_subparser

logger = logging.getLogger(__name__)


def cmd_config(args: argparse.Namespace) -> int:
    """Print the resolved settings."""
    print(json.dumps(args.settings.to_dict(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rwatch",
        description="region-watch - find person and vehicle regions in video frames",
    )
    add_logging_args(parser)
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="YAML settings file (environment variables still override it)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_detect_subparser(subparsers)
    add_scan_subparser(subparsers)

    config_parser = subparsers.add_parser(
        "config",
        help="Show resolved settings",
    )
    config_parser.set_defaults(_cmd=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        args.settings = load_settings(args.config)
    except (OSError, ValueError) as e:
        logger.error("Invalid settings: %s", e)
        return 2

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
