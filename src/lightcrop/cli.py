#!/usr/bin/env python3
"""
Command-line entry points.

    lightcrop --input photos/ [--output cropped] [--tolerance 15] [--max-crop 30] [--threads 4]
    lightcrop-corner --input scans/ --corner tl --percent 5 [--output cropped] [--threads 4]
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

from .core.errors import ConfigurationError
from .core.models import Corner, CornerSettings, CropSettings
from .core.workers import DEFAULT_THREADS, process_directory
from .ui.rich_ui import ConsoleReporter
from .utils.log_utils import configure_logging, get_logger

logger = get_logger(__name__)

DEFAULT_OUTPUT_DIR = "cropped"
DEFAULT_TOLERANCE = 15.0
DEFAULT_MAX_CROP = 30.0


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--input', required=True, type=Path,
                        help='Input directory containing image files (required)')
    parser.add_argument('--output', type=Path, default=Path(DEFAULT_OUTPUT_DIR),
                        help=f'Output directory (default: {DEFAULT_OUTPUT_DIR})')
    parser.add_argument('--threads', type=int, default=DEFAULT_THREADS,
                        help=f'Number of concurrent threads (default: {DEFAULT_THREADS})')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lightcrop',
        description='Crop image edges that are darker or brighter than the center '
                    'until the brightness is uniform.'
    )
    _add_common_args(parser)
    parser.add_argument('--tolerance', type=float, default=DEFAULT_TOLERANCE,
                        help=f'Brightness variation tolerance percentage (0-100, default: {DEFAULT_TOLERANCE:g})')
    parser.add_argument('--max-crop', type=float, default=DEFAULT_MAX_CROP,
                        help=f'Maximum crop percentage per dimension (0-100, default: {DEFAULT_MAX_CROP:g})')
    return parser


def build_corner_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lightcrop-corner',
        description='Crop a fixed percentage of every JPEG, anchored at one corner.'
    )
    _add_common_args(parser)
    parser.add_argument('--corner', required=True, choices=[c.value for c in Corner],
                        help='Corner to crop from: tl, tr, bl or br')
    parser.add_argument('--percent', required=True, type=float,
                        help='Percentage of width and height to remove (0-100, exclusive)')
    return parser


def _run(parser: argparse.ArgumentParser, args: argparse.Namespace,
         settings: Union[CropSettings, CornerSettings]) -> int:
    if args.threads < 1:
        parser.error('--threads must be at least 1')
    if not args.input.is_dir():
        parser.error(f"Input directory '{args.input}' does not exist")

    try:
        args.output.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Error creating output directory: {e}")
        return 1

    reporter = ConsoleReporter()
    process_directory(args.input, args.output, settings, threads=args.threads, reporter=reporter)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.WARNING)

    try:
        settings = CropSettings(tolerance=args.tolerance, max_crop_percent=args.max_crop)
    except ConfigurationError as e:
        parser.error(f'--{e}')
    return _run(parser, args, settings)


def corner_main(argv: Optional[List[str]] = None) -> int:
    parser = build_corner_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.WARNING)

    try:
        settings = CornerSettings(corner=Corner(args.corner), percent=args.percent)
    except ConfigurationError as e:
        parser.error(f'--{e}')
    return _run(parser, args, settings)


if __name__ == "__main__":
    sys.exit(main())
