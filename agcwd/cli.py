#!/usr/bin/env python3
"""
AGCWD - Command-line PNG enhancer - Entry Point

Reads an 8-bit RGB or RGBA PNG, enhances it in place with AGCWD and writes
the result.

Usage:
    agcwd-enhance photo.png --output-path enhanced.png --alpha 0.5 --fusion 0.0

Defaults for --alpha and --fusion are read from ~/.agcwd/options.json when
that file exists (or from --config), then overridden by the command line.
"""

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from .loaders import load_png, save_png
from .options import AgcwdOptions, load_options
from .processing.enhance import Agcwd
from .utils.logger import setup_logger
from .utils.path_utils import has_png_signature, png_output_path


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="agcwd-enhance",
        description="Adaptive Gamma Correction with Weighting Distribution for PNG images.",
    )
    ap.add_argument("image_path", type=str, help="Path to the input PNG")
    ap.add_argument("--output-path", default="enhanced.png", type=str,
                    help="Where to write the enhanced PNG (default: enhanced.png)")
    ap.add_argument("--alpha", default=None, type=float,
                    help="Weighting-distribution exponent in (0, 1] (default: 0.5)")
    ap.add_argument("--fusion", default=None, type=float,
                    help="Weight of the original image in [0, 1] (default: 0.0)")
    ap.add_argument("--config", default=None, type=str,
                    help="JSON options file (default: ~/.agcwd/options.json if present)")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return ap


def resolve_options(args: argparse.Namespace) -> AgcwdOptions:
    """Merge the options file with command-line overrides."""
    base = load_options(args.config)
    values = base.to_dict()
    if args.alpha is not None:
        values["alpha"] = args.alpha
    if args.fusion is not None:
        values["fusion"] = args.fusion
    return AgcwdOptions.from_mapping(values)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logger = setup_logger("agcwd", logging.DEBUG if args.verbose else logging.INFO)

    try:
        options = resolve_options(args)
        image_path = os.path.abspath(os.path.expanduser(args.image_path))
        if os.path.isfile(image_path) and not has_png_signature(image_path):
            logger.warning(f"{image_path} does not start with a PNG signature")
        image = load_png(image_path)
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    logger.info(f"Image resolution: {image.width}x{image.height}")
    logger.info(f"Image bit depth: {image.bit_depth}")
    logger.info(f"Image color type: {image.color_type}")

    start = time.perf_counter()
    try:
        Agcwd(options).enhance_image(image.pixels)
    except (TypeError, ValueError) as e:
        logger.error(f"Enhancement failed: {e}")
        return 1
    logger.info(f"Elapsed: {time.perf_counter() - start:.3f}s")

    try:
        output_path = save_png(png_output_path(args.output_path), image)
    except OSError as e:
        logger.error(f"Failed to write {args.output_path}: {e}")
        return 1

    logger.info(f"Output path: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
