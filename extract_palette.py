#!/usr/bin/env python3
"""
extract_palette.py
Print the dominant colours of an image, or of every image in a folder.

Usage:
  python extract_palette.py SRC -k 5 --format [hex|rgb|hsl|oklch] [--distance 10 | --coarse]
                            --max-size 512 --seed N --json --jobs J --debug

Input:
  Any Pillow-readable image, or a folder of them. Pixels with alpha < 16 are ignored.

Output:
  One colour per line under a banner per file, or one JSON object per file with --json.

Notes:
  Quantization lives in palette_extract.quantize; decoding in palette_extract.image_io.
  Folder mode processes files with a ThreadPoolExecutor and prints in name order.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import List, Optional, Sequence

from palette_extract.constants import (
    DEFAULT_DISTANCE_THRESHOLD,
    DEFAULT_FORMAT,
    FORMAT_DISTANCE_THRESHOLD,
    IMAGE_EXTENSIONS,
    MAX_DECODE_SIZE,
    SUPPORTED_FORMATS,
)
from palette_extract.core_types import FormattedPalette
from palette_extract.extract import extract_colours
from palette_extract.image_io import load_pixel_data
from palette_extract.utils import (
    format_total_duration_compact,
    print_banner,
    log,
    debug_log,
    warn,
    error,
    print_config_line,
    enable_line_buffered_stdout,
)

# CLI args


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for palette extraction.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        colours: max palette size (k)
        format: "hex" | "rgb" | "hsl" | "oklch"
        distance: similarity threshold (--coarse picks the wider default)
        max_size: decode cap for the longest side (0 disables)
        seed: optional int for reproducible sampling
        json: emit JSON instead of text
        jobs: parallel file workers
        debug: bool for verbose pipeline details
    """
    parser = argparse.ArgumentParser(
        prog="extract_palette",
        description="Extract the dominant colours of image(s).",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "-k", "--colours", type=int, default=5, help="Maximum number of colours"
    )
    parser.add_argument(
        "--format",
        choices=list(SUPPORTED_FORMATS),
        default=DEFAULT_FORMAT,
        help="Output colour format.",
    )
    spread = parser.add_mutually_exclusive_group()
    spread.add_argument(
        "--distance",
        type=float,
        default=None,
        help=f"Drop colours closer than this RGB distance to a kept one (default {DEFAULT_DISTANCE_THRESHOLD:g}).",
    )
    spread.add_argument(
        "--coarse",
        action="store_true",
        help=f"Merge near colours more aggressively (distance {FORMAT_DISTANCE_THRESHOLD:g}).",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=MAX_DECODE_SIZE,
        help="Downscale so the longest side <= N before sampling. 0 keeps full size.",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for reproducible sampling"
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON per file")
    parser.add_argument(
        "--jobs", type=int, default=2, help="Files processed in parallel"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose pipeline details")
    args = parser.parse_args(argv)
    if args.distance is None:
        args.distance = (
            FORMAT_DISTANCE_THRESHOLD if args.coarse else DEFAULT_DISTANCE_THRESHOLD
        )
    return args


def collect_images(folder: Path) -> List[Path]:
    """Image files directly inside folder, sorted case-insensitively by name."""
    files = [
        p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Per-file processing


@dataclass
class FileResult:
    """Outcome of one file: formatted colours, or the error that stopped it."""

    path: Path
    colours: Optional[FormattedPalette]
    failure: Optional[str]
    seconds: float


def _extract_one(src_path: Path, args: argparse.Namespace) -> FileResult:
    """Decode -> quantize -> format for one file. Safe to run in a worker thread."""
    t_start = time.perf_counter()
    source = partial(load_pixel_data, max_size=args.max_size)
    try:
        colours = extract_colours(
            src_path,
            args.colours,
            args.format,
            args.distance,
            pixel_source=source,
            rng=args.seed,
            debug=args.debug,
        )
    except (OSError, ValueError) as e:
        return FileResult(src_path, None, str(e), time.perf_counter() - t_start)
    return FileResult(src_path, colours, None, time.perf_counter() - t_start)


def _report(result: FileResult, args: argparse.Namespace) -> bool:
    """Print one file's outcome. Returns False when the file failed."""
    if not args.json:
        print_banner(result.path.name)
    if result.failure is not None:
        error(f"{result.path.name}: {result.failure}")
        return False

    if args.json:
        log(
            json.dumps(
                {
                    "file": str(result.path),
                    "format": args.format,
                    "colours": result.colours,
                }
            )
        )
        return True

    if not result.colours:
        warn("no visible pixels")
    for colour in result.colours or []:
        log(f"  {colour}")
    if args.debug:
        debug_log(f"Total {format_total_duration_compact(result.seconds)}")
    else:
        log(f"Total time {format_total_duration_compact(result.seconds)}")
    return True


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering. Returns the process exit code.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    src = args.src
    if not src.exists():
        print(f"error: not found: {src}", file=sys.stderr, flush=True)
        return 2

    if not args.json:
        print_config_line(
            "run",
            [
                ("Colours", args.colours),
                ("Format", args.format),
                ("Distance", args.distance),
                ("Max size", args.max_size),
                ("Jobs", args.jobs),
            ],
            debug=args.debug,
        )

    if not src.is_dir():
        return 0 if _report(_extract_one(src, args), args) else 1

    files = collect_images(src)
    if args.debug:
        debug_log(f"Images: {len(files)}")

    if args.jobs <= 1:
        outcomes = [_report(_extract_one(p, args), args) for p in files]
    else:
        # Workers only compute; printing stays on this thread in name order.
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            results = list(ex.map(partial(_extract_one, args=args), files))
        outcomes = [_report(r, args) for r in results]

    return 0 if all(outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
