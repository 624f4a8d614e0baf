"""
milk_filter command line.

Posterize images by luminance: every pixel takes the colour of the palette
entry nearest to it in relative luminance.

Usage:
  python -m milk_filter INPUT [--outdir DIR] --filter [milk|random]
      [--images N] [--colours N] [--spread R] [--seed S] [--palette HEX ...]
      [--no-stretch] [--max-size PX] [--blur SIGMA] [--workers N] [--show] [--debug]

Filters:
  milk   : fixed three-colour palette (or --palette colours).
  random : N freshly generated palettes, one output image each.

Output:
  PNG files named milk_<stem><index>.png next to INPUT or inside --outdir.
"""

from __future__ import annotations

import argparse
import os
import time
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from .constants import (
    DEFAULT_COLOURS,
    DEFAULT_IMAGES,
    DEFAULT_SPREAD,
    IMAGE_EXTS,
    OUTPUT_PREFIX,
)
from .core_types import FloatImage
from .errors import MilkFilterError
from .filters import (
    FilterResult,
    apply_palette_filter,
    apply_random_filters,
    prepare_source,
)
from .generate import coerce_spread
from .image_io import (
    gaussian_blur,
    is_image_file,
    load_image_rgb,
    output_path_for,
    resize_max_dimension,
    save_image_rgb,
    show_image,
)
from .palette_data import MILK_PALETTE, palette_from_hex
from .utils import (
    colour_usage_report,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    make_progress_printer,
    palette_report,
    print_banner,
    print_config_line,
    warn,
)

# CLI args & small helpers


def _default_workers() -> int:
    """Leave a few cores free for the system; returns a sensible worker count."""
    n = os.cpu_count() or 4
    reserve = 1 if n <= 6 else 2 if n <= 12 else 3 if n <= 18 else 4
    return max(1, n - reserve)


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        outdir: optional Path for outputs
        filter: "milk" | "random"
        images, colours, spread, seed: random filter parameters
        palette: optional hex colours replacing the milk palette
        no_stretch, max_size, blur: pre-processing switches
        workers: threads for the per-pixel passes
        show: open outputs in the system viewer
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="milk_filter",
        description="Posterize image(s) by matching pixel luminance to a small palette.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--filter",
        choices=["milk", "random"],
        default="milk",
        help="Fixed milk palette, or freshly generated random palettes.",
    )
    parser.add_argument(
        "--images",
        type=int,
        default=DEFAULT_IMAGES,
        help="Random filter: how many images to generate.",
    )
    parser.add_argument(
        "--colours",
        type=int,
        default=DEFAULT_COLOURS,
        help="Random filter: colours per palette.",
    )
    parser.add_argument(
        "--spread",
        type=float,
        default=DEFAULT_SPREAD,
        help="Random filter: how close colours sit to each other [0.01 - 0.99].",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random filter: RNG seed."
    )
    parser.add_argument(
        "--palette",
        nargs="+",
        default=None,
        metavar="HEX",
        help="Milk filter: replace the palette with these colours.",
    )
    parser.add_argument(
        "--no-stretch",
        action="store_true",
        help="Skip the luminance contrast stretch.",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=None,
        help="Resize so the longer side is <= PX. Omit for no resize.",
    )
    parser.add_argument(
        "--blur", type=float, default=None, help="Gaussian blur radius before mapping."
    )
    parser.add_argument(
        "--workers", type=int, default=_default_workers(), help="Internal workers"
    )
    parser.add_argument(
        "--show", action="store_true", help="Open results in the image viewer"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


def _check_counts(args: argparse.Namespace) -> None:
    """Validate positive integer parameters before any work starts."""
    for name in ("images", "colours"):
        value = getattr(args, name)
        if value < 1:
            raise MilkFilterError(f"--{name} must be >= 1, got {value}")


# Per-file processing


def _run_filter(
    image: FloatImage, args: argparse.Namespace, rng: np.random.Generator
) -> List[FilterResult]:
    """Dispatch to the selected filter and return every output."""
    pixel_progress = make_progress_printer("pixels", enabled=not args.debug)
    if args.filter == "milk":
        palette = palette_from_hex(args.palette) if args.palette else MILK_PALETTE
        mapped = apply_palette_filter(
            image, palette, workers=args.workers, progress=pixel_progress
        )
        return [FilterResult(image=mapped, palette=palette)]

    spread = coerce_spread(args.spread)
    if spread != args.spread:
        warn(f"spread {args.spread} clamped to {spread}")
    print_config_line(
        "random",
        [
            ("Images", args.images),
            ("Colours", args.colours),
            ("Spread", spread),
            ("Seed", args.seed if args.seed is not None else "-"),
        ],
        debug=args.debug,
    )
    return apply_random_filters(
        image,
        args.images,
        args.colours,
        spread,
        rng=rng,
        on_image=make_progress_printer("images"),
        debug=args.debug,
        workers=args.workers,
    )


def _process_single_image(
    src_path: Path, args: argparse.Namespace, rng: np.random.Generator
) -> List[Path]:
    """
    Process a single image path end-to-end:
      load -> optional resize/blur -> stretch -> filter -> save -> report.
    """
    t_start = time.perf_counter()
    print_banner(src_path.name)

    image = load_image_rgb(src_path)
    height0, width0 = int(image.shape[0]), int(image.shape[1])
    if args.debug:
        debug_log(key_value_pairs_to_string([("Loaded", f"{width0}x{height0}")]))

    image = resize_max_dimension(image, args.max_size)
    image = gaussian_blur(image, args.blur)
    height, width = int(image.shape[0]), int(image.shape[1])
    if args.debug and (width, height) != (width0, height0):
        debug_log(key_value_pairs_to_string([("Resized", f"{width}x{height}")]))

    image = prepare_source(
        image, stretch=not args.no_stretch, workers=args.workers, debug=args.debug
    )
    t_prep = time.perf_counter()

    results = _run_filter(image, args, rng)
    t_map = time.perf_counter()

    written: List[Path] = []
    for i, result in enumerate(results):
        out_path = save_image_rgb(output_path_for(src_path, args.outdir, i), result.image)
        written.append(out_path)
        log(f"Wrote {out_path.name} | size={width}x{height} | palette_size={len(result.palette)}")
        if args.debug:
            for hex_code, luma in palette_report(result.palette):
                debug_log(f"  palette {hex_code}  luma={luma:.3f}")
            for hex_code, count in colour_usage_report(result.image):
                debug_log(f"  used {hex_code}: {count:,}")
        if args.show:
            show_image(out_path)
    t_save = time.perf_counter()

    if args.debug:
        debug_log(
            f"Total {format_total_duration_compact(t_save - t_start)}  "
            f"(prep={format_seconds_compact(t_prep - t_start)}, "
            f"map={format_seconds_compact(t_map - t_prep)}, "
            f"save={format_seconds_compact(t_save - t_map)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(t_save - t_start)}")
    return written


def _collect_inputs(src: Path) -> List[Path]:
    """A single file, or the images directly inside a folder (outputs skipped)."""
    if not src.is_dir():
        return [src]
    files = [
        p
        for p in src.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTS
        and not p.stem.startswith(OUTPUT_PREFIX)
        and is_image_file(p)
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point. Returns a process exit code.

    Handles a single file or every image in a folder.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    print_config_line(
        "run",
        [("Filter", args.filter), ("Workers", args.workers), ("Stretch", not args.no_stretch)],
        debug=False,
    )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2
    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)

    try:
        _check_counts(args)
        rng = np.random.default_rng(args.seed)
        files = _collect_inputs(src)
        if args.debug:
            debug_log(key_value_pairs_to_string([("Images", len(files))]))
        for path in files:
            _process_single_image(path, args, rng)
    except ValueError as exc:
        error(str(exc))
        return 2
    return 0


__all__ = ["parse_cli_args", "main"]
