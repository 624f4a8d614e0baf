from __future__ import annotations

"""
Filter orchestration: one source image plus palettes in, recoloured images out.

Exports:
- FilterKind, FilterResult
- prepare_source(image, *, stretch=True, workers=1, debug=False) -> FloatImage
- apply_palette_filter(image, palette, **quantize_kwargs) -> FloatImage
- apply_milk_filter(image, **quantize_kwargs) -> FloatImage
- apply_random_filters(image, images, colours, spread, *, rng=None, ...) -> list[FilterResult]

Notes:
- The contrast stretch runs once on the source, never per palette.
- No file I/O happens here.
"""

from dataclasses import dataclass
from typing import Any, List, Literal, Optional

import numpy as np

from .contrast import stretch_by_luminance
from .core_types import FloatImage, Palette, ProgressFn
from .errors import DegenerateLuminanceRangeError
from .generate import generate_palette
from .palette_data import MILK_PALETTE
from .quantize import quantize
from .utils import debug_log, warn

FilterKind = Literal["milk", "random"]


@dataclass(frozen=True)
class FilterResult:
    """A recoloured image and the palette that produced it."""

    image: FloatImage
    palette: Palette


def prepare_source(
    image: FloatImage,
    *,
    stretch: bool = True,
    workers: int = 1,
    debug: bool = False,
) -> FloatImage:
    """
    Contrast-stretch the source once, up front.

    A uniform image cannot be stretched; it is returned unchanged with a
    warning instead of failing the run.
    """
    if not stretch:
        return image
    try:
        stretched = stretch_by_luminance(image, workers=workers)
    except DegenerateLuminanceRangeError as exc:
        warn(f"contrast stretch skipped: {exc}")
        return image
    if debug:
        debug_log(f"stretch done  size={image.shape[1]}x{image.shape[0]}")
    return stretched


def apply_palette_filter(image: FloatImage, palette: Palette, **kwargs: Any) -> FloatImage:
    """Quantize against any palette. kwargs go to quantize()."""
    return quantize(image, palette, **kwargs)


def apply_milk_filter(image: FloatImage, **kwargs: Any) -> FloatImage:
    """Quantize against the fixed three-colour milk palette."""
    return quantize(image, MILK_PALETTE, **kwargs)


def apply_random_filters(
    image: FloatImage,
    images: int,
    colours: int,
    spread: float,
    *,
    rng: Optional[np.random.Generator] = None,
    on_image: Optional[ProgressFn] = None,
    debug: bool = False,
    **kwargs: Any,
) -> List[FilterResult]:
    """
    Generate `images` independent random palettes and quantize once per palette.

    Args:
      image    : prepared source (see prepare_source)
      images   : number of outputs, >= 1
      colours  : entries per generated palette
      spread   : generation spread in (0, 1); coerce user input first
      rng      : shared Generator so a seed reproduces the whole batch
      on_image : progress(done, total) after each output
      kwargs   : forwarded to quantize() (workers, parts, progress)
    """
    if int(images) < 1:
        raise ValueError(f"images must be >= 1, got {images!r}")
    gen = rng if rng is not None else np.random.default_rng()
    total = int(images)
    results: List[FilterResult] = []
    for i in range(total):
        palette = generate_palette(colours, spread, gen, debug=debug)
        if debug:
            debug_log(f"palette {i}: {palette!r}")
        results.append(FilterResult(image=quantize(image, palette, **kwargs), palette=palette))
        if on_image is not None:
            on_image(i + 1, total)
    return results


__all__ = [
    "FilterKind",
    "FilterResult",
    "prepare_source",
    "apply_palette_filter",
    "apply_milk_filter",
    "apply_random_filters",
]
