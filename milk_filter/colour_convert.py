from __future__ import annotations

"""
Luminance model (sRGB, D65).

Exports:
  rgb_to_linear(srgb)
  relative_luminance(rgb)
  mean_brightness(rgb)
  relative_luminance_threaded(image, workers)
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .constants import (
    LUMA_WEIGHTS,
    SRGB_GAMMA,
    SRGB_LINEAR_SLOPE,
    SRGB_LINEAR_THRESH,
    SRGB_OFFSET,
)
from .core_types import LumaMap
from .utils import split_rows_into_parts

ColourLike = Union[Sequence[float], NDArray[np.floating]]


# sRGB to linear


def rgb_to_linear(srgb: ColourLike) -> np.ndarray:
    """
    Convert sRGB (non-linear 0..1) to linear RGB (0..1). Vectorised.
    Args:
      srgb: array[...] in 0..1 (float)
    Returns:
      float32 array, same shape
    """
    srgb_f = np.asarray(srgb, dtype=np.float32)
    with np.errstate(invalid="ignore"):
        linear = np.where(
            srgb_f <= SRGB_LINEAR_THRESH,
            srgb_f / SRGB_LINEAR_SLOPE,
            ((srgb_f + SRGB_OFFSET) / (1.0 + SRGB_OFFSET)) ** SRGB_GAMMA,
        )
    return linear.astype(np.float32, copy=False)


# Luminance


def relative_luminance(rgb: ColourLike) -> np.ndarray:
    """
    WCAG 2.1 relative luminance of gamma-encoded sRGB samples.

    Accepts (..., 3) floats in 0..1 and returns float32 (...). A single colour
    yields a 0-d array; wrap in float() when a Python scalar is wanted.

    Nothing is clamped. Channels outside 0..1 (for example values that are
    already linear, or 0..255 ints) give luminances outside 0..1 and are the
    caller's responsibility.
    """
    arr = np.asarray(rgb, dtype=np.float32)
    if arr.shape[-1:] != (3,):
        raise TypeError(f"expected (..., 3) colour samples, got shape {arr.shape}")
    wr, wg, wb = LUMA_WEIGHTS
    r_lin = rgb_to_linear(arr[..., 0])
    g_lin = rgb_to_linear(arr[..., 1])
    b_lin = rgb_to_linear(arr[..., 2])
    return (wr * r_lin + wg * g_lin + wb * b_lin).astype(np.float32, copy=False)


def mean_brightness(rgb: ColourLike) -> np.ndarray:
    """Plain channel mean. Only random palette generation uses this."""
    arr = np.asarray(rgb, dtype=np.float32)
    return arr.mean(axis=-1).astype(np.float32, copy=False)


# Threaded helpers


def relative_luminance_threaded(image: np.ndarray, workers: int) -> LumaMap:
    """
    Threaded luminance map by splitting rows.

    Args:
      image: float array [H,W,3]
      workers: number of threads; if <=1 or H<256, runs single-threaded
    Returns:
      float32 array [H,W]
    """
    height = int(image.shape[0])
    if workers <= 1 or height < 256:
        return relative_luminance(image)

    chunks = split_rows_into_parts(height, workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(relative_luminance, image[s:e]) for s, e in chunks]
        parts = [f.result() for f in futures]
    return np.vstack(parts).astype(np.float32, copy=False)


__all__ = [
    "rgb_to_linear",
    "relative_luminance",
    "mean_brightness",
    "relative_luminance_threaded",
]
