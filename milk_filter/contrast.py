from __future__ import annotations

"""
Global contrast stretch driven by relative luminance.

The whole pixel is scaled by stretched_luma / luma. Because the channels are
gamma-encoded while luma is linear, this only approximately keeps hue and
saturation, and saturated highlights can clip before reaching luma 1.
"""

from typing import Literal, Tuple

import numpy as np

from .colour_convert import relative_luminance_threaded
from .core_types import FloatImage, LumaMap, assert_float_image
from .errors import DegenerateLuminanceRangeError, ZeroLuminancePixelError

ZeroLumaPolicy = Literal["keep", "raise"]


def luminance_range(luma: LumaMap) -> Tuple[float, float]:
    """(min, max) of a luminance map. Raises on empty input."""
    if luma.size == 0:
        raise ValueError("cannot stretch an empty image")
    return float(np.min(luma)), float(np.max(luma))


def min_max_normalise(values: np.ndarray, what: str = "image") -> np.ndarray:
    """
    Rescale values so they span [0, 1].

    Raises DegenerateLuminanceRangeError when every value is the same.
    """
    lo, hi = luminance_range(values)
    if hi == lo:
        raise DegenerateLuminanceRangeError(lo, what)
    return ((values - lo) / (hi - lo)).astype(np.float32, copy=False)


def stretch_by_luminance(
    image: FloatImage,
    *,
    zero_luma: ZeroLumaPolicy = "keep",
    workers: int = 1,
) -> FloatImage:
    """
    Stretch an image so its luminance spans [0, 1].

    Args:
      image     : float [H,W,3] sRGB in 0..1. Not modified.
      zero_luma : "keep" passes pixels with luminance exactly 0 through
                  unchanged; "raise" raises ZeroLuminancePixelError instead.
      workers   : threads for the luminance pass.

    Returns:
      New float32 [H,W,3] image with channels clamped to 0..1.

    Raises:
      DegenerateLuminanceRangeError when the image has a single luminance.
    """
    src = assert_float_image(image).astype(np.float32, copy=False)
    luma = relative_luminance_threaded(src, workers)
    stretched = min_max_normalise(luma, "image")

    zero_mask = luma == 0.0
    n_zero = int(np.count_nonzero(zero_mask))
    if n_zero and zero_luma == "raise":
        raise ZeroLuminancePixelError(n_zero)

    safe_luma = np.where(zero_mask, 1.0, luma)
    scale = np.where(zero_mask, 1.0, stretched / safe_luma).astype(np.float32)

    out = np.clip(src * scale[..., None], 0.0, 1.0).astype(np.float32, copy=False)
    if n_zero:
        out[zero_mask] = src[zero_mask]
    return out


__all__ = [
    "ZeroLumaPolicy",
    "luminance_range",
    "min_max_normalise",
    "stretch_by_luminance",
]
