from __future__ import annotations

"""
Random palette generation.

Each entry draws a midpoint v, then three channels uniformly from
[max(0, v - spread), min(1, v + spread)]. Entry luminance starts as the plain
channel mean (not relative luminance) and is then min-max normalised across
the palette so the lumas span [0, 1].
"""

import math
from typing import Optional

import numpy as np

from .colour_convert import mean_brightness
from .constants import SPREAD_MAX, SPREAD_MIN
from .contrast import min_max_normalise
from .core_types import Palette, PaletteEntry, clamp_value
from .errors import DegenerateLuminanceRangeError, InvalidRangeError
from .utils import debug_log


def coerce_spread(value: float) -> float:
    """
    Clamp a user-supplied spread into [SPREAD_MIN, SPREAD_MAX].

    This is the parameter-boundary policy; generate_palette itself never clamps.
    NaN cannot be clamped and raises InvalidRangeError.
    """
    v = float(value)
    if math.isnan(v):
        raise InvalidRangeError(v)
    return clamp_value(v, SPREAD_MIN, SPREAD_MAX)


def generate_palette(
    count: int,
    spread: float,
    rng: Optional[np.random.Generator] = None,
    *,
    debug: bool = False,
) -> Palette:
    """
    Build `count` random colours with luminances stretched to [0, 1].

    Args:
      count  : number of entries, >= 1
      spread : half-width of the channel window around each midpoint, in (0, 1)
      rng    : numpy Generator; a fresh default_rng() when omitted
      debug  : log the degenerate-normalisation fallback

    Raises:
      ValueError when count < 1, InvalidRangeError when spread is outside (0, 1).

    When every raw luminance is equal (always the case for count == 1) the
    normalisation step is skipped and the raw channel means are kept.
    """
    if int(count) < 1:
        raise ValueError(f"count must be >= 1, got {count!r}")
    spread_f = float(spread)
    if not (0.0 < spread_f < 1.0):
        raise InvalidRangeError(spread_f)
    gen = rng if rng is not None else np.random.default_rng()

    colours = np.empty((int(count), 3), dtype=np.float64)
    for i in range(int(count)):
        v = float(gen.random())
        lo = max(0.0, v - spread_f)
        hi = min(1.0, v + spread_f)
        colours[i] = gen.uniform(lo, hi, size=3)

    raw_luma = mean_brightness(colours)
    try:
        luma = min_max_normalise(raw_luma, "palette")
    except DegenerateLuminanceRangeError as exc:
        if debug:
            debug_log(f"palette luma normalisation skipped: {exc}")
        luma = raw_luma

    return Palette(
        PaletteEntry(
            rgb=(float(c[0]), float(c[1]), float(c[2])),
            luma=float(lm),
        )
        for c, lm in zip(colours, luma.tolist())
    )


__all__ = ["coerce_spread", "generate_palette"]
