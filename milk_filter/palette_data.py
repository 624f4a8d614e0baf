from __future__ import annotations

"""
Palette definitions and builders.

Exports:
  MILK_PALETTE: Palette   # the fixed three-colour "milk" look
  build_palette(colour_luma_pairs) -> Palette
  palette_from_colours(colours) -> Palette
  palette_from_hex(hex_list) -> Palette
"""

from typing import Iterable, Sequence, Tuple

import numpy as np

from .colour_convert import relative_luminance
from .constants import MILK_COLOURS
from .core_types import (
    Palette,
    PaletteEntry,
    UnitRGB,
    hex_to_rgb,
    rgb_tuple_to_unit,
)


def build_palette(colour_luma_pairs: Iterable[Tuple[Sequence[float], float]]) -> Palette:
    """
    Convert (rgb, luma) pairs into a Palette.

    rgb channels must lie in 0..1; luma is stored as given.
    """
    entries = []
    for rgb, luma in colour_luma_pairs:
        if len(rgb) != 3:
            raise ValueError(f"palette colour needs 3 channels, got {rgb!r}")
        unit: UnitRGB = (float(rgb[0]), float(rgb[1]), float(rgb[2]))
        if not all(0.0 <= c <= 1.0 for c in unit):
            raise ValueError(f"palette channels must lie in 0..1, got {unit!r}")
        entries.append(PaletteEntry(rgb=unit, luma=float(luma)))
    return Palette(entries)


def palette_from_colours(colours: Sequence[Sequence[float]]) -> Palette:
    """Palette whose lumas are each colour's own relative luminance."""
    if len(colours) == 0:
        return Palette()
    lumas = relative_luminance(np.asarray(colours, dtype=np.float32).reshape(-1, 3))
    return build_palette(zip(colours, lumas.tolist()))


def palette_from_hex(hex_list: Sequence[str]) -> Palette:
    """Hex strings ('#rrggbb', '#rgb' or 'rrggbb') to a relative-luminance Palette."""
    return palette_from_colours([rgb_tuple_to_unit(hex_to_rgb(hx)) for hx in hex_list])


MILK_PALETTE: Palette = build_palette(MILK_COLOURS)


__all__ = [
    "MILK_PALETTE",
    "build_palette",
    "palette_from_colours",
    "palette_from_hex",
]
