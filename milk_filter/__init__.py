"""
milk_filter package.

Purpose:
  Posterize images by luminance. See milk_filter.cli for the command line.

Public API:
  relative_luminance  : WCAG 2.1 luminance of sRGB samples.
  stretch_by_luminance: global contrast stretch on the luminance channel.
  generate_palette    : random palettes with normalised luminances.
  quantize            : nearest-luminance recolouring against a palette.
  apply_milk_filter   : quantize against MILK_PALETTE.
  apply_random_filters: one output per freshly generated palette.
  core_types          : shared aliases and value objects (Palette, PaletteEntry).
  errors              : typed failures (EmptyPaletteError, ...).
  image_io            : Pillow load/save at the edges.
  utils               : shared helpers (formatting, progress, logging).

Quick start:
  from milk_filter import apply_milk_filter, prepare_source
  from milk_filter.image_io import load_image_rgb, save_image_rgb
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import core_types
from . import errors
from . import colour_convert
from . import palette_data
from . import utils

from .colour_convert import relative_luminance  # noqa: E402,F401
from .contrast import stretch_by_luminance  # noqa: E402,F401
from .core_types import Palette, PaletteEntry  # noqa: E402,F401
from .errors import (  # noqa: E402,F401
    DegenerateLuminanceRangeError,
    EmptyPaletteError,
    InvalidRangeError,
    MilkFilterError,
    ZeroLuminancePixelError,
)
from .filters import (  # noqa: E402,F401
    FilterResult,
    apply_milk_filter,
    apply_palette_filter,
    apply_random_filters,
    prepare_source,
)
from .generate import coerce_spread, generate_palette  # noqa: E402,F401
from .palette_data import MILK_PALETTE, build_palette  # noqa: E402,F401
from .quantize import quantize  # noqa: E402,F401

__all__ = [
    "__version__",
    "core_types",
    "errors",
    "colour_convert",
    "palette_data",
    "utils",
    "relative_luminance",
    "stretch_by_luminance",
    "Palette",
    "PaletteEntry",
    "MilkFilterError",
    "EmptyPaletteError",
    "DegenerateLuminanceRangeError",
    "ZeroLuminancePixelError",
    "InvalidRangeError",
    "FilterResult",
    "apply_milk_filter",
    "apply_palette_filter",
    "apply_random_filters",
    "prepare_source",
    "coerce_spread",
    "generate_palette",
    "MILK_PALETTE",
    "build_palette",
    "quantize",
]
