"""
Global tunables used across the project.

- Luminance model constants (sRGB transfer, WCAG 2.1 weights)
- Random palette generation bounds (SPREAD_*)
- CLI defaults and output naming
"""
from __future__ import annotations

from typing import Tuple

# ===========================
# Luminance model (sRGB, D65)
# ===========================
LUMA_WEIGHTS: Tuple[float, float, float] = (0.2126, 0.7152, 0.0722)
SRGB_LINEAR_THRESH: float = 0.04045
SRGB_LINEAR_SLOPE: float = 12.92
SRGB_OFFSET: float = 0.055
SRGB_GAMMA: float = 2.4

# ======================
# Milk filter palette
# ======================
# (r, g, b) in 0..1 and the luminance each entry answers to.
MILK_COLOURS: Tuple[Tuple[Tuple[float, float, float], float], ...] = (
    ((0.67, 0.2, 0.2), 0.85),
    ((0.32, 0.15, 0.24), 0.4),
    ((0.05, 0.05, 0.08), 0.33),
)

# ==========================
# Random palette generation
# ==========================
SPREAD_MIN: float = 0.01
SPREAD_MAX: float = 0.99
DEFAULT_SPREAD: float = 0.25
DEFAULT_IMAGES: int = 1
DEFAULT_COLOURS: int = 4

# ======
# CLI
# ======
OUTPUT_PREFIX: str = "milk_"
IMAGE_EXTS: Tuple[str, ...] = (".png", ".jpg", ".jpeg", ".webp", ".bmp")

__all__ = [
    "LUMA_WEIGHTS",
    "SRGB_LINEAR_THRESH",
    "SRGB_LINEAR_SLOPE",
    "SRGB_OFFSET",
    "SRGB_GAMMA",
    "MILK_COLOURS",
    "SPREAD_MIN",
    "SPREAD_MAX",
    "DEFAULT_SPREAD",
    "DEFAULT_IMAGES",
    "DEFAULT_COLOURS",
    "OUTPUT_PREFIX",
    "IMAGE_EXTS",
]
