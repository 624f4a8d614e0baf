from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

UnitRGB = Tuple[float, float, float]  # sRGB channels in 0..1
RGBTuple = Tuple[int, int, int]
HexStr = str

FloatImage = NDArray[np.float32]  # (H, W, 3) sRGB in 0..1
U8Image = NDArray[np.uint8]  # (H, W, 3)
LumaMap = NDArray[np.float32]  # (H, W) relative luminance

# (done, total) notifications; purely observational
ProgressFn = Callable[[int, int], None]

# Value objects


@dataclass(frozen=True)
class PaletteEntry:
    """Palette colour with the luminance it was assigned at construction."""

    rgb: UnitRGB
    luma: float


class Palette(tuple):
    """
    Ordered, immutable sequence of PaletteEntry.

    Order only matters for tie-breaking: the first entry wins.
    """

    def __new__(cls, entries: Iterable[PaletteEntry] = ()) -> "Palette":
        return super().__new__(cls, tuple(entries))

    def rgb_matrix(self) -> NDArray[np.float32]:
        """(P,3) float32 colour rows."""
        return np.array([e.rgb for e in self], dtype=np.float32).reshape(-1, 3)

    def luma_vector(self) -> NDArray[np.float32]:
        """(P,) float32 stored luminances."""
        return np.array([e.luma for e in self], dtype=np.float32)

    def __repr__(self) -> str:
        body = ", ".join(
            f"{rgb_to_hex(unit_to_rgb_tuple(e.rgb))}@{e.luma:.3f}" for e in self
        )
        return f"Palette([{body}])"


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive, '#' optional) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        s = f"#{s}"
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError(f"hex must be '#rrggbb' or '#rgb', got {hex_str!r}")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def unit_to_rgb_tuple(rgb: Sequence[float]) -> RGBTuple:
    """0..1 channels to 0..255 ints, truncating like the 8-bit image writer."""
    return tuple(int(clamp_value(float(c), 0.0, 1.0) * 255.0) for c in rgb[:3])  # type: ignore[return-value]


def rgb_tuple_to_unit(rgb: RGBTuple) -> UnitRGB:
    """0..255 ints to 0..1 floats."""
    return (rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0)


def assert_float_image(image: np.ndarray) -> FloatImage:
    """Validate a float (H,W,3) image and return it typed as FloatImage."""
    if (
        not isinstance(image, np.ndarray)
        or not np.issubdtype(image.dtype, np.floating)
        or image.ndim != 3
        or image.shape[-1] != 3
    ):
        raise TypeError("expected float (H,W,3) image")
    return image  # type: ignore[return-value]


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 3:
        raise TypeError("expected uint8 (H,W,3) image")
    return image  # type: ignore[return-value]


def u8_to_float_image(image: Union[U8Image, np.ndarray]) -> FloatImage:
    """uint8 0..255 -> float32 0..1."""
    return (assert_u8_image_rgb(image).astype(np.float32) / 255.0).astype(
        np.float32, copy=False
    )


def float_to_u8_image(image: FloatImage) -> U8Image:
    """float 0..1 -> uint8 0..255. Clips, then truncates."""
    arr = np.clip(assert_float_image(image), 0.0, 1.0)
    return (arr * 255.0).astype(np.uint8)


__all__ = [
    # aliases / types
    "UnitRGB",
    "RGBTuple",
    "HexStr",
    "FloatImage",
    "U8Image",
    "LumaMap",
    "ProgressFn",
    # value objects
    "PaletteEntry",
    "Palette",
    # helpers
    "clamp_value",
    "rgb_to_hex",
    "hex_to_rgb",
    "unit_to_rgb_tuple",
    "rgb_tuple_to_unit",
    "assert_float_image",
    "assert_u8_image_rgb",
    "u8_to_float_image",
    "float_to_u8_image",
]
