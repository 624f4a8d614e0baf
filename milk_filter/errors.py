from __future__ import annotations

"""
Typed failures raised by the luminance core.

All derive from MilkFilterError (a ValueError) so callers can recover per
image or per palette with a single except clause.
"""


class MilkFilterError(ValueError):
    """Base class for luminance core failures."""


class EmptyPaletteError(MilkFilterError):
    """Quantization attempted against a palette with no entries."""


class DegenerateLuminanceRangeError(MilkFilterError):
    """Min-max normalisation found max == min (division by zero)."""

    def __init__(self, luma: float, what: str = "image") -> None:
        super().__init__(f"{what} has a single luminance value ({luma:.6f})")
        self.luma = luma


class ZeroLuminancePixelError(MilkFilterError):
    """A pixel with luminance exactly 0 met the stretch scale computation."""

    def __init__(self, count: int) -> None:
        super().__init__(f"{count} pixel(s) have zero luminance")
        self.count = count


class InvalidRangeError(MilkFilterError):
    """Generation spread outside the open interval (0, 1)."""

    def __init__(self, spread: float) -> None:
        super().__init__(f"spread must lie strictly inside (0, 1), got {spread!r}")
        self.spread = spread


__all__ = [
    "MilkFilterError",
    "EmptyPaletteError",
    "DegenerateLuminanceRangeError",
    "ZeroLuminancePixelError",
    "InvalidRangeError",
]
