from __future__ import annotations

"""
Nearest-luminance quantizer.

Every pixel is recoloured with the palette entry whose stored luminance is
closest to the pixel's relative luminance. Pixels are independent, so rows
can be split across threads without changing the result.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np

from .colour_convert import relative_luminance
from .core_types import FloatImage, Palette, ProgressFn, assert_float_image
from .errors import EmptyPaletteError
from .utils import split_rows_into_parts


def nearest_luminance_indices(luma: np.ndarray, palette_luma: np.ndarray) -> np.ndarray:
    """
    Index of the nearest palette luminance for every value in `luma`.

    np.argmin returns the first minimum, so exact ties go to the lowest index.
    """
    pal = np.asarray(palette_luma, dtype=np.float32).reshape(-1)
    if pal.size == 0:
        raise EmptyPaletteError("palette has no entries")
    lum = np.asarray(luma, dtype=np.float32)
    dist = np.abs(lum[..., None] - pal)
    return np.argmin(dist, axis=-1).astype(np.int32)


def _quantize_rows(
    rows: FloatImage, pal_rgb: np.ndarray, pal_luma: np.ndarray
) -> FloatImage:
    idx = nearest_luminance_indices(relative_luminance(rows), pal_luma)
    return pal_rgb[idx]


def quantize(
    image: FloatImage,
    palette: Palette,
    *,
    workers: int = 1,
    parts: Optional[int] = None,
    progress: Optional[ProgressFn] = None,
) -> FloatImage:
    """
    Recolour every pixel with its nearest-luminance palette colour.

    Args:
      image    : float [H,W,3] sRGB in 0..1. Not modified.
      palette  : non-empty Palette
      workers  : threads; 1 runs inline
      parts    : row spans to split into (defaults to workers, or 1 inline)
      progress : called as progress(rows_done, rows_total) after each span

    Returns:
      New float32 [H,W,3] image containing only palette colours.

    Raises:
      EmptyPaletteError when the palette has no entries.
    """
    src = assert_float_image(image)
    pal = palette if isinstance(palette, Palette) else Palette(palette)
    if len(pal) == 0:
        raise EmptyPaletteError("palette has no entries")

    pal_rgb = pal.rgb_matrix()
    pal_luma = pal.luma_vector()
    height = int(src.shape[0])
    out = np.empty(src.shape, dtype=np.float32)
    if height == 0:
        return out

    n_parts = parts if parts is not None else max(1, int(workers))
    spans: List[Tuple[int, int]] = split_rows_into_parts(height, n_parts)

    if workers <= 1 or len(spans) == 1:
        for s, e in spans:
            out[s:e] = _quantize_rows(src[s:e], pal_rgb, pal_luma)
            if progress is not None:
                progress(e, height)
        return out

    done = 0
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            (s, e, pool.submit(_quantize_rows, src[s:e], pal_rgb, pal_luma))
            for s, e in spans
        ]
        for s, e, fut in futures:
            out[s:e] = fut.result()
            done += e - s
            if progress is not None:
                progress(done, height)
    return out


__all__ = ["nearest_luminance_indices", "quantize"]
