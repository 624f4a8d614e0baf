from __future__ import annotations

import io
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, ImageFilter, ImageOps, UnidentifiedImageError

from .constants import OUTPUT_PREFIX
from .core_types import FloatImage, float_to_u8_image, u8_to_float_image

"""
Image I/O helpers (RGB in sRGB), output naming, and pre-filter utilities.

The luminance core only ever sees float32 (H,W,3) arrays in 0..1; everything
here converts to and from Pillow at the edges.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]


def _convert_to_srgb_rgb(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGB",
            )
            if im2 is None:
                return im.convert("RGB")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGB")

    return im.convert("RGB")


def load_image_rgb(path: Path) -> FloatImage:
    """Load an image with Pillow, drop alpha, return float32 [H,W,3] in 0..1."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgb(im0)
    arr = np.array(im, dtype=np.uint8)
    return u8_to_float_image(arr)


def to_pil(image: FloatImage) -> Image.Image:
    """float [H,W,3] 0..1 -> Pillow RGB image."""
    return Image.fromarray(float_to_u8_image(image))


def from_pil(im: Image.Image) -> FloatImage:
    """Pillow image -> float32 [H,W,3] 0..1."""
    return u8_to_float_image(np.array(im.convert("RGB"), dtype=np.uint8))


def save_image_rgb(path: Path, image: FloatImage) -> Path:
    """Write an image as PNG. A non-.png suffix is replaced."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    to_pil(image).save(path)
    return path


def output_path_for(
    src_path: Path, outdir: Optional[Path] = None, index: Union[int, str] = 0
) -> Path:
    """
    Output location for the index-th result of src_path:
      <outdir or src dir>/milk_<stem><index>.png
    """
    folder = outdir if outdir is not None else src_path.parent
    return folder / f"{OUTPUT_PREFIX}{src_path.stem}{index}.png"


def show_image(path: Path) -> None:
    """Open a saved image in the platform viewer."""
    with Image.open(path) as im:
        im.show(title=path.name)


def resize_max_dimension(image: FloatImage, max_dimension: Optional[int]) -> FloatImage:
    """
    Lanczos resize so the longer side equals max_dimension, aspect preserved.
    Images already within the cap are returned as-is.
    """
    height, width = int(image.shape[0]), int(image.shape[1])
    if max_dimension is None or max_dimension <= 0 or max(width, height) <= max_dimension:
        return image
    if width > height:
        new_w = int(max_dimension)
        new_h = max(1, int(round(height * max_dimension / float(width))))
    else:
        new_h = int(max_dimension)
        new_w = max(1, int(round(width * max_dimension / float(height))))
    im2 = to_pil(image).resize((new_w, new_h), resample=Image.Resampling.LANCZOS)
    return from_pil(im2)


def gaussian_blur(image: FloatImage, sigma: Optional[float]) -> FloatImage:
    """Gaussian blur with the given radius; sigma <= 0 or None is a no-op."""
    if sigma is None or sigma <= 0:
        return image
    return from_pil(to_pil(image).filter(ImageFilter.GaussianBlur(radius=float(sigma))))


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "load_image_rgb",
    "to_pil",
    "from_pil",
    "save_image_rgb",
    "output_path_for",
    "show_image",
    "resize_max_dimension",
    "gaussian_blur",
    "is_image_file",
]
