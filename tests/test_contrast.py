import numpy as np
import pytest

from milk_filter.colour_convert import relative_luminance
from milk_filter.contrast import min_max_normalise, stretch_by_luminance
from milk_filter.core_types import u8_to_float_image
from milk_filter.errors import (
    DegenerateLuminanceRangeError,
    MilkFilterError,
    ZeroLuminancePixelError,
)


def test_black_white_pair_is_unchanged() -> None:
    img = u8_to_float_image(np.array([[[0, 0, 0], [255, 255, 255]]], dtype=np.uint8))
    out = stretch_by_luminance(img)
    np.testing.assert_allclose(out, img, atol=1e-6)


def test_full_range_image_is_unchanged() -> None:
    img = np.array([[[0.0, 0.0, 0.0], [0.5, 0.5, 0.5], [1.0, 1.0, 1.0]]], dtype=np.float32)
    np.testing.assert_allclose(stretch_by_luminance(img), img, atol=1e-5)


def test_grey_image_spans_full_luminance(rng: np.random.Generator) -> None:
    levels = rng.uniform(0.2, 0.8, size=(6, 9)).astype(np.float32)
    img = np.repeat(levels[..., None], 3, axis=2)
    luma = relative_luminance(stretch_by_luminance(img))
    assert float(luma.min()) == pytest.approx(0.0, abs=1e-6)
    assert float(luma.max()) == pytest.approx(1.0, abs=1e-5)


def test_colour_image_minimum_goes_to_zero(rng: np.random.Generator) -> None:
    img = rng.uniform(0.1, 0.9, size=(5, 5, 3)).astype(np.float32)
    out = stretch_by_luminance(img)
    assert float(relative_luminance(out).min()) == pytest.approx(0.0, abs=1e-6)
    assert out.min() >= 0.0 and out.max() <= 1.0


def test_input_is_not_modified(rng: np.random.Generator) -> None:
    img = rng.random((4, 4, 3)).astype(np.float32)
    before = img.copy()
    out = stretch_by_luminance(img)
    assert out is not img
    np.testing.assert_array_equal(img, before)


def test_uniform_image_is_degenerate() -> None:
    img = np.full((3, 3, 3), 0.4, dtype=np.float32)
    with pytest.raises(DegenerateLuminanceRangeError) as info:
        stretch_by_luminance(img)
    assert isinstance(info.value, MilkFilterError)


def test_zero_luminance_pixel_policy() -> None:
    img = np.array([[[0.0, 0.0, 0.0], [0.3, 0.6, 0.2]]], dtype=np.float32)
    kept = stretch_by_luminance(img)
    np.testing.assert_array_equal(kept[0, 0], [0.0, 0.0, 0.0])
    assert np.all(np.isfinite(kept))
    with pytest.raises(ZeroLuminancePixelError) as info:
        stretch_by_luminance(img, zero_luma="raise")
    assert info.value.count == 1


def test_empty_image_rejected() -> None:
    with pytest.raises(ValueError):
        stretch_by_luminance(np.zeros((0, 0, 3), dtype=np.float32))


def test_rejects_integer_images() -> None:
    with pytest.raises(TypeError):
        stretch_by_luminance(np.zeros((2, 2, 3), dtype=np.uint8))


def test_min_max_normalise() -> None:
    out = min_max_normalise(np.array([2.0, 4.0, 3.0], dtype=np.float32))
    np.testing.assert_allclose(out, [0.0, 1.0, 0.5])
    with pytest.raises(DegenerateLuminanceRangeError):
        min_max_normalise(np.array([1.0, 1.0], dtype=np.float32), "palette")
