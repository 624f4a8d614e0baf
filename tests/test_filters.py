import numpy as np
import pytest

from milk_filter.filters import (
    apply_milk_filter,
    apply_palette_filter,
    apply_random_filters,
    prepare_source,
)
from milk_filter.palette_data import MILK_PALETTE, build_palette


def _colours(image: np.ndarray) -> set:
    return {tuple(row) for row in image.reshape(-1, 3).tolist()}


def _palette_colours(palette) -> set:
    return {tuple(row) for row in palette.rgb_matrix().tolist()}


def test_milk_filter_maps_extremes(grey_ramp: np.ndarray) -> None:
    out = apply_milk_filter(grey_ramp)
    assert _colours(out) <= _palette_colours(MILK_PALETTE)
    # white (luma 1) is nearest 0.85, black (luma 0) is nearest 0.33
    np.testing.assert_array_equal(out[0, -1], MILK_PALETTE.rgb_matrix()[0])
    np.testing.assert_array_equal(out[0, 0], MILK_PALETTE.rgb_matrix()[2])


def test_palette_filter_forwards_options(grey_ramp: np.ndarray) -> None:
    palette = build_palette([((0.0, 0.0, 0.0), 0.0), ((1.0, 1.0, 1.0), 1.0)])
    calls = []
    out = apply_palette_filter(
        grey_ramp, palette, parts=2, progress=lambda d, t: calls.append(d)
    )
    assert _colours(out) == {(0.0, 0.0, 0.0), (1.0, 1.0, 1.0)}
    assert calls == [4, 8]


def test_prepare_source_stretches_once(rng: np.random.Generator) -> None:
    img = rng.uniform(0.3, 0.6, size=(4, 4, 3)).astype(np.float32)
    out = prepare_source(img)
    assert out is not img
    assert prepare_source(img, stretch=False) is img


def test_prepare_source_skips_uniform_image(capsys) -> None:
    img = np.full((2, 3, 3), 0.5, dtype=np.float32)
    assert prepare_source(img) is img
    assert "[warn] contrast stretch skipped" in capsys.readouterr().out


def test_random_filters_one_output_per_palette(grey_ramp: np.ndarray) -> None:
    progress = []
    results = apply_random_filters(
        grey_ramp,
        3,
        4,
        0.2,
        rng=np.random.default_rng(5),
        on_image=lambda done, total: progress.append((done, total)),
    )
    assert len(results) == 3
    assert progress == [(1, 3), (2, 3), (3, 3)]
    for result in results:
        assert len(result.palette) == 4
        assert result.image.shape == grey_ramp.shape
        assert _colours(result.image) <= _palette_colours(result.palette)


def test_random_filters_are_reproducible(grey_ramp: np.ndarray) -> None:
    a = apply_random_filters(grey_ramp, 2, 3, 0.3, rng=np.random.default_rng(11))
    b = apply_random_filters(grey_ramp, 2, 3, 0.3, rng=np.random.default_rng(11))
    for ra, rb in zip(a, b):
        assert ra.palette == rb.palette
        np.testing.assert_array_equal(ra.image, rb.image)


def test_random_filters_reject_zero_images(grey_ramp: np.ndarray) -> None:
    with pytest.raises(ValueError):
        apply_random_filters(grey_ramp, 0, 3, 0.3)
