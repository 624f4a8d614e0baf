import numpy as np
import pytest

from milk_filter.colour_convert import (
    mean_brightness,
    relative_luminance,
    relative_luminance_threaded,
    rgb_to_linear,
)


def test_black_and_white_endpoints() -> None:
    assert float(relative_luminance((0.0, 0.0, 0.0))) == 0.0
    assert float(relative_luminance((1.0, 1.0, 1.0))) == pytest.approx(1.0, abs=1e-6)


@pytest.mark.parametrize(
    "rgb, expected",
    [((1.0, 0.0, 0.0), 0.2126), ((0.0, 1.0, 0.0), 0.7152), ((0.0, 0.0, 1.0), 0.0722)],
)
def test_primary_weights(rgb, expected) -> None:
    assert float(relative_luminance(rgb)) == pytest.approx(expected, abs=1e-6)


def test_transfer_function_both_branches() -> None:
    low = rgb_to_linear(np.array([0.04], dtype=np.float32))
    high = rgb_to_linear(np.array([0.5], dtype=np.float32))
    assert float(low[0]) == pytest.approx(0.04 / 12.92, rel=1e-6)
    assert float(high[0]) == pytest.approx(((0.5 + 0.055) / 1.055) ** 2.4, rel=1e-5)


@pytest.mark.parametrize("channel", [0, 1, 2])
@pytest.mark.parametrize("others", [0.0, 0.3, 1.0])
def test_monotonic_in_each_channel(channel: int, others: float) -> None:
    ramp = np.full((256, 3), others, dtype=np.float32)
    ramp[:, channel] = np.linspace(0.0, 1.0, 256, dtype=np.float32)
    luma = relative_luminance(ramp)
    assert np.all(np.diff(luma) >= -1e-7)


def test_vectorised_shape_and_dtype(rng: np.random.Generator) -> None:
    img = rng.random((4, 5, 3)).astype(np.float32)
    luma = relative_luminance(img)
    assert luma.shape == (4, 5)
    assert luma.dtype == np.float32
    assert float(luma[2, 3]) == pytest.approx(float(relative_luminance(img[2, 3])))


def test_out_of_range_is_not_clamped() -> None:
    assert float(relative_luminance((2.0, 2.0, 2.0))) > 1.0


def test_rejects_non_rgb_shape() -> None:
    with pytest.raises(TypeError):
        relative_luminance(np.zeros((2, 4), dtype=np.float32))


def test_mean_brightness_is_plain_average() -> None:
    assert float(mean_brightness((0.3, 0.6, 0.9))) == pytest.approx(0.6, rel=1e-6)


def test_threaded_matches_inline(rng: np.random.Generator) -> None:
    img = rng.random((300, 7, 3)).astype(np.float32)
    np.testing.assert_array_equal(
        relative_luminance_threaded(img, 4), relative_luminance(img)
    )
