from pathlib import Path

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def grey_ramp() -> np.ndarray:
    """8x16 float image whose columns step from black to white."""
    cols = np.linspace(0.0, 1.0, 16, dtype=np.float32)
    return np.repeat(np.repeat(cols[None, :, None], 8, axis=0), 3, axis=2)


@pytest.fixture
def ramp_png(tmp_path: Path, grey_ramp: np.ndarray) -> Path:
    path = tmp_path / "ramp.png"
    Image.fromarray((grey_ramp * 255.0).astype(np.uint8)).save(path)
    return path
