import numpy as np
import pytest

from hot_dead_pixel.processing.injector import inject
from hot_dead_pixel.processing.pixel_buffer import PixelBuffer


class ScriptedRng:
    """Stands in for a numpy Generator: integers() returns queued values in order."""

    def __init__(self, values):
        self._values = list(values)

    def integers(self, low, high):
        value = self._values.pop(0)
        assert low <= value < high
        return value


@pytest.fixture
def scripted_rng():
    """Factory: scripted_rng(x0, y0, x1, y1, ...) -> rng yielding those draws."""
    return lambda *values: ScriptedRng(values)


@pytest.fixture
def grey_buffer():
    """Returns a 10x10 buffer filled with (128, 128, 128)."""
    return PixelBuffer.filled(10, 10, (128, 128, 128))


@pytest.fixture
def textured_buffer():
    """Returns a 64x48 noisy image with bright/dark patches and injected defects."""
    rng = np.random.default_rng(7)
    img = rng.integers(20, 236, size=(48, 64, 3), dtype=np.uint8)
    img[5:12, 5:15] = rng.integers(240, 256, size=(7, 10, 3), dtype=np.uint8)    # Near-white patch
    img[30:40, 40:52] = rng.integers(0, 12, size=(10, 12, 3), dtype=np.uint8)    # Near-black patch
    buffer = PixelBuffer.from_array(img)
    inject(buffer, 30, 30, seed=3)
    return buffer
