import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def solid():
    """Factory for single-colour RGB Pillow images."""
    def make(width, height, rgb):
        return Image.new("RGB", (width, height), rgb)
    return make


@pytest.fixture
def noisy():
    """Factory for seeded random (H, W, 3) uint8 arrays in RGB order."""
    def make(width, height, seed=0):
        rng = np.random.default_rng(seed)
        return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return make
