import io

import numpy as np
import pytest
from PIL import Image

from glyphraster.bitmap import Bitmap
from glyphraster.brightness import to_brightness
from glyphraster.charsets import LEVELS

GRAY_LEVELS = np.array([to_brightness(i) for i in range(LEVELS)], dtype=np.uint8)


def image_bytes(image: Image.Image, format: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=format)
    return buffer.getvalue()


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def random_bitmap(rng):
    """Factory for bitmaps with arbitrary colours."""

    def make(width, height):
        return Bitmap(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))

    return make


@pytest.fixture
def gray_bitmap(rng):
    """Factory for bitmaps built only from the reconstructable gray levels."""

    def make(width, height):
        indices = rng.integers(0, LEVELS, size=(height, width))
        grays = GRAY_LEVELS[indices]
        return Bitmap(np.repeat(grays[:, :, np.newaxis], 3, axis=2))

    return make


@pytest.fixture
def png_of():
    """Encode a Bitmap as PNG bytes with Pillow directly."""

    def make(bitmap: Bitmap) -> bytes:
        return image_bytes(bitmap.to_image())

    return make
