import math

import numpy as np

from glyphraster.charsets import GLYPH_PALETTE, LEVELS, WHITE

_GLYPHS = np.array(list(GLYPH_PALETTE))
_INDEX = {char: i for i, char in enumerate(GLYPH_PALETTE)}

# Sum of three full channels; a pixel's mean brightness is channel_sum / 3.
_FULL_SUM = 3 * 255


def _level(channel_sum):
    """Quantize a channel sum (int or integer ndarray) to a palette index.

    Equivalent to floor(mean / 255 * (LEVELS - 1)) with the bucket edge moved
    down by one channel-sum step, so the gray that to_brightness() rounds
    each level to still lands in that level.
    """
    return np.minimum((channel_sum + 1) * (LEVELS - 1) // _FULL_SUM, LEVELS - 1)


def to_glyph(avg: float) -> str:
    """Return the palette glyph for a mean brightness in [0, 255]."""
    channel_sum = math.floor(min(max(avg, 0.0), 255.0) * 3)
    return GLYPH_PALETTE[int(_level(channel_sum))]


def pixel_to_glyph(pixel: tuple[int, int, int]) -> str:
    r, g, b = pixel
    return GLYPH_PALETTE[int(_level(int(r) + int(g) + int(b)))]


def to_brightness(index: int) -> int:
    """Gray level reconstructed for a palette index."""
    if not 0 <= index < LEVELS:
        raise IndexError(f"Palette index out of range: {index}")
    return round(index / (LEVELS - 1) * 255)


def glyph_to_pixel(char: str) -> tuple[int, int, int]:
    """Reconstruct a gray pixel from a glyph. Unknown characters are white."""
    index = _INDEX.get(char)
    if index is None:
        return WHITE
    gray = to_brightness(index)
    return (gray, gray, gray)


def glyph_indices(array: np.ndarray) -> np.ndarray:
    """Palette index for every pixel of an (H, W, 3) array. Returns (H, W) ints."""
    sums = array.astype(np.int32).sum(axis=-1)
    return _level(sums)


def glyph_rows(array: np.ndarray) -> list[str]:
    """Render an (H, W, 3) array as one palette string per row."""
    glyphs = _GLYPHS[glyph_indices(array)]
    return ["".join(row) for row in glyphs]
