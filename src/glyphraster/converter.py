from pathlib import Path

import numpy as np
from PIL import Image

from glyphraster.bitmap import Bitmap
from glyphraster.brightness import glyph_rows, glyph_to_pixel
from glyphraster.charsets import WHITE
from glyphraster.codec import read_raster
from glyphraster.colour import format_run, scan_runs
from glyphraster.resample import MAX_HEIGHT, MAX_WIDTH, resample


def _format_colour(array: np.ndarray) -> list[str]:
    """One escape run per pixel, one string per row."""
    return ["".join(format_run(pixel) for pixel in row) for row in array]


def bitmap_to_text(bitmap: Bitmap, colour: bool = False) -> str:
    """Encode a bitmap row by row. Every row, including the last, ends in a newline."""
    lines = _format_colour(bitmap.array) if colour else glyph_rows(bitmap.array)
    return "".join(line + "\n" for line in lines)


def split_lines(text: str) -> list[str]:
    """Split text into rows, ignoring the empty piece after a final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _decode_grayscale(lines: list[str]) -> Bitmap:
    width = max((len(line) for line in lines), default=0)
    array = np.empty((len(lines), width, 3), dtype=np.uint8)
    for y, line in enumerate(lines):
        # Cells past the end of a short line read as spaces
        padded = line.ljust(width)
        for x, char in enumerate(padded):
            array[y, x] = glyph_to_pixel(char)
    return Bitmap(array)


def _decode_colour(lines: list[str]) -> Bitmap:
    rows = [scan_runs(line) for line in lines]
    width = max((len(row) for row in rows), default=0)
    array = np.empty((len(rows), width, 3), dtype=np.uint8)
    array[...] = WHITE
    for y, row in enumerate(rows):
        if row:
            array[y, : len(row)] = row
    return Bitmap(array)


def text_to_bitmap(text: str, colour: bool = False) -> Bitmap:
    """Decode glyph art back into a bitmap. Total over arbitrary text."""
    lines = split_lines(text)
    if colour:
        return _decode_colour(lines)
    return _decode_grayscale(lines)


def image_to_text(
    image: Image.Image | str | Path,
    colour: bool = False,
    limited: bool = False,
    max_width: int = MAX_WIDTH,
    max_height: int = MAX_HEIGHT,
) -> str:
    """Encode a Pillow image or image file, optionally fitted into the box first."""
    if isinstance(image, Image.Image):
        bitmap = Bitmap.from_image(image)
    else:
        bitmap = read_raster(image)
    if limited:
        bitmap = resample(bitmap, max_width, max_height)
    return bitmap_to_text(bitmap, colour=colour)
