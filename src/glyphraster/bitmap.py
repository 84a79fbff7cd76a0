from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from PIL import Image

from glyphraster.charsets import WHITE

Pixel = tuple[int, int, int]


@dataclass(eq=False)
class Bitmap:
    """Row-major RGB raster passed between pipeline stages.

    ``array`` has shape (height, width, 3) and dtype uint8. Stages never
    write into a bitmap they received; they build a new one.
    """

    array: np.ndarray

    def __post_init__(self):
        self.array = np.asarray(self.array, dtype=np.uint8)
        if self.array.ndim != 3 or self.array.shape[2] != 3:
            raise ValueError(f"Expected (height, width, 3) array, got shape {self.array.shape}")

    @property
    def width(self) -> int:
        return self.array.shape[1]

    @property
    def height(self) -> int:
        return self.array.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @classmethod
    def blank(cls, width: int, height: int, fill: Pixel = WHITE) -> Bitmap:
        array = np.empty((height, width, 3), dtype=np.uint8)
        array[...] = fill
        return cls(array)

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Iterable[Pixel]) -> Bitmap:
        array = np.array(list(pixels), dtype=np.uint8)
        if array.size != width * height * 3:
            raise ValueError(f"Expected {width * height} pixels for {width}x{height}, got {array.size // 3}")
        return cls(array.reshape(height, width, 3))

    @classmethod
    def from_image(cls, image: Image.Image) -> Bitmap:
        return cls(np.asarray(image.convert("RGB"), dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.array))

    def pixel(self, x: int, y: int) -> Pixel:
        r, g, b = self.array[y, x]
        return (int(r), int(g), int(b))

    def pixels(self) -> list[Pixel]:
        return [(int(r), int(g), int(b)) for r, g, b in self.array.reshape(-1, 3)]

    def __eq__(self, other):
        if not isinstance(other, Bitmap):
            return NotImplemented
        return self.array.shape == other.array.shape and np.array_equal(self.array, other.array)

    def __repr__(self):
        return f"Bitmap({self.width}x{self.height})"
