import math
from fractions import Fraction

from PIL import Image

from glyphraster.bitmap import Bitmap

MAX_WIDTH = 100
MAX_HEIGHT = 100


def fit_ratio(width: int, height: int, max_width: int = MAX_WIDTH, max_height: int = MAX_HEIGHT) -> Fraction:
    """Uniform scale factor that fits (width, height) into the box.

    Exact rational arithmetic keeps e.g. 3x7 -> 42x100 from flooring to 99.
    """
    return min(Fraction(max_width, width), Fraction(max_height, height))


def fitted_size(
    width: int, height: int, max_width: int = MAX_WIDTH, max_height: int = MAX_HEIGHT
) -> tuple[int, int]:
    if width == 0 or height == 0:
        return (0, 0)
    ratio = fit_ratio(width, height, max_width, max_height)
    return (math.floor(width * ratio), math.floor(height * ratio))


def resample(bitmap: Bitmap, max_width: int = MAX_WIDTH, max_height: int = MAX_HEIGHT) -> Bitmap:
    """Scale a bitmap to fill the box while keeping its aspect ratio.

    The ratio is applied even when it is above 1, so small images are enlarged.
    """
    new_width, new_height = fitted_size(bitmap.width, bitmap.height, max_width, max_height)
    if (new_width, new_height) == bitmap.size:
        return bitmap
    if new_width == 0 or new_height == 0:
        return Bitmap.blank(new_width, new_height)
    image = bitmap.to_image().resize((new_width, new_height), Image.Resampling.BILINEAR)
    return Bitmap.from_image(image)
