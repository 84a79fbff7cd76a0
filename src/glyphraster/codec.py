import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from glyphraster.bitmap import Bitmap
from glyphraster.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)


def _pillow_format(mime: str) -> str | None:
    """Map a MIME type to the Pillow format name that writes it."""
    Image.init()
    for name, registered in Image.MIME.items():
        if registered == mime and name in Image.SAVE:
            return name
    return None


def _open(source, label: str) -> Bitmap:
    try:
        with Image.open(source) as image:
            return Bitmap.from_image(image)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"Cannot decode {label}: {exc}") from exc


def read_raster(path: str | Path) -> Bitmap:
    """Read an image file into an RGB bitmap, closing the file afterwards."""
    logger.debug("Reading %s", path)
    return _open(Path(path), str(path))


def decode_raster(data: bytes, mime: str) -> Bitmap:
    """Read compressed image bytes into an RGB bitmap. Alpha is dropped."""
    logger.debug("Decoding %d bytes as %s", len(data), mime)
    bitmap = _open(io.BytesIO(data), f"{mime} image")
    logger.debug("Decoded %dx%d bitmap", bitmap.width, bitmap.height)
    return bitmap


def encode_raster(bitmap: Bitmap, mime: str) -> bytes:
    """Write a bitmap to an image container identified by MIME type."""
    name = _pillow_format(mime)
    if name is None:
        raise EncodeError(f"No raster encoder for {mime}")
    if bitmap.width == 0 or bitmap.height == 0:
        raise EncodeError(f"Cannot encode empty {bitmap.width}x{bitmap.height} bitmap as {mime}")
    buffer = io.BytesIO()
    try:
        bitmap.to_image().save(buffer, format=name)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"Cannot encode bitmap as {mime}: {exc}") from exc
    logger.debug("Encoded %dx%d bitmap as %s (%d bytes)", bitmap.width, bitmap.height, name, buffer.tell())
    return buffer.getvalue()
