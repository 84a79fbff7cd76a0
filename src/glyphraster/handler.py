import logging
from dataclasses import dataclass
from pathlib import PurePath

from glyphraster.bitmap import Bitmap
from glyphraster.codec import decode_raster, encode_raster
from glyphraster.converter import bitmap_to_text, text_to_bitmap
from glyphraster.errors import GlyphRasterError, NotInitializedError
from glyphraster.formats import FORMATS, Bounds, FileFormat, TextMode, TextVariant
from glyphraster.resample import MAX_HEIGHT, MAX_WIDTH, resample

logger = logging.getLogger(__name__)


@dataclass
class FileData:
    name: str
    data: bytes


def output_name(input_name: str, output_format: FileFormat) -> str:
    """Name an output after its input: ``photo.png`` -> ``photo_limited_colored.txt``."""
    stem = PurePath(input_name).stem
    match output_format.variant:
        case None:
            return f"{stem}.{output_format.extension}"
        case TextVariant(mode=mode, bounds=bounds):
            suffix = "_limited" if bounds is Bounds.BOUNDED else ""
            suffix += "_colored" if mode is TextMode.COLOUR else ""
            return f"{stem}{suffix}.txt"


class GlyphArtHandler:
    """Converts between raster images and glyph art through a common Bitmap.

    Call init() once before convert().
    """

    name = "ascii"

    def __init__(self, max_width: int = MAX_WIDTH, max_height: int = MAX_HEIGHT):
        self.max_width = max_width
        self.max_height = max_height
        self.supported_formats: list[FileFormat] | None = None
        self.ready = False

    def init(self) -> None:
        self.supported_formats = list(FORMATS)
        self.ready = True

    def _load(self, file: FileData, input_format: FileFormat) -> Bitmap:
        match input_format.variant:
            case None:
                return decode_raster(file.data, input_format.mime)
            case TextVariant(mode=mode):
                text = file.data.decode("utf-8", errors="replace")
                return text_to_bitmap(text, colour=mode is TextMode.COLOUR)

    def _dump(self, bitmap: Bitmap, output_format: FileFormat) -> bytes:
        match output_format.variant:
            case None:
                return encode_raster(bitmap, output_format.mime)
            case TextVariant(mode=mode, bounds=Bounds.BOUNDED):
                bitmap = resample(bitmap, self.max_width, self.max_height)
                return bitmap_to_text(bitmap, colour=mode is TextMode.COLOUR).encode("utf-8")
            case TextVariant(mode=mode, bounds=Bounds.UNBOUNDED):
                return bitmap_to_text(bitmap, colour=mode is TextMode.COLOUR).encode("utf-8")

    def convert_one(self, file: FileData, input_format: FileFormat, output_format: FileFormat) -> FileData:
        if not self.ready:
            raise NotInitializedError("Handler not initialized.", item=file.name)
        try:
            bitmap = self._load(file, input_format)
            logger.debug("%s: %s -> %r", file.name, input_format.format, bitmap)
            data = self._dump(bitmap, output_format)
        except GlyphRasterError as exc:
            exc.item = file.name
            raise
        return FileData(name=output_name(file.name, output_format), data=data)

    def convert(
        self, files: list[FileData], input_format: FileFormat, output_format: FileFormat
    ) -> list[FileData]:
        """Convert each file in order. The first failure aborts the batch."""
        if not self.ready:
            raise NotInitializedError("Handler not initialized.")
        logger.info("Converting %d file(s) from %s to %s", len(files), input_format.format, output_format.format)
        return [self.convert_one(file, input_format, output_format) for file in files]
