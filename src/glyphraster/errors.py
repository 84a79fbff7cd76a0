class GlyphRasterError(Exception):
    """Base class for conversion failures that abort the current item.

    ``item`` names the input file being converted, when known.
    """

    def __init__(self, message: str, item: str | None = None):
        super().__init__(message)
        self.item = item

    def __str__(self):
        message = super().__str__()
        return f"{self.item}: {message}" if self.item else message


class NotInitializedError(GlyphRasterError):
    """A conversion was requested before the handler was initialized."""


class DecodeError(GlyphRasterError):
    """Raster bytes could not be read into a bitmap."""


class EncodeError(GlyphRasterError):
    """A bitmap could not be written to the requested raster container."""
