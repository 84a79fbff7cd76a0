from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class TextMode(Enum):
    GRAYSCALE = "grayscale"
    COLOUR = "colour"


class Bounds(Enum):
    UNBOUNDED = "unbounded"
    BOUNDED = "bounded"


@dataclass(frozen=True)
class TextVariant:
    mode: TextMode
    bounds: Bounds = Bounds.UNBOUNDED

    @property
    def colour(self) -> bool:
        return self.mode is TextMode.COLOUR

    @property
    def bounded(self) -> bool:
        return self.bounds is Bounds.BOUNDED


@dataclass(frozen=True)
class FileFormat:
    name: str
    format: str
    extension: str
    mime: str
    from_: bool
    to: bool
    internal: str
    variant: TextVariant | None = None  # None for raster containers

    @property
    def is_text(self) -> bool:
        return self.variant is not None


FORMATS: tuple[FileFormat, ...] = (
    FileFormat(
        name="Portable Network Graphics",
        format="png",
        extension="png",
        mime="image/png",
        from_=True,
        to=True,
        internal="png",
    ),
    FileFormat(
        name="Joint Photographic Experts Group JFIF",
        format="jpeg",
        extension="jpg",
        mime="image/jpeg",
        from_=True,
        to=True,
        internal="jpeg",
    ),
    FileFormat(
        name="Windows Bitmap",
        format="bmp",
        extension="bmp",
        mime="image/bmp",
        from_=True,
        to=True,
        internal="bmp",
    ),
    FileFormat(
        name="ascii",
        format="textAscii",
        extension="txt",
        mime="text/plain",
        from_=True,
        to=True,
        internal="txt",
        variant=TextVariant(TextMode.GRAYSCALE),
    ),
    FileFormat(
        name="asciiColored",
        format="textColor",
        extension="txtColor",
        mime="text/x-colored-text",
        from_=True,
        to=True,
        internal="txtColor",
        variant=TextVariant(TextMode.COLOUR),
    ),
    FileFormat(
        name="ascii limited size",
        format="textLimited",
        extension="txtLimited",
        mime="text/plain-limited",
        from_=False,
        to=True,
        internal="txtLimited",
        variant=TextVariant(TextMode.GRAYSCALE, Bounds.BOUNDED),
    ),
    FileFormat(
        name="asciiColored limited size",
        format="textColorLimited",
        extension="txtColorLimited",
        mime="text/x-colored-text-limited",
        from_=False,
        to=True,
        internal="txtColorLimited",
        variant=TextVariant(TextMode.COLOUR, Bounds.BOUNDED),
    ),
)

_BY_TAG = {fmt.format: fmt for fmt in FORMATS}
_BY_EXTENSION = {fmt.extension.lower(): fmt for fmt in FORMATS}
_BY_EXTENSION["jpeg"] = _BY_TAG["jpeg"]


def get_format(tag: str) -> FileFormat:
    try:
        return _BY_TAG[tag]
    except KeyError:
        raise KeyError(f"Unknown format tag: {tag!r}") from None


def format_for_path(path: str | Path) -> FileFormat:
    """Guess the format of a file from its extension."""
    extension = Path(path).suffix.lstrip(".").lower()
    try:
        return _BY_EXTENSION[extension]
    except KeyError:
        raise KeyError(f"Cannot infer format from extension: {path}") from None


def input_formats() -> list[FileFormat]:
    return [fmt for fmt in FORMATS if fmt.from_]


def output_formats() -> list[FileFormat]:
    return [fmt for fmt in FORMATS if fmt.to]
