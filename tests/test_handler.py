import pytest

from glyphraster.bitmap import Bitmap
from glyphraster.charsets import WHITE
from glyphraster.codec import decode_raster
from glyphraster.converter import split_lines, text_to_bitmap
from glyphraster.errors import DecodeError, EncodeError, NotInitializedError
from glyphraster.formats import get_format
from glyphraster.handler import FileData, GlyphArtHandler, output_name

PNG = get_format("png")
ASCII = get_format("textAscii")
COLOUR = get_format("textColor")
ASCII_LIMITED = get_format("textLimited")
COLOUR_LIMITED = get_format("textColorLimited")


@pytest.fixture
def handler():
    handler = GlyphArtHandler()
    handler.init()
    return handler


def test_convert_before_init_raises(png_of):
    handler = GlyphArtHandler()
    assert not handler.ready
    assert handler.supported_formats is None
    with pytest.raises(NotInitializedError, match="not initialized"):
        handler.convert([FileData("a.png", png_of(Bitmap.blank(1, 1)))], PNG, ASCII)


def test_convert_one_before_init_raises(png_of):
    with pytest.raises(NotInitializedError) as excinfo:
        GlyphArtHandler().convert_one(FileData("a.png", png_of(Bitmap.blank(1, 1))), PNG, ASCII)
    assert excinfo.value.item == "a.png"


def test_init_loads_formats(handler):
    assert handler.ready
    assert {fmt.format for fmt in handler.supported_formats} >= {
        "png",
        "textAscii",
        "textColor",
        "textLimited",
        "textColorLimited",
    }


def test_png_to_ascii(handler, png_of):
    bitmap = Bitmap.from_pixels(2, 1, [(255, 255, 255), (0, 0, 0)])
    [result] = handler.convert([FileData("pic.png", png_of(bitmap))], PNG, ASCII)
    assert result.name == "pic.txt"
    assert result.data == b"@ \n"


def test_png_to_colour_limited(handler, png_of):
    bitmap = Bitmap.blank(200, 50, fill=(10, 20, 30))
    [result] = handler.convert([FileData("pic.png", png_of(bitmap))], PNG, COLOUR_LIMITED)
    assert result.name == "pic_limited_colored.txt"
    decoded = text_to_bitmap(result.data.decode("utf-8"), colour=True)
    assert decoded == Bitmap.blank(100, 25, fill=(10, 20, 30))


def test_png_to_ascii_limited_upscales(handler, png_of):
    [result] = handler.convert([FileData("tiny.png", png_of(Bitmap.blank(10, 10)))], PNG, ASCII_LIMITED)
    assert result.name == "tiny_limited.txt"
    lines = split_lines(result.data.decode("utf-8"))
    assert len(lines) == 100
    assert all(line == "@" * 100 for line in lines)


def test_colour_text_to_png_is_lossless(handler, random_bitmap, png_of):
    bitmap = random_bitmap(6, 4)
    [text] = handler.convert([FileData("pic.png", png_of(bitmap))], PNG, COLOUR)
    assert text.name == "pic_colored.txt"
    [png] = handler.convert([FileData(text.name, text.data)], COLOUR, PNG)
    assert png.name == "pic_colored.png"
    assert decode_raster(png.data, "image/png") == bitmap


def test_text_to_text(handler):
    [result] = handler.convert([FileData("art.txt", b"@ \n")], ASCII, COLOUR)
    assert result.data.decode("utf-8") == "\x1b[38;2;255;255;255m@\x1b[0m\x1b[38;2;0;0;0m@\x1b[0m\n"


def test_raster_to_raster(handler, random_bitmap, png_of):
    bitmap = random_bitmap(3, 3)
    [result] = handler.convert([FileData("a.png", png_of(bitmap))], PNG, get_format("bmp"))
    assert result.name == "a.bmp"
    assert decode_raster(result.data, "image/bmp") == bitmap


def test_custom_box(png_of):
    handler = GlyphArtHandler(max_width=10, max_height=10)
    handler.init()
    [result] = handler.convert([FileData("a.png", png_of(Bitmap.blank(200, 50)))], PNG, ASCII_LIMITED)
    assert result.data == b"@@@@@@@@@@\n" * 2


def test_output_order_matches_input(handler, png_of):
    files = [FileData(f"{name}.png", png_of(Bitmap.blank(1, 1))) for name in ("c", "a", "b")]
    results = handler.convert(files, PNG, ASCII)
    assert [r.name for r in results] == ["c.txt", "a.txt", "b.txt"]


def test_invalid_utf8_decodes_white(handler):
    [result] = handler.convert([FileData("bad.txt", b"\xff@\n")], ASCII, PNG)
    assert decode_raster(result.data, "image/png").pixels() == [WHITE, WHITE]


def test_decode_failure_names_the_item(handler, png_of):
    files = [FileData("good.png", png_of(Bitmap.blank(1, 1))), FileData("broken.png", b"garbage")]
    with pytest.raises(DecodeError) as excinfo:
        handler.convert(files, PNG, ASCII)
    assert excinfo.value.item == "broken.png"
    assert "broken.png" in str(excinfo.value)


def test_encode_failure_names_the_item(handler):
    with pytest.raises(EncodeError) as excinfo:
        handler.convert([FileData("empty.txt", b"")], ASCII, PNG)
    assert excinfo.value.item == "empty.txt"


@pytest.mark.parametrize(
    "name, tag, expected",
    [
        ("photo.png", "textAscii", "photo.txt"),
        ("photo.png", "textColor", "photo_colored.txt"),
        ("photo.png", "textLimited", "photo_limited.txt"),
        ("photo.png", "textColorLimited", "photo_limited_colored.txt"),
        ("my.photo.png", "textAscii", "my.photo.txt"),
        ("art.txt", "png", "art.png"),
        ("noext", "jpeg", "noext.jpg"),
    ],
)
def test_output_name(name, tag, expected):
    assert output_name(name, get_format(tag)) == expected
