import argparse
import logging
import sys
from pathlib import Path

from glyphraster.errors import GlyphRasterError
from glyphraster.formats import format_for_path, get_format, input_formats, output_formats
from glyphraster.handler import FileData, GlyphArtHandler
from glyphraster.resample import MAX_WIDTH

logger = logging.getLogger("glyphraster")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert images to glyph art and back")
    parser.add_argument("inputs", nargs="+", help="Input files")
    parser.add_argument(
        "-t",
        "--to",
        required=True,
        choices=[fmt.format for fmt in output_formats()],
        help="Output format",
    )
    parser.add_argument(
        "-f",
        "--from",
        dest="source",
        default=None,
        choices=[fmt.format for fmt in input_formats()],
        help="Input format (default: guessed from each file's extension)",
    )
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=None, help="Output directory (default: next to each input)"
    )
    parser.add_argument(
        "--max-size",
        type=positive_int,
        default=MAX_WIDTH,
        help=f"Box edge in cells for the limited formats (default: {MAX_WIDTH})",
    )
    parser.add_argument(
        "-p", "--print", dest="to_stdout", action="store_true", default=False, help="Write text output to stdout"
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    output_format = get_format(args.to)
    if args.to_stdout and not output_format.is_text:
        print("--print needs a text output format", file=sys.stderr)
        return 2

    paths = [Path(p) for p in args.inputs]
    for path in paths:
        if not path.exists():
            print(f"File not found: {path}", file=sys.stderr)
            return 1

    handler = GlyphArtHandler(max_width=args.max_size, max_height=args.max_size)
    handler.init()

    # One file at a time so a bad input does not stop the rest
    failed = 0
    for path in paths:
        try:
            input_format = get_format(args.source) if args.source else format_for_path(path)
        except KeyError as exc:
            logger.error("%s", exc.args[0])
            failed += 1
            continue
        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.error("Cannot read %s: %s", path, exc)
            failed += 1
            continue
        try:
            result = handler.convert_one(FileData(path.name, data), input_format, output_format)
        except GlyphRasterError as exc:
            logger.error("Conversion failed: %s", exc)
            failed += 1
            continue

        if args.to_stdout:
            sys.stdout.write(result.data.decode("utf-8"))
            continue
        out_dir = args.output_dir if args.output_dir is not None else path.parent
        out_path = out_dir / result.name
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
            out_path.write_bytes(result.data)
        except OSError as exc:
            logger.error("Cannot write %s: %s", out_path, exc)
            failed += 1
            continue
        logger.info("Wrote %s", out_path)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
