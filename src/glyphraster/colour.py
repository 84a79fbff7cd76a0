"""Truecolor escape runs: one ``ESC[38;2;R;G;Bm`` run per cell.

A run is the foreground escape, the glyph, then a reset::

    \\x1b[38;2;10;20;30m@\\x1b[0m

Decoding never fails. Anything that is not a terminated run is read one
character at a time as a white cell.
"""

import re

from glyphraster.charsets import COLOUR_MARK, WHITE

ESC = "\x1b["
TERMINATOR = "m"
RUN_PREFIX = f"{ESC}38;2;"
RESET = f"{ESC}0{TERMINATOR}"

# ASCII decimal only; int() alone would also take "1_0" and non-ASCII digits
_FIELD = re.compile(r"\s*[+-]?[0-9]+\s*")


def format_run(pixel: tuple[int, int, int]) -> str:
    r, g, b = pixel
    return f"{RUN_PREFIX}{int(r)};{int(g)};{int(b)}{TERMINATOR}{COLOUR_MARK}{RESET}"


def _component(field: str) -> int:
    if not _FIELD.fullmatch(field):
        return 0
    return min(max(int(field), 0), 255)


def parse_components(body: str) -> tuple[int, int, int]:
    """Parse ``R;G;B``. Missing or non-numeric fields read as 0, extras are ignored."""
    fields = body.split(";")
    fields += [""] * (3 - len(fields))
    return (_component(fields[0]), _component(fields[1]), _component(fields[2]))


def scan_runs(line: str) -> list[tuple[int, int, int]]:
    """Decode one line of colour text into its cells, left to right."""
    cells = []
    i = 0
    n = len(line)
    while i < n:
        if line.startswith(RUN_PREFIX, i):
            body_start = i + len(RUN_PREFIX)
            end = line.find(TERMINATOR, body_start)
            if end != -1:
                cells.append(parse_components(line[body_start:end]))
                # Glyph slot follows the terminator; its character is not inspected
                i = end + 2
                if line.startswith(RESET, i):
                    i += len(RESET)
                continue
        # Not a run (or an unterminated one): this character alone is a white cell
        cells.append(WHITE)
        i += 1
    return cells
