"""Reading XPM pixmaps into plain pixel grids."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Sequence

from .colors import lookup_color

TRANSPARENT = 0xFF000000
"""Pixel value stored for colour ``None``: alpha byte set, colour black."""

_NAME_LIMIT = 63
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_QUOTED = re.compile(r'"([^"]*)"')
_WORD_SEPARATORS = re.compile(r"[ \t]+")


class XpmError(Exception):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image: rows of 32-bit pixel values, top row first."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return self.pixels[y][x]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _leading_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _leading_hex(text: str) -> int:
    match = _HEX_PREFIX.match(text)
    if not match:
        return 0
    value = int(match.group(2), 16)
    return -value if match.group(1) == "-" else value


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs only."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _find_unquoted(text: str, token: str) -> int:
    quoted = False
    for pos, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, pos):
            return pos
    return -1


def strip_comments(text: str) -> str:
    """Blank out C comments lying outside quoted strings, keeping the length."""
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        stop = len(text) if end == -1 else end + 2
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        stop = len(text) if end == -1 else end + 1
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    return text


def text_to_rgb(name: str, end: str | None = None) -> int:
    """Return the colour value of an XPM colour specification.

    ``#rrggbb`` is read as hexadecimal. Otherwise ``name`` (joined with
    ``end`` when given, for two-word names) is looked up in the colour
    table; unknown names give 0 and ``None`` gives -1.
    """
    if name.startswith("#"):
        return _to_int32(_leading_hex(name[1:]))
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    value = lookup_color(name)
    return 0 if value is None else value


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_leading_int(word) for word in words[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError("XPM header values must be positive")
    return width, height, ncolors, cpp


def _parse_color_line(line: str, cpp: int) -> tuple[str, int]:
    words = split_words(line[cpp:])
    try:
        index = words.index("c") + 1
    except ValueError:
        raise XpmError(f"no 'c' colour in definition {line!r}") from None
    if index >= len(words):
        raise XpmError(f"missing colour value in definition {line!r}")
    end = words[index + 1] if index + 1 < len(words) else None
    return line[:cpp], text_to_rgb(words[index], end)


def parse_xpm(lines: Sequence[str]) -> XpmImage:
    """Decode an XPM image from its quoted strings, header first."""
    remaining = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise XpmError(f"XPM data ends before the {what}") from None

    width, height, ncolors, cpp = _parse_header(next_line("header"))
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        key, value = _parse_color_line(next_line("colour definitions"), cpp)
        if cpp <= 2:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    rows = []
    for _ in range(height):
        line = next_line("pixel rows")
        row = []
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            if color == -1:
                color = TRANSPARENT
            row.append(color & 0xFFFFFFFF)
        rows.append(tuple(row))
    return XpmImage(width=width, height=height, pixels=tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode an XPM image from the text of an XPM file."""
    return parse_xpm(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | os.PathLike[str]) -> XpmImage:
    """Read and decode the XPM file at ``path``."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)!r}: {exc}") from exc
    return parse_xpm_text(data.decode("latin-1"))