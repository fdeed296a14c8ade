"""Sprite literal encoding.

A sprite literal is the cropped, palette-indexed image framed as

    img`
    .aa.
    a22a
    `

one character per pixel: '.' for background, otherwise the palette index as
a lowercase hex digit.
"""

from __future__ import annotations

import re

import numpy as np

from text_sprite.core.errors import SpriteFormatError
from text_sprite.core.palette import RGB
from text_sprite.core.quantizer import QuantizedBitmap

LITERAL_OPEN = "img`"
LITERAL_CLOSE = "`"
BACKGROUND_CHAR = "."

_LITERAL_RE = re.compile(r"img`\n(.*?)\n`", re.DOTALL)


def encode_rows(indices: np.ndarray, background: np.ndarray) -> str:
    """Encode an (H, W) index grid into newline-separated rows.

    Args:
        indices: palette index per pixel.
        background: True where the pixel is background.
    """
    lines = []
    for index_row, bg_row in zip(indices, background):
        lines.append(
            "".join(
                BACKGROUND_CHAR if is_bg else format(int(idx), "x")
                for idx, is_bg in zip(index_row, bg_row)
            )
        )
    return "\n".join(lines)


def wrap_literal(body: str) -> str:
    return f"{LITERAL_OPEN}\n{body}\n{LITERAL_CLOSE}"


def encode_sprite(quantized: QuantizedBitmap, background: RGB) -> str | None:
    """Crop to the bounding box and encode as a sprite literal.

    Returns None when there is nothing to draw (empty bounding box).
    """
    bounds = quantized.bounds
    if bounds.is_empty:
        return None
    rows, cols = bounds.slices()
    pixels = quantized.pixels[rows, cols]
    is_background = np.all(pixels == np.array(background, dtype=np.uint8), axis=2)
    return wrap_literal(encode_rows(quantized.indices[rows, cols], is_background))


def decode_sprite(literal: str) -> np.ndarray:
    """Parse a sprite literal back into an (H, W) index grid.

    Background pixels decode to -1.

    Raises:
        SpriteFormatError: if the frame is missing, rows are ragged or a
            character is not '.' or a hex digit.
    """
    found = _LITERAL_RE.search(literal)
    if found is None:
        raise SpriteFormatError("No img`...` literal found")
    rows = found.group(1).split("\n")
    width = len(rows[0])
    if width == 0:
        raise SpriteFormatError("Sprite literal has an empty row")

    grid = np.full((len(rows), width), -1, dtype=np.int64)
    for y, row in enumerate(rows):
        if len(row) != width:
            raise SpriteFormatError(
                f"Row {y} has {len(row)} pixels, expected {width}"
            )
        for x, ch in enumerate(row):
            if ch == BACKGROUND_CHAR:
                continue
            if ch not in "0123456789abcdef":
                raise SpriteFormatError(f"Invalid pixel {ch!r} at ({x}, {y})")
            grid[y, x] = int(ch, 16)
    return grid
