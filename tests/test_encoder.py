"""Tests for sprite literal encoding and decoding."""

import numpy as np
import pytest

from text_sprite.core.encoder import (
    decode_sprite,
    encode_rows,
    encode_sprite,
    wrap_literal,
)
from text_sprite.core.errors import SpriteFormatError
from text_sprite.core.quantizer import BoundingBox, QuantizedBitmap, bounding_box

BG = (0, 0, 0)
FG = (0x8E, 0x2E, 0xC4)
PALETTE_RGB = {0: BG, 10: FG, 2: (255, 0x21, 0x21)}


def _quantized(indices):
    """Build a QuantizedBitmap from an index grid (index 0 is background)."""
    indices = np.array(indices, dtype=np.int64)
    pixels = np.zeros(indices.shape + (3,), dtype=np.uint8)
    for idx, rgb in PALETTE_RGB.items():
        pixels[indices == idx] = rgb
    background = indices == 0
    return QuantizedBitmap(
        indices=indices,
        pixels=pixels,
        background=background,
        bounds=bounding_box(~background),
    )


class TestEncodeRows:
    def test_three_by_two(self):
        indices = np.array([[10, 10, 10], [0, 0, 0]])
        background = indices == 0
        assert encode_rows(indices, background) == "aaa\n..."

    def test_single_row_has_no_newline(self):
        indices = np.array([[2, 0, 10]])
        assert encode_rows(indices, indices == 0) == "2.a"


class TestEncodeSprite:
    def test_literal_frame(self):
        q = QuantizedBitmap(
            indices=np.array([[10, 10, 10], [0, 0, 0]]),
            pixels=np.array([[FG] * 3, [BG] * 3], dtype=np.uint8),
            background=np.array([[False] * 3, [True] * 3]),
            bounds=BoundingBox(x=0, y=0, width=3, height=2),
        )
        assert encode_sprite(q, BG) == "img`\naaa\n...\n`"

    def test_crops_to_bounds(self):
        q = _quantized(
            [
                [0, 0, 0, 0, 0],
                [0, 0, 10, 0, 0],
                [0, 2, 0, 10, 0],
                [0, 0, 0, 0, 0],
            ]
        )
        assert encode_sprite(q, BG) == "img`\n.a.\n2.a\n`"

    def test_empty_is_none(self):
        q = _quantized([[0, 0], [0, 0]])
        assert encode_sprite(q, BG) is None

    def test_background_decided_by_color(self):
        q = _quantized([[10, 2]])
        # Treat the purple as background instead
        assert encode_sprite(q, FG) == "img`\n.2\n`"


class TestDecodeSprite:
    def test_decode(self):
        grid = decode_sprite("img`\n.a.\n2.f\n`")
        assert grid.tolist() == [[-1, 10, -1], [2, -1, 15]]

    def test_decode_inside_surrounding_text(self):
        grid = decode_sprite("let s = img`\naa\n`;")
        assert grid.tolist() == [[10, 10]]

    def test_encode_then_decode(self):
        q = _quantized([[0, 10, 0], [2, 2, 10]])
        grid = decode_sprite(encode_sprite(q, BG))
        assert grid.tolist() == [[-1, 10, -1], [2, 2, 10]]

    def test_missing_frame(self):
        with pytest.raises(SpriteFormatError, match="literal"):
            decode_sprite("aaa\n...")

    def test_ragged_rows(self):
        with pytest.raises(SpriteFormatError, match="Row 1"):
            decode_sprite(wrap_literal("aaa\n.."))

    def test_invalid_character(self):
        with pytest.raises(SpriteFormatError, match="Invalid pixel"):
            decode_sprite(wrap_literal("aXa"))
