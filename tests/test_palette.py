"""Tests for the fixed palette."""

import pytest

from text_sprite.core.errors import ColorNotInPalette
from text_sprite.core.palette import (
    ARCADE_COLORS,
    ARCADE_PALETTE,
    FIRST_SELECTABLE_INDEX,
    Palette,
    hex_to_rgb,
    parse_color,
    rgb_to_hex,
)


class TestPalette:
    def test_arcade_size(self):
        assert ARCADE_PALETTE.size() == 16
        assert len(ARCADE_PALETTE) == 16

    def test_indices_dense(self):
        assert [e.index for e in ARCADE_PALETTE] == list(range(16))

    def test_color_at(self):
        assert ARCADE_PALETTE.color_at(1) == (255, 255, 255)
        assert ARCADE_PALETTE.color_at(10) == (0x8E, 0x2E, 0xC4)

    def test_color_at_out_of_range(self):
        with pytest.raises(IndexError):
            ARCADE_PALETTE.color_at(16)

    def test_index_of_returns_lowest(self):
        # Index 0 and 15 are both black
        assert ARCADE_PALETTE.index_of((0, 0, 0)) == 0

    def test_index_of_skips_reserved_slot(self):
        assert ARCADE_PALETTE.index_of((0, 0, 0), start=FIRST_SELECTABLE_INDEX) == 15

    def test_index_of_missing(self):
        with pytest.raises(ColorNotInPalette) as exc:
            ARCADE_PALETTE.index_of((1, 2, 3))
        assert exc.value.rgb == (1, 2, 3)
        assert "#010203" in str(exc.value)

    def test_not_found_is_value_error(self):
        with pytest.raises(ValueError):
            ARCADE_PALETTE.index_of((1, 2, 3))

    def test_selectable_excludes_index_zero(self):
        indices = [e.index for e in ARCADE_PALETTE.selectable()]
        assert indices == list(range(1, 16))

    def test_resolve_prefers_selectable_index(self):
        assert ARCADE_PALETTE.resolve((0, 0, 0)) == 15
        assert ARCADE_PALETTE.resolve((255, 255, 255)) == 1

    def test_resolve_falls_back_to_index_zero(self):
        palette = Palette.from_hex([("custom", "#0a141e")] + ARCADE_COLORS[1:])
        assert palette.resolve((10, 20, 30)) == 0

    def test_resolve_missing(self):
        with pytest.raises(ColorNotInPalette):
            ARCADE_PALETTE.resolve((1, 2, 3))

    def test_contains(self):
        assert ARCADE_PALETTE.contains((255, 0x21, 0x21))
        assert not ARCADE_PALETTE.contains((255, 0, 0))

    def test_rejects_out_of_range_color(self):
        with pytest.raises(ValueError):
            Palette([("bad", (0, 0, 256))])

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            Palette([])


class TestColorParsing:
    def test_hex_to_rgb(self):
        assert hex_to_rgb("#ff8135") == (255, 0x81, 0x35)
        assert hex_to_rgb("ff8135") == (255, 0x81, 0x35)

    def test_hex_invalid(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            hex_to_rgb("#fff")
        with pytest.raises(ValueError, match="Invalid hex"):
            hex_to_rgb("#gggggg")

    def test_rgb_to_hex(self):
        assert rgb_to_hex((0, 15, 255)) == "#000fff"

    def test_parse_color_hex(self):
        assert parse_color("#FF2121") == (255, 0x21, 0x21)

    def test_parse_color_index(self):
        assert parse_color("5") == ARCADE_PALETTE.color_at(5)
        assert parse_color("0xa") == ARCADE_PALETTE.color_at(10)

    def test_parse_color_invalid(self):
        with pytest.raises(ValueError):
            parse_color("yellow")
