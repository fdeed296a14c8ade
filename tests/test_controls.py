"""Tests for control panel input handling."""

import dataclasses

from text_sprite.core.request import RenderRequest
from text_sprite.tui.controls import _NUMBER_FIELDS, FONT_INPUT, input_overrides


class TestInputOverrides:
    def test_every_integer_field_has_an_input(self):
        int_fields = {
            f.name
            for f in dataclasses.fields(RenderRequest)
            if isinstance(getattr(RenderRequest(), f.name), int)
            and not isinstance(getattr(RenderRequest(), f.name), bool)
        }
        assert {field for field, _ in _NUMBER_FIELDS.values()} == int_fields

    def test_origin_accepts_negative(self):
        assert input_overrides("origin-x-input", "-4") == {"origin_x": -4}
        assert input_overrides("origin-y-input", "12") == {"origin_y": 12}

    def test_shadow_offsets(self):
        assert input_overrides("shadow-offset-x-input", "-2") == {"shadow_offset_x": -2}
        assert input_overrides("shadow-offset-y-input", "5") == {"shadow_offset_y": 5}

    def test_canvas_size_clamped_to_one(self):
        assert input_overrides("width-input", "0") == {"width": 1}
        assert input_overrides("height-input", "-3") == {"height": 1}

    def test_font(self):
        assert input_overrides(FONT_INPUT, " DejaVuSans.ttf ") == {"font": "DejaVuSans.ttf"}
        assert input_overrides(FONT_INPUT, "") == {"font": None}

    def test_overrides_build_valid_request(self):
        request = RenderRequest()
        for input_id in _NUMBER_FIELDS:
            request = request.with_changes(**input_overrides(input_id, "-1"))
        assert request.width == 1 and request.font_size == 1
        assert request.origin_x == -1

    def test_ignored_inputs(self):
        assert input_overrides("width-input", "abc") is None
        assert input_overrides("save-path", "sprite.txt") is None
        assert input_overrides(None, "1") is None
