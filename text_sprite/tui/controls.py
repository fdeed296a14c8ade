"""Render settings control panel for the TUI."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.message import Message
from textual.widget import Widget
from textual.widgets import (
    Checkbox,
    Input,
    Label,
    Select,
    Static,
    TextArea,
)

from text_sprite.core.palette import ARCADE_PALETTE, Palette
from text_sprite.core.request import RenderRequest

NO_COLOR = -1

# Input id -> (request field, minimum value)
_NUMBER_FIELDS: dict[str, tuple[str, int | None]] = {
    "width-input": ("width", 1),
    "height-input": ("height", 1),
    "origin-x-input": ("origin_x", None),
    "origin-y-input": ("origin_y", None),
    "font-size-input": ("font_size", 1),
    "line-spacing-input": ("line_spacing", None),
    "outline-thickness-input": ("outline_thickness", 0),
    "shadow-blur-input": ("shadow_blur", 0),
    "shadow-offset-x-input": ("shadow_offset_x", None),
    "shadow-offset-y-input": ("shadow_offset_y", None),
}

FONT_INPUT = "font-input"


def input_overrides(input_id: str | None, value: str) -> dict | None:
    """Request overrides for a submitted input, or None to ignore it.

    Numbers below a field's minimum are raised to it. An empty font
    selects the default font.
    """
    if input_id == FONT_INPUT:
        return {"font": value.strip() or None}
    if input_id not in _NUMBER_FIELDS:
        return None
    try:
        val = int(value)
    except ValueError:
        return None
    field, minimum = _NUMBER_FIELDS[input_id]
    if minimum is not None:
        val = max(minimum, val)
    return {field: val}

# Select id -> (request field, allows "none")
_COLOR_FIELDS: dict[str, tuple[str, bool]] = {
    "background-select": ("background", False),
    "color-select": ("color", False),
    "outline-select": ("outline_color", True),
    "shadow-select": ("shadow_color", True),
}


def _color_options(palette: Palette, optional: bool) -> list[tuple[str, int]]:
    options = [(f"{e.index:x} {e.name}", e.index) for e in palette.selectable()]
    if optional:
        options.insert(0, ("none", NO_COLOR))
    return options


class ControlPanel(Widget):
    """Settings panel with controls for the render request."""

    DEFAULT_CSS = """
    ControlPanel {
        width: 34;
        height: 1fr;
        background: $panel;
        padding: 1;
        border-left: solid $accent;
    }

    ControlPanel Label {
        margin-top: 1;
        color: $text-muted;
    }

    ControlPanel Select {
        width: 100%;
    }

    ControlPanel TextArea {
        height: 5;
    }

    ControlPanel #panel-title {
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }

    ControlPanel .num-row {
        height: 3;
        margin-top: 1;
    }

    ControlPanel .num-row Label {
        width: 16;
        margin-top: 0;
        padding-top: 1;
    }

    ControlPanel .num-row Input {
        width: 1fr;
        margin: 0;
    }
    """

    class RequestChanged(Message):
        """Posted when any setting changes."""
        def __init__(self, request: RenderRequest) -> None:
            super().__init__()
            self.request = request

    def __init__(
        self,
        request: RenderRequest | None = None,
        palette: Palette = ARCADE_PALETTE,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._request = request or RenderRequest()
        self._palette = palette

    def _selected_index(self, rgb) -> int:
        if rgb is None:
            return NO_COLOR
        return self._palette.resolve(rgb)

    def compose(self) -> ComposeResult:
        req = self._request
        with VerticalScroll():
            yield Static("Settings", id="panel-title")

            yield Label("Text")
            yield TextArea(req.text, id="text-area")

            yield Label("Font")
            yield Input(
                value=req.font or "",
                placeholder="default",
                id=FONT_INPUT,
            )

            for select_id, (field, optional) in _COLOR_FIELDS.items():
                yield Label(field.replace("_", " ").capitalize())
                yield Select(
                    _color_options(self._palette, optional),
                    value=self._selected_index(getattr(req, field)),
                    allow_blank=False,
                    id=select_id,
                )

            yield Checkbox("Smoothing", value=req.smoothing, id="smoothing-check")
            yield Checkbox("Dither", value=req.dithering, id="dither-check")

            for input_id, (field, _) in _NUMBER_FIELDS.items():
                with Horizontal(classes="num-row"):
                    yield Label(field.replace("_", " ").capitalize())
                    yield Input(
                        value=str(getattr(req, field)),
                        id=input_id,
                        type="integer",
                    )

    @property
    def request(self) -> RenderRequest:
        return self._request

    def _update_request(self, **overrides) -> None:
        """Create a new request with overrides and emit change."""
        self._request = self._request.with_changes(**overrides)
        self.post_message(self.RequestChanged(self._request))

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self._update_request(text=event.text_area.text)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id not in _COLOR_FIELDS or event.value is Select.BLANK:
            return
        field, _ = _COLOR_FIELDS[event.select.id]
        rgb = None if event.value == NO_COLOR else self._palette.color_at(event.value)
        self._update_request(**{field: rgb})

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        if event.checkbox.id == "smoothing-check":
            self._update_request(smoothing=event.value)
        elif event.checkbox.id == "dither-check":
            self._update_request(dithering=event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        overrides = input_overrides(event.input.id, event.value)
        if overrides is not None:
            self._update_request(**overrides)
