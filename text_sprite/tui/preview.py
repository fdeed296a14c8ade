"""Sprite preview widget for the TUI."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static

from text_sprite.core.palette import rgb_to_hex
from text_sprite.core.pipeline import SpriteResult

EMPTY_MESSAGE = "Nothing drawn yet. Type some text in the panel."


def sprite_to_rich_text(result: SpriteResult) -> Text:
    """Draw the cropped sprite as colored blocks, two cells per pixel.

    Background pixels are shown as dim dots so the crop stays visible.
    """
    text = Text()
    rows, cols = result.bounds.slices()
    pixels = result.quantized.pixels[rows, cols]
    background = result.quantized.background[rows, cols]

    for y in range(pixels.shape[0]):
        if y > 0:
            text.append("\n")
        for x in range(pixels.shape[1]):
            if background[y, x]:
                text.append(" .", style="dim")
            else:
                color = rgb_to_hex(tuple(int(c) for c in pixels[y, x]))
                text.append("██", style=color)
    return text


class SpritePreview(Widget):
    """Widget that displays the current sprite render."""

    DEFAULT_CSS = """
    SpritePreview {
        width: 1fr;
        height: 1fr;
        overflow: auto;
        background: $surface;
    }

    SpritePreview #preview-content {
        width: auto;
        height: auto;
    }
    """

    class SpriteUpdated(Message):
        """Posted when a new sprite is displayed."""
        def __init__(self, result: SpriteResult) -> None:
            super().__init__()
            self.result = result

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._current: SpriteResult | None = None

    def compose(self) -> ComposeResult:
        yield Static(EMPTY_MESSAGE, id="preview-content")

    def update_sprite(self, result: SpriteResult) -> None:
        """Show a new render result."""
        self._current = result
        content = self.query_one("#preview-content", Static)
        if result.is_empty:
            content.update(EMPTY_MESSAGE)
        else:
            content.update(sprite_to_rich_text(result))
        self.post_message(self.SpriteUpdated(result))

    @property
    def current(self) -> SpriteResult | None:
        return self._current
