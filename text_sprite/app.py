"""Main Textual application for the text_sprite TUI."""

from __future__ import annotations

import platform
import subprocess
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    Static,
)
from textual.worker import get_current_worker

from text_sprite.core.errors import SpriteError
from text_sprite.core.pipeline import SpriteResult, render_sprite
from text_sprite.core.request import RenderRequest
from text_sprite.core.writer import save_sprite
from text_sprite.tui.controls import ControlPanel
from text_sprite.tui.preview import SpritePreview
from text_sprite.utils.cache import SpriteCache


class SaveScreen(ModalScreen[str | None]):
    """Modal screen for saving the sprite literal."""

    BINDINGS = [Binding("escape", "cancel", "Cancel", priority=True)]

    def action_cancel(self) -> None:
        self.dismiss(None)

    DEFAULT_CSS = """
    SaveScreen {
        align: center middle;
    }

    SaveScreen #save-dialog {
        width: 60;
        height: 12;
        background: $surface;
        border: thick $accent;
        padding: 1 2;
    }

    SaveScreen #save-title {
        text-style: bold;
        margin-bottom: 1;
    }

    SaveScreen .button-row {
        margin-top: 1;
        align: center middle;
        height: 3;
    }

    SaveScreen Button {
        margin: 0 1;
    }
    """

    def __init__(self, default_path: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self._default_path = default_path

    def compose(self) -> ComposeResult:
        with Vertical(id="save-dialog"):
            yield Static("Save Sprite", id="save-title")
            yield Label("Output file path:")
            yield Input(
                value=self._default_path,
                placeholder="sprite.txt",
                id="save-path",
            )
            with Horizontal(classes="button-row"):
                yield Button("Save", variant="primary", id="btn-save")
                yield Button("Cancel", variant="default", id="btn-cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            path_input = self.query_one("#save-path", Input)
            self.dismiss(path_input.value or None)
        elif event.button.id == "btn-cancel":
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value or None)


class TextSpriteApp(App):
    """Main TUI application."""

    TITLE = "text_sprite"
    CSS = """
    #main-area {
        height: 1fr;
        width: 1fr;
    }

    #preview-container {
        width: 1fr;
        height: 1fr;
    }

    #status-bar {
        height: 1;
        background: $panel;
        padding: 0 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("ctrl+y", "copy", "Copy", priority=True),
        Binding("ctrl+t", "toggle_panel", "Toggle Panel"),
    ]

    def __init__(self, request: RenderRequest | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._request = request or RenderRequest()
        self._cache = SpriteCache(max_size=32)
        self._panel_visible = True

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-area"):
            with Vertical(id="preview-container"):
                yield SpritePreview()
            yield ControlPanel(self._request, id="control-panel")
        yield Static("Ready", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self._render_sprite()

    def _update_status(self, text: str) -> None:
        status = self.query_one("#status-bar", Static)
        status.update(text)

    @work(thread=True, exclusive=True, group="render")
    def _render_sprite(self) -> None:
        """Render the current request in a background thread."""
        worker = get_current_worker()
        request = self._request
        cache_key = request.hash()

        cached = self._cache.get(cache_key)
        if cached is not None:
            if not worker.is_cancelled:
                self.call_from_thread(self._display_sprite, cached)
            return

        try:
            result = render_sprite(request)
        except SpriteError as e:
            if not worker.is_cancelled:
                self.call_from_thread(self._update_status, f"Error: {e}")
            return
        self._cache.put(cache_key, result)
        if not worker.is_cancelled:
            self.call_from_thread(self._display_sprite, result)

    def _display_sprite(self, result: SpriteResult) -> None:
        """Display a render result (called on main thread)."""
        self.query_one(SpritePreview).update_sprite(result)

    def on_sprite_preview_sprite_updated(
        self, event: SpritePreview.SpriteUpdated
    ) -> None:
        result = event.result
        if result.is_empty:
            self._update_status("Empty sprite")
        else:
            b = result.bounds
            self._update_status(f"Sprite {b.width}x{b.height} at ({b.x}, {b.y})")

    # --- Actions ---

    def action_save(self) -> None:
        result = self.query_one(SpritePreview).current
        if result is None or result.is_empty:
            self._update_status("Nothing to save")
            return
        self.push_screen(SaveScreen(str(Path.cwd() / "sprite.txt")), self._on_save_result)

    def _on_save_result(self, path: str | None) -> None:
        if path is None:
            return
        result = self.query_one(SpritePreview).current
        if result is None or result.is_empty:
            return
        out = Path(path)
        try:
            save_sprite(result, out)
        except (OSError, ValueError) as e:
            self._update_status(f"Save error: {e}")
            return
        self._update_status(f"Saved to {out}")

    def action_copy(self) -> None:
        """Copy the current sprite literal to the system clipboard."""
        result = self.query_one(SpritePreview).current
        if result is None or result.is_empty:
            self._update_status("No sprite to copy")
            return

        system = platform.system()
        if system == "Darwin":
            cmd = ["pbcopy"]
        elif system == "Linux":
            cmd = ["xclip", "-selection", "clipboard"]
        elif system == "Windows":
            cmd = ["clip"]
        else:
            self._update_status("Clipboard not supported on this platform")
            return

        try:
            proc = subprocess.Popen(cmd, stdin=subprocess.PIPE)
            proc.communicate(result.sprite.encode("utf-8"))
        except FileNotFoundError:
            self._update_status("Clipboard tool not found (pbcopy/xclip/clip)")
            return
        if proc.returncode == 0:
            self._update_status("Copied sprite to clipboard")
        else:
            self._update_status("Failed to copy to clipboard")

    def action_toggle_panel(self) -> None:
        panel = self.query_one("#control-panel", ControlPanel)
        self._panel_visible = not self._panel_visible
        panel.display = self._panel_visible

    # --- Message handlers ---

    def on_control_panel_request_changed(
        self, event: ControlPanel.RequestChanged
    ) -> None:
        self._request = event.request
        self._render_sprite()


def run_app(request: RenderRequest | None = None) -> None:
    """Launch the TUI application."""
    app = TextSpriteApp(request=request)
    app.run()
