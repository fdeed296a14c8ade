"""Command-line interface for text_sprite.

Supports the interactive TUI and a headless/JSON mode for scripting.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from text_sprite.core.errors import ColorNotInPalette, InvalidRequest
from text_sprite.core.palette import ARCADE_PALETTE, RGB, parse_color, rgb_to_hex
from text_sprite.core.request import RenderRequest

_DEFAULTS = RenderRequest()


def _color_arg(value: str) -> RGB:
    try:
        return parse_color(value, ARCADE_PALETTE)
    except (ValueError, IndexError) as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _optional_color_arg(value: str) -> RGB | None:
    if value.strip().lower() == "none":
        return None
    return _color_arg(value)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="text-sprite",
        description="Render text into palette-indexed sprite literals.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- render subcommand ---
    render = subparsers.add_parser(
        "render",
        help="Render text to a sprite literal.",
    )
    render.add_argument(
        "text",
        help="Text to render. A literal '\\n' starts a new line.",
    )
    render.add_argument(
        "-o", "--output",
        help="Write the sprite literal to this file instead of stdout.",
    )
    render.add_argument(
        "--preview",
        help="Also save a scaled PNG preview of the sprite.",
    )
    render.add_argument(
        "--preview-scale",
        type=int,
        default=3,
        help="Zoom factor for --preview (default: 3).",
    )
    render.add_argument("--font", help="Font file path or installed font name.")
    render.add_argument(
        "--font-size",
        type=int,
        default=_DEFAULTS.font_size,
        help=f"Font size in pixels (default: {_DEFAULTS.font_size}).",
    )
    render.add_argument(
        "--line-spacing",
        type=int,
        default=_DEFAULTS.line_spacing,
        help=f"Extra pixels between lines (default: {_DEFAULTS.line_spacing}).",
    )
    render.add_argument(
        "--origin",
        type=int,
        nargs=2,
        metavar=("X", "Y"),
        default=(_DEFAULTS.origin_x, _DEFAULTS.origin_y),
        help="Top-left text position (default: 5 5).",
    )
    render.add_argument(
        "--color",
        type=_color_arg,
        default=_DEFAULTS.color,
        help="Text color, #rrggbb or palette index (default: 5).",
    )
    render.add_argument(
        "--background",
        type=_color_arg,
        default=_DEFAULTS.background,
        help="Background color (default: 15).",
    )
    render.add_argument(
        "--outline",
        type=_optional_color_arg,
        default=_DEFAULTS.outline_color,
        help="Outline color or 'none' (default: 2).",
    )
    render.add_argument(
        "--outline-thickness",
        type=int,
        default=_DEFAULTS.outline_thickness,
        help=f"Outline thickness (default: {_DEFAULTS.outline_thickness}).",
    )
    render.add_argument(
        "--shadow",
        type=_optional_color_arg,
        default=_DEFAULTS.shadow_color,
        help="Shadow color or 'none' (default: 10).",
    )
    render.add_argument(
        "--shadow-blur",
        type=int,
        default=_DEFAULTS.shadow_blur,
        help=f"Shadow blur (default: {_DEFAULTS.shadow_blur}).",
    )
    render.add_argument(
        "--shadow-offset",
        type=int,
        nargs=2,
        metavar=("DX", "DY"),
        default=(_DEFAULTS.shadow_offset_x, _DEFAULTS.shadow_offset_y),
        help="Shadow offset (default: 3 3).",
    )
    render.add_argument(
        "--no-smoothing",
        action="store_true",
        help="Only use the chosen colors, no anti-aliased shades.",
    )
    render.add_argument(
        "--dither",
        action="store_true",
        help="Enable Floyd-Steinberg dithering.",
    )
    render.add_argument(
        "--width",
        type=int,
        default=_DEFAULTS.width,
        help=f"Canvas width in pixels (default: {_DEFAULTS.width}).",
    )
    render.add_argument(
        "--height",
        type=int,
        default=_DEFAULTS.height,
        help=f"Canvas height in pixels (default: {_DEFAULTS.height}).",
    )
    render.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON.",
    )
    render.add_argument(
        "--debug",
        action="store_true",
        help="Show debug logs and stack traces on error.",
    )

    subparsers.add_parser("palette", help="List the palette colors.")

    return parser


def _json_error(message: str, code: str) -> None:
    """Print JSON error to stderr and exit with code 1."""
    err = {"status": "error", "error": message, "code": code}
    print(json.dumps(err), file=sys.stderr)
    sys.exit(1)


def _fail(message: str, code: str, is_json: bool) -> None:
    if is_json:
        _json_error(message, code)
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def build_request(args: argparse.Namespace) -> RenderRequest:
    """Create a RenderRequest from parsed `render` arguments."""
    return RenderRequest(
        text=args.text.replace("\\n", "\n"),
        font=args.font,
        font_size=args.font_size,
        line_spacing=args.line_spacing,
        origin_x=args.origin[0],
        origin_y=args.origin[1],
        color=args.color,
        background=args.background,
        outline_color=args.outline,
        outline_thickness=args.outline_thickness,
        shadow_color=args.shadow,
        shadow_blur=args.shadow_blur,
        shadow_offset_x=args.shadow_offset[0],
        shadow_offset_y=args.shadow_offset[1],
        smoothing=not args.no_smoothing,
        dithering=args.dither,
        width=args.width,
        height=args.height,
    )


def _run_render(args: argparse.Namespace) -> None:
    """Run the headless render pipeline."""
    from text_sprite.core.pipeline import render_sprite
    from text_sprite.core.writer import save_preview, save_sprite

    is_json = args.json
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)
        logging.getLogger("text_sprite").setLevel(logging.DEBUG)

    try:
        request = build_request(args)
        result = render_sprite(request, ARCADE_PALETTE)
    except ColorNotInPalette as e:
        _fail(str(e), "COLOR_NOT_IN_PALETTE", is_json)
    except InvalidRequest as e:
        _fail(str(e), "INVALID_REQUEST", is_json)
    except Exception as e:
        if args.debug:
            import traceback
            traceback.print_exc(file=sys.stderr)
        _fail(str(e), "PROCESSING_ERROR", is_json)

    output_path = Path(args.output).resolve() if args.output else None
    preview_path = Path(args.preview).resolve() if args.preview else None

    if not result.is_empty:
        try:
            if output_path:
                save_sprite(result, output_path)
            if preview_path:
                save_preview(result, preview_path, scale=args.preview_scale)
        except (ValueError, OSError) as e:
            _fail(str(e), "WRITE_FAILED", is_json)

    if is_json:
        bounds = result.bounds
        payload = {
            "status": "success",
            "empty": result.is_empty,
            "sprite": result.sprite,
            "output": str(output_path) if output_path and not result.is_empty else None,
            "preview": str(preview_path) if preview_path and not result.is_empty else None,
            "bounds": {
                "x": bounds.x,
                "y": bounds.y,
                "width": bounds.width,
                "height": bounds.height,
            },
            "settings": {
                "smoothing": request.smoothing,
                "dither": request.dithering,
                "width": request.width,
                "height": request.height,
            },
        }
        print(json.dumps(payload, indent=2))
        return

    if result.is_empty:
        print("Nothing drawn: the sprite is empty", file=sys.stderr)
        return
    if output_path:
        print(
            f"Saved {result.width}x{result.height} sprite to {output_path}",
            file=sys.stderr,
        )
    else:
        print(result.sprite)
    if preview_path:
        print(f"Saved preview to {preview_path}", file=sys.stderr)


def _run_palette() -> None:
    for entry in ARCADE_PALETTE:
        print(f"{entry.index:x}  {rgb_to_hex(entry.rgb)}  {entry.name}")


def main() -> None:
    """Main entry point.

    Routing:
      text-sprite render <text> [opts]  → headless render
      text-sprite palette               → list palette colors
      text-sprite                       → launch TUI
    """
    raw_args = sys.argv[1:]
    if not raw_args:
        from text_sprite.app import run_app
        run_app()
        return

    parser = _build_parser()
    args = parser.parse_args(raw_args)
    if args.command == "render":
        _run_render(args)
    elif args.command == "palette":
        _run_palette()
    else:
        parser.print_help()
