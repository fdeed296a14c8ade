"""Draw request text onto a fixed-size RGB canvas with Pillow.

Per text line the shadow is drawn first, then the outline stroke, then the
fill, so the fill always ends up on top.
"""

from __future__ import annotations

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, ImageFont

from text_sprite.core.request import RenderRequest

FALLBACK_FONTS = [
    "DejaVuSans-Bold.ttf",
    "DejaVuSans.ttf",
    "Arial.ttf",
    "Helvetica.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
]


def load_font(
    font: str | None, size: int
) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load the requested font, falling back to common system fonts."""
    names = ([font] if font else []) + FALLBACK_FONTS
    for name in names:
        try:
            return ImageFont.truetype(name, size)
        except (IOError, OSError):
            continue
    return ImageFont.load_default(size)


def _stroke_width(thickness: int) -> int:
    # A canvas stroke of `thickness` extends half of it outside the glyph
    return max(1, (thickness + 1) // 2)


def _line_positions(request: RenderRequest) -> list[tuple[str, tuple[int, int]]]:
    step = request.font_size + request.line_spacing
    return [
        (line, (request.origin_x, request.origin_y + i * step))
        for i, line in enumerate(request.text.split("\n"))
    ]


def _draw_shadow(
    img: Image.Image,
    line: str,
    pos: tuple[int, int],
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    request: RenderRequest,
) -> None:
    mask = Image.new("L", img.size, 0)
    draw = ImageDraw.Draw(mask)
    if not request.smoothing:
        draw.fontmode = "1"
    shifted = (pos[0] + request.shadow_offset_x, pos[1] + request.shadow_offset_y)
    draw.text(shifted, line, fill=255, font=font)
    if request.has_outline:
        draw.text(
            shifted,
            line,
            fill=255,
            font=font,
            stroke_width=_stroke_width(request.outline_thickness),
            stroke_fill=255,
        )
    if request.shadow_blur:
        mask = mask.filter(ImageFilter.GaussianBlur(request.shadow_blur / 2))
    img.paste(request.shadow_color, (0, 0, img.width, img.height), mask)


def rasterize(request: RenderRequest) -> Image.Image:
    """Render the request's text to an RGB image of the request's size."""
    img = Image.new("RGB", (request.width, request.height), request.background)
    if not request.text:
        return img

    font = load_font(request.font, request.font_size)
    draw = ImageDraw.Draw(img)
    if not request.smoothing:
        draw.fontmode = "1"  # bilevel glyphs, no anti-aliasing

    for line, pos in _line_positions(request):
        if request.has_shadow:
            _draw_shadow(img, line, pos, font, request)
        if request.has_outline:
            draw.text(
                pos,
                line,
                fill=request.outline_color,
                font=font,
                stroke_width=_stroke_width(request.outline_thickness),
                stroke_fill=request.outline_color,
            )
        draw.text(pos, line, fill=request.color, font=font)

    return img


def to_bitmap(image: Image.Image | np.ndarray) -> np.ndarray:
    """Convert an image to an owned (H, W, 3) uint8 array, dropping alpha."""
    if isinstance(image, Image.Image):
        return np.array(image.convert("RGB"), dtype=np.uint8)
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) array, got {arr.shape}")
    return arr[:, :, :3].astype(np.uint8, copy=True)
