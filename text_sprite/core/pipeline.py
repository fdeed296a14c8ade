"""Render pipeline.

Validate colors -> build matcher -> rasterize (unless a bitmap is given)
-> quantize -> encode.

Debug logging is off by default; enable it with
logging.getLogger("text_sprite").setLevel(logging.DEBUG).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from PIL import Image

from text_sprite.core.encoder import encode_sprite
from text_sprite.core.errors import InvalidRequest
from text_sprite.core.matcher import build_matcher
from text_sprite.core.palette import ARCADE_PALETTE, Palette
from text_sprite.core.quantizer import BoundingBox, QuantizedBitmap, quantize
from text_sprite.core.rasterizer import rasterize, to_bitmap
from text_sprite.core.request import RenderRequest

logger = logging.getLogger("text_sprite")
logger.addHandler(logging.NullHandler())


@dataclass
class SpriteResult:
    """Outcome of one render. `sprite` is None when nothing was drawn."""

    sprite: str | None
    bounds: BoundingBox
    quantized: QuantizedBitmap

    @property
    def is_empty(self) -> bool:
        return self.sprite is None

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height


def validate_colors(request: RenderRequest, palette: Palette) -> list[int]:
    """Resolve every request color to its palette index.

    Raises:
        ColorNotInPalette: for the first color the palette does not hold.
    """
    return [palette.resolve(rgb) for rgb in request.colors()]


def render_sprite(
    request: RenderRequest,
    palette: Palette = ARCADE_PALETTE,
    bitmap: Image.Image | np.ndarray | None = None,
) -> SpriteResult:
    """Render `request` into a sprite literal.

    Args:
        request: render settings.
        palette: the fixed output palette.
        bitmap: an already rasterized image of the request's size. When
            omitted the text is drawn with the built-in Pillow rasterizer.

    Returns:
        SpriteResult with the literal (or None for an empty sprite), the
        crop rectangle and the full quantized bitmap.
    """
    indices = validate_colors(request, palette)
    logger.debug("Request colors resolved to palette indices %s", indices)

    matcher = build_matcher(palette, request)
    logger.debug(
        "Matching against %d candidates (smoothing=%s)",
        len(matcher),
        request.smoothing,
    )

    if bitmap is None:
        bitmap = rasterize(request)
    pixels = to_bitmap(bitmap)
    if pixels.shape[:2] != (request.height, request.width):
        raise InvalidRequest(
            f"Bitmap is {pixels.shape[1]}x{pixels.shape[0]}, "
            f"request expects {request.width}x{request.height}"
        )

    quantized = quantize(pixels, request.background, matcher, dither=request.dithering)
    sprite = encode_sprite(quantized, request.background)

    bounds = quantized.bounds
    if sprite is None:
        logger.debug("Nothing drawn, empty sprite")
    else:
        logger.debug(
            "Sprite %dx%d at (%d, %d)", bounds.width, bounds.height, bounds.x, bounds.y
        )
    return SpriteResult(sprite=sprite, bounds=bounds, quantized=quantized)
