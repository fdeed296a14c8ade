"""Save sprites as text literals or PNG previews."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from text_sprite.core.pipeline import SpriteResult

DEFAULT_PREVIEW_SCALE = 3


def save_sprite(result: SpriteResult, output_path: Path) -> None:
    """Write the sprite literal to a text file."""
    if result.sprite is None:
        raise ValueError("Nothing to save: the sprite is empty")
    output_path.write_text(result.sprite + "\n", encoding="utf-8")


def render_preview(
    result: SpriteResult,
    scale: int = DEFAULT_PREVIEW_SCALE,
    crop: bool = True,
) -> Image.Image:
    """Render the quantized colors as an image, scaled with nearest-neighbor.

    Args:
        result: a pipeline result.
        scale: integer zoom factor.
        crop: if True only the sprite's bounding box is shown, otherwise the
            whole quantized canvas.
    """
    if scale < 1:
        raise ValueError(f"Scale must be >= 1, got {scale}")
    pixels = result.quantized.pixels
    if crop:
        if result.is_empty:
            raise ValueError("Nothing to preview: the sprite is empty")
        rows, cols = result.bounds.slices()
        pixels = pixels[rows, cols]

    img = Image.fromarray(np.ascontiguousarray(pixels))
    if scale != 1:
        img = img.resize((img.width * scale, img.height * scale), Image.Resampling.NEAREST)
    return img


def save_preview(
    result: SpriteResult,
    output_path: Path,
    scale: int = DEFAULT_PREVIEW_SCALE,
    crop: bool = True,
) -> None:
    """Save a preview image; the format follows the file extension."""
    suffix = output_path.suffix.lower()
    if suffix not in (".png", ".gif", ".bmp"):
        raise ValueError(f"Unsupported preview format: {suffix}")
    render_preview(result, scale, crop).save(str(output_path))
