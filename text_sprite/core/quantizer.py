"""Palette quantization with optional error diffusion and bounds tracking."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from text_sprite.core.dither import diffuse_error
from text_sprite.core.matcher import ColorMatcher
from text_sprite.core.palette import RGB


@dataclass(frozen=True)
class BoundingBox:
    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def slices(self) -> tuple[slice, slice]:
        """(row, column) slices selecting the box from an (H, W, ...) array."""
        return (
            slice(self.y, self.y + self.height),
            slice(self.x, self.x + self.width),
        )


@dataclass
class QuantizedBitmap:
    """Result of quantizing a bitmap against a palette."""

    indices: np.ndarray  # (H, W) palette index per pixel
    pixels: np.ndarray  # (H, W, 3) uint8 matched colors, clamped
    background: np.ndarray  # (H, W) bool, True where the match is the background
    bounds: BoundingBox

    @property
    def width(self) -> int:
        return self.indices.shape[1]

    @property
    def height(self) -> int:
        return self.indices.shape[0]


def bounding_box(foreground: np.ndarray) -> BoundingBox:
    """Tight box around the True cells of a (H, W) mask.

    Starts from min = size - 1, max = 0 and widens per foreground pixel;
    with no foreground at all the box is empty (width = height = 0).
    """
    h, w = foreground.shape
    min_x, max_x, min_y, max_y = w - 1, 0, h - 1, 0
    ys, xs = np.nonzero(foreground)
    if len(xs) == 0:
        return BoundingBox(x=min_x, y=min_y, width=0, height=0)
    min_x = min(min_x, int(xs.min()))
    max_x = max(max_x, int(xs.max()))
    min_y = min(min_y, int(ys.min()))
    max_y = max(max_y, int(ys.max()))
    return BoundingBox(
        x=min_x,
        y=min_y,
        width=max(max_x - min_x + 1, 0),
        height=max(max_y - min_y + 1, 0),
    )


def _quantize_plain(bitmap: np.ndarray, matcher: ColorMatcher) -> tuple[np.ndarray, np.ndarray]:
    # Without diffusion every pixel is independent, so match them all at once
    return matcher.match_array(bitmap)


def _quantize_dithered(
    bitmap: np.ndarray, matcher: ColorMatcher
) -> tuple[np.ndarray, np.ndarray]:
    buffer = bitmap.astype(np.int64)  # working copy, may leave [0, 255]
    h, w = buffer.shape[:2]
    indices = np.zeros((h, w), dtype=np.int64)
    colors = matcher.colors
    palette_indices = matcher.indices

    for y in range(h):
        for x in range(w):
            current = buffer[y, x].copy()
            pos = matcher.nearest(int(current[0]), int(current[1]), int(current[2]))
            matched = colors[pos]
            diffuse_error(buffer, x, y, current - matched)
            buffer[y, x] = matched
            indices[y, x] = palette_indices[pos]

    return indices, buffer


def quantize(
    bitmap: np.ndarray,
    background: RGB,
    matcher: ColorMatcher,
    dither: bool = False,
) -> QuantizedBitmap:
    """Map every pixel of `bitmap` to its nearest candidate color.

    Pixels are visited row by row, left to right. With `dither` enabled the
    quantization error of each pixel is spread to its unvisited neighbors
    with the Floyd-Steinberg kernel before moving on.

    Args:
        bitmap: (H, W, 3) uint8 RGB array. Not modified.
        background: the request's background color.
        matcher: nearest-color lookup for the allowed colors.
        dither: enable error diffusion.

    Returns:
        QuantizedBitmap with clamped colors, palette indices, the background
        mask and the bounding box of non-background pixels.
    """
    if bitmap.ndim != 3 or bitmap.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) bitmap, got shape {bitmap.shape}")

    if dither:
        indices, buffer = _quantize_dithered(bitmap, matcher)
    else:
        indices, buffer = _quantize_plain(bitmap, matcher)

    # Clamp once, after the whole pass
    pixels = np.clip(buffer, 0, 255).astype(np.uint8)
    is_background = np.all(pixels == np.array(background, dtype=np.uint8), axis=2)

    return QuantizedBitmap(
        indices=indices,
        pixels=pixels,
        background=is_background,
        bounds=bounding_box(~is_background),
    )
