"""Nearest palette color lookup.

Distance is plain squared Euclidean distance over (r, g, b). When several
candidates are equally close the one that came first in the candidate list
wins, so results never depend on dict or set ordering.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from text_sprite.core.errors import EmptyCandidateSet
from text_sprite.core.palette import (
    Palette,
    PaletteEntry,
    RGB,
)
from text_sprite.core.request import RenderRequest


@dataclass(frozen=True)
class Match:
    index: int
    rgb: RGB


class ColorMatcher:
    """Maps arbitrary colors to the nearest of an ordered candidate list."""

    def __init__(self, candidates: list[PaletteEntry]) -> None:
        if not candidates:
            raise EmptyCandidateSet("Color matcher needs at least one candidate")
        self.candidates: tuple[PaletteEntry, ...] = tuple(candidates)
        self.indices = np.array([c.index for c in candidates], dtype=np.int64)
        self.colors = np.array([c.rgb for c in candidates], dtype=np.int64)

    def __len__(self) -> int:
        return len(self.candidates)

    def nearest(self, r: int, g: int, b: int) -> int:
        """Return the position (in candidate order) of the closest candidate."""
        diff = self.colors - np.array((r, g, b), dtype=np.int64)
        # argmin returns the first minimum, which is the tie-break we want
        return int(np.argmin((diff * diff).sum(axis=1)))

    def match(self, rgb: RGB) -> Match:
        entry = self.candidates[self.nearest(*rgb)]
        return Match(index=entry.index, rgb=entry.rgb)

    def match_array(self, pixels: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Match every pixel of an (H, W, 3) array at once.

        Returns:
            (indices, colors): palette indices of shape (H, W) and matched
            RGB values of shape (H, W, 3), both int64.
        """
        flat = pixels.reshape(-1, 3).astype(np.int64)
        diff = flat[:, None, :] - self.colors[None, :, :]
        positions = np.argmin((diff * diff).sum(axis=2), axis=1)
        h, w = pixels.shape[:2]
        return (
            self.indices[positions].reshape(h, w),
            self.colors[positions].reshape(h, w, 3),
        )


def exact_set_matcher(palette: Palette, request: RenderRequest) -> ColorMatcher:
    """Matcher restricted to the colors the request draws with.

    Order is background, foreground, outline, shadow. A palette index that
    appears twice is kept at its first position only.
    """
    candidates: list[PaletteEntry] = []
    seen: set[int] = set()
    for rgb in request.colors():
        index = palette.resolve(rgb)
        if index not in seen:
            seen.add(index)
            candidates.append(palette[index])
    return ColorMatcher(candidates)


def full_palette_matcher(palette: Palette) -> ColorMatcher:
    """Matcher over every palette entry except the reserved index 0."""
    return ColorMatcher(palette.selectable())


def build_matcher(palette: Palette, request: RenderRequest) -> ColorMatcher:
    if request.smoothing:
        return full_palette_matcher(palette)
    return exact_set_matcher(palette, request)
