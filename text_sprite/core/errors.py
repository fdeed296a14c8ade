"""Exceptions raised by the sprite pipeline."""

from __future__ import annotations


class SpriteError(ValueError):
    """Base class for all sprite pipeline errors."""


class ColorNotInPalette(SpriteError):
    """A requested color is not one of the palette entries."""

    def __init__(self, rgb: tuple[int, int, int]) -> None:
        self.rgb = tuple(rgb)
        r, g, b = self.rgb
        super().__init__(f"Color #{r:02x}{g:02x}{b:02x} is not in the palette")


class EmptyCandidateSet(SpriteError):
    """A color matcher was built without any candidate colors."""


class InvalidRequest(SpriteError):
    """A render request field has the wrong type or an out-of-range value."""


class SpriteFormatError(SpriteError):
    """A sprite literal could not be parsed."""
