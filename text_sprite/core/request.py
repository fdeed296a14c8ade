"""Render request: everything needed to turn a text string into a sprite."""

from __future__ import annotations

import dataclasses
import hashlib
from dataclasses import dataclass

from text_sprite.core.errors import InvalidRequest
from text_sprite.core.palette import ARCADE_PALETTE, RGB

DEFAULT_TEXT = "RoboMan\n 20XX"


def _check_int(name: str, value: object, minimum: int | None = None) -> None:
    # bool is an int subclass; a checkbox value is never a size
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRequest(f"{name} must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise InvalidRequest(f"{name} must be >= {minimum}, got {value}")


def _check_color(name: str, value: object, optional: bool = False) -> None:
    if value is None and optional:
        return
    if not isinstance(value, tuple) or len(value) != 3:
        raise InvalidRequest(f"{name} must be an (r, g, b) tuple, got {value!r}")
    for channel in value:
        if isinstance(channel, bool) or not isinstance(channel, int):
            raise InvalidRequest(f"{name} channels must be integers, got {value!r}")
        if not 0 <= channel <= 255:
            raise InvalidRequest(f"{name} channels must be in [0, 255], got {value!r}")


@dataclass(frozen=True)
class RenderRequest:
    """Settings for one sprite render."""

    text: str = DEFAULT_TEXT
    font: str | None = None  # font file path or installed font name
    font_size: int = 28
    line_spacing: int = 4
    origin_x: int = 5
    origin_y: int = 5
    color: RGB = ARCADE_PALETTE.color_at(5)
    background: RGB = ARCADE_PALETTE.color_at(15)
    outline_color: RGB | None = ARCADE_PALETTE.color_at(2)
    outline_thickness: int = 7
    shadow_color: RGB | None = ARCADE_PALETTE.color_at(10)
    shadow_blur: int = 3
    shadow_offset_x: int = 3
    shadow_offset_y: int = 3
    smoothing: bool = True
    dithering: bool = False
    width: int = 160
    height: int = 120

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise InvalidRequest(f"text must be a string, got {self.text!r}")
        if self.font is not None and not isinstance(self.font, str):
            raise InvalidRequest(f"font must be a string, got {self.font!r}")
        _check_int("font_size", self.font_size, minimum=1)
        _check_int("line_spacing", self.line_spacing)
        _check_int("origin_x", self.origin_x)
        _check_int("origin_y", self.origin_y)
        _check_int("outline_thickness", self.outline_thickness, minimum=0)
        _check_int("shadow_blur", self.shadow_blur, minimum=0)
        _check_int("shadow_offset_x", self.shadow_offset_x)
        _check_int("shadow_offset_y", self.shadow_offset_y)
        _check_int("width", self.width, minimum=1)
        _check_int("height", self.height, minimum=1)
        _check_color("color", self.color)
        _check_color("background", self.background)
        _check_color("outline_color", self.outline_color, optional=True)
        _check_color("shadow_color", self.shadow_color, optional=True)
        for flag in ("smoothing", "dithering"):
            if not isinstance(getattr(self, flag), bool):
                raise InvalidRequest(f"{flag} must be a bool")

    @property
    def has_outline(self) -> bool:
        return self.outline_color is not None and self.outline_thickness > 0

    @property
    def has_shadow(self) -> bool:
        return self.shadow_color is not None and bool(
            self.shadow_blur or self.shadow_offset_x or self.shadow_offset_y
        )

    def colors(self) -> list[RGB]:
        """Colors the request draws with, in matcher construction order."""
        result = [self.background, self.color]
        if self.outline_color is not None:
            result.append(self.outline_color)
        if self.shadow_color is not None:
            result.append(self.shadow_color)
        return result

    def with_changes(self, **overrides) -> RenderRequest:
        return dataclasses.replace(self, **overrides)

    def hash(self) -> str:
        """Deterministic hash for cache keying."""
        data = ":".join(
            repr(getattr(self, f.name)) for f in dataclasses.fields(self)
        )
        return hashlib.md5(data.encode()).hexdigest()[:12]
