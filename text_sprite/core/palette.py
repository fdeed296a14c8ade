"""Fixed color palettes.

The default palette is the 16-color arcade palette. Index 0 is a reserved
"transparent" slot: it is never offered as a user color and never used as a
match target when quantizing with the full palette.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from text_sprite.core.errors import ColorNotInPalette

RGB = tuple[int, int, int]

# First index a user may pick; index 0 is the reserved sentinel slot.
FIRST_SELECTABLE_INDEX = 1

ARCADE_COLORS: list[tuple[str, str]] = [
    ("transparent", "#000000"),
    ("white", "#ffffff"),
    ("red", "#ff2121"),
    ("pink", "#ff93c4"),
    ("orange", "#ff8135"),
    ("yellow", "#fff609"),
    ("teal", "#249ca3"),
    ("green", "#78dc52"),
    ("blue", "#003fad"),
    ("light blue", "#87f2ff"),
    ("purple", "#8e2ec4"),
    ("light purple", "#a4839f"),
    ("dark purple", "#5c406c"),
    ("tan", "#e5cdc4"),
    ("brown", "#91463d"),
    ("black", "#000000"),
]


def hex_to_rgb(value: str) -> RGB:
    """Parse '#rrggbb' (the leading '#' is optional) into an RGB tuple."""
    digits = value.strip().lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color: {value!r}")
    try:
        return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    except ValueError:
        raise ValueError(f"Invalid hex color: {value!r}") from None


def rgb_to_hex(rgb: RGB) -> str:
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


@dataclass(frozen=True)
class PaletteEntry:
    index: int
    rgb: RGB
    name: str = ""


class Palette:
    """Immutable, ordered list of colors addressed by a dense index."""

    def __init__(self, colors: list[tuple[str, RGB]]) -> None:
        entries = []
        for index, (name, rgb) in enumerate(colors):
            rgb = tuple(int(c) for c in rgb)
            if len(rgb) != 3 or any(c < 0 or c > 255 for c in rgb):
                raise ValueError(f"Palette color {index} out of range: {rgb}")
            entries.append(PaletteEntry(index=index, rgb=rgb, name=name))
        if not entries:
            raise ValueError("Palette must contain at least one color")
        self._entries: tuple[PaletteEntry, ...] = tuple(entries)

    @classmethod
    def from_hex(cls, colors: list[tuple[str, str]]) -> Palette:
        return cls([(name, hex_to_rgb(value)) for name, value in colors])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PaletteEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> PaletteEntry:
        return self._entries[index]

    def size(self) -> int:
        return len(self._entries)

    def color_at(self, index: int) -> RGB:
        if not 0 <= index < len(self._entries):
            raise IndexError(f"Palette index out of range: {index}")
        return self._entries[index].rgb

    def index_of(self, rgb: RGB, start: int = 0) -> int:
        """Return the lowest index at or after `start` whose color is `rgb`.

        Raises:
            ColorNotInPalette: if no such entry exists.
        """
        target = tuple(rgb)
        for entry in self._entries[start:]:
            if entry.rgb == target:
                return entry.index
        raise ColorNotInPalette(target)

    def contains(self, rgb: RGB, start: int = 0) -> bool:
        target = tuple(rgb)
        return any(entry.rgb == target for entry in self._entries[start:])

    def resolve(self, rgb: RGB) -> int:
        """Index for a user color: the lowest selectable match, else index 0.

        Raises:
            ColorNotInPalette: if no entry has this color.
        """
        if self.contains(rgb, start=FIRST_SELECTABLE_INDEX):
            return self.index_of(rgb, start=FIRST_SELECTABLE_INDEX)
        return self.index_of(rgb)

    def selectable(self) -> list[PaletteEntry]:
        """Entries a user may pick as a color (everything but the sentinel)."""
        return list(self._entries[FIRST_SELECTABLE_INDEX:])


ARCADE_PALETTE = Palette.from_hex(ARCADE_COLORS)


def parse_color(value: str, palette: Palette = ARCADE_PALETTE) -> RGB:
    """Parse a user-supplied color: '#rrggbb' or a palette index ('5', '0xa')."""
    text = value.strip().lower()
    if text.startswith("#"):
        return hex_to_rgb(text)
    try:
        index = int(text, 0)
    except ValueError:
        raise ValueError(
            f"Invalid color {value!r}: expected #rrggbb or a palette index"
        ) from None
    return palette.color_at(index)
