"""
Glyph and edit record models

Glyph: what one character cell should look like.
EditRecord: one canvas write instruction (serialized as a 9-element list).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Union


@dataclass(frozen=True)
class Glyph:
    """
    A destination character plus its two colors.

    Attributes:
        char: Character to draw
        fg: Foreground color (0xRRGGBB)
        bg: Background color (0xRRGGBB)
        key: Octant mask, or the character's code point for fixed-character glyphs
    """
    char: str
    fg: int
    bg: int
    key: int


EditField = Union[int, str]


@dataclass(frozen=True)
class EditRecord:
    """One canvas cell update."""
    tile_row: int
    tile_col: int
    local_row: int
    local_col: int
    timestamp_ms: int
    char: str
    edit_id: int
    fg: int
    bg: int

    def to_wire(self) -> List[EditField]:
        """[tileRow, tileCol, localRow, localCol, timestampMs, char, editId, fg, bg]"""
        return [
            self.tile_row,
            self.tile_col,
            self.local_row,
            self.local_col,
            self.timestamp_ms,
            self.char,
            self.edit_id,
            self.fg,
            self.bg,
        ]
