"""
Octant glyph table - 8-bit sub-cell mask → Unicode code point.

Octant cells are numbered in raster order:

    bit 0 | bit 1
    bit 2 | bit 3
    bit 4 | bit 5
    bit 6 | bit 7

Unicode 16 encodes the octant patterns without an older block-element
equivalent as one contiguous run starting at U+1CD00 (BLOCK OCTANT-3), in
increasing mask order. The 26 patterns that already exist elsewhere (space,
full block, halves, quadrants, quarter blocks) are not in the run; they fall
back to a blank glyph.
"""

from typing import Dict, Optional

OCTANT_BASE = 0x1CD00
BLANK_CHAR = " "
HALF_BLOCK_CHAR = "▀"  # ▀ UPPER HALF BLOCK: fg paints the top pixel

# Patterns with a pre-existing block element character.
LEGACY_MASKS = frozenset({
    0x00, 0xFF,                    # space, full block
    0x0F, 0xF0, 0x55, 0xAA,        # upper, lower, left, right half
    0x05, 0x0A, 0x50, 0xA0,        # quadrants ▘ ▝ ▖ ▗
    0xA5, 0x5A,                    # ▚ ▞
    0xF5, 0x5F, 0xAF, 0xFA,        # ▙ ▛ ▜ ▟
    0x03, 0xC0, 0x3F, 0xFC,        # upper/lower one and three quarters
    0x01, 0x02, 0x40, 0x80,        # half-width quarter blocks (U+1CEA0 range)
    0x14, 0x28,                    # middle left/right one quarter
})


def _build_table() -> Dict[int, str]:
    table: Dict[int, str] = {}
    code_point = OCTANT_BASE
    for mask in range(256):
        if mask in LEGACY_MASKS:
            continue
        table[mask] = chr(code_point)
        code_point += 1
    return table


OCTANT_TABLE: Dict[int, str] = _build_table()


def octant_char(mask: int) -> Optional[str]:
    """Return the octant character for mask, or None when the mask has no entry."""
    return OCTANT_TABLE.get(mask & 0xFF)
