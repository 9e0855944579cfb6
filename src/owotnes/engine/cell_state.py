"""
CellStateCache - last-emitted hash per character cell (not persisted).

Lets the frame codec skip cells whose glyph has not changed since the last
write. Every slot starts as UNKNOWN so the first visit of a cell always emits.

Hash collisions are accepted: two different glyphs with the same hash leave
the canvas showing the older one until the cell changes again.
"""

from __future__ import annotations
from typing import List, Optional

from owotnes.models.glyph import Glyph

UNKNOWN: Optional[int] = None

_MULTIPLIER = 1315423911
_MASK_64 = 0xFFFFFFFFFFFFFFFF


def glyph_hash(glyph: Glyph) -> int:
    """Fast non-cryptographic fold of (fg, bg, key)."""
    h = glyph.fg
    h = ((h * _MULTIPLIER) ^ glyph.bg) & _MASK_64
    h = ((h * _MULTIPLIER) ^ glyph.key) & _MASK_64
    return h


class CellStateCache:
    """
    Per-cell change detector.

    Only diff() mutates the cache. There is no clear/reset: a fresh cache
    comes with a fresh session.
    """

    def __init__(self, cell_count: int):
        self._hashes: List[Optional[int]] = [UNKNOWN] * cell_count
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._hashes)

    def diff(self, cell_index: int, glyph: Glyph) -> bool:
        """
        Record glyph for cell_index.

        Returns:
            True if the cell changed (caller should emit an edit), False otherwise
        """
        h = glyph_hash(glyph)
        if self._hashes[cell_index] == h:
            self.hits += 1
            return False
        self._hashes[cell_index] = h
        self.misses += 1
        return True

    def known_cells(self) -> int:
        """Number of cells emitted at least once."""
        return sum(1 for h in self._hashes if h is not UNKNOWN)

    def __repr__(self) -> str:
        return f"CellStateCache(cells={len(self._hashes)}, hits={self.hits}, misses={self.misses})"
