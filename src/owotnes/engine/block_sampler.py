"""
Block samplers - reduce one cell's pixel block to a single glyph.

Two interchangeable policies:

  HalfBlockSampler (1x2 px per cell)
    ▀ with fg = top pixel, bg = bottom pixel. Lossless.

  OctantSampler (2x4 px per cell)
    fg = most frequent color, bg = second most frequent (fg if monochrome).
    Ties go to the color seen first in raster order. The 8-bit "is fg" mask
    selects an octant character; masks without one fall back to a blank cell.

Samplers read a normalized frame (0xRRGGBB, row-major, `width` pixels per row).
"""

from __future__ import annotations
from collections import Counter
from typing import Sequence, Tuple

from owotnes.engine.glyph_table import BLANK_CHAR, HALF_BLOCK_CHAR, octant_char
from owotnes.models.enums import GlyphPolicy
from owotnes.models.glyph import Glyph

HALF_BLOCK_KEY = ord(HALF_BLOCK_CHAR)
FALLBACK_KEY = 0


class BlockSampler:
    """Base class: fixed cell geometry + sample()."""

    policy: GlyphPolicy
    cell_width: int
    cell_height: int

    def grid_size(self, width: int, height: int) -> Tuple[int, int]:
        """
        Number of cell rows and columns for a width x height source.

        Raises:
            ValueError: If the source does not tile evenly into cells
        """
        if width % self.cell_width or height % self.cell_height:
            raise ValueError(
                f"{width}x{height} does not tile into {self.cell_width}x{self.cell_height} cells"
            )
        return height // self.cell_height, width // self.cell_width

    def sample(self, frame: Sequence[int], width: int, cell_row: int, cell_col: int) -> Glyph:
        raise NotImplementedError


class HalfBlockSampler(BlockSampler):
    policy = GlyphPolicy.HALF_BLOCK
    cell_width = 1
    cell_height = 2

    def sample(self, frame: Sequence[int], width: int, cell_row: int, cell_col: int) -> Glyph:
        top_index = (cell_row * 2) * width + cell_col
        top = frame[top_index]
        bottom = frame[top_index + width]
        return Glyph(HALF_BLOCK_CHAR, top, bottom, HALF_BLOCK_KEY)


class OctantSampler(BlockSampler):
    policy = GlyphPolicy.OCTANT
    cell_width = 2
    cell_height = 4

    def sample(self, frame: Sequence[int], width: int, cell_row: int, cell_col: int) -> Glyph:
        origin = (cell_row * 4) * width + cell_col * 2
        samples = [
            frame[origin + r * width + c]
            for r in range(4)
            for c in range(2)
        ]
        return self.select(samples)

    @staticmethod
    def select(samples: Sequence[int]) -> Glyph:
        """
        Pick fg/bg and the octant character for 8 raster-ordered samples.

        Counter.most_common orders equal counts by first occurrence, which is
        exactly the raster-order tie-break.
        """
        ranked = Counter(samples).most_common(2)
        fg = ranked[0][0]
        bg = ranked[1][0] if len(ranked) > 1 else fg

        mask = 0
        for i, color in enumerate(samples):
            if color == fg:
                mask |= 1 << i

        char = octant_char(mask)
        if char is None:
            return Glyph(BLANK_CHAR, fg, fg, FALLBACK_KEY)
        return Glyph(char, fg, bg, mask)


def create_sampler(policy: GlyphPolicy) -> BlockSampler:
    """Sampler factory keyed by configured policy."""
    if policy is GlyphPolicy.HALF_BLOCK:
        return HalfBlockSampler()
    if policy is GlyphPolicy.OCTANT:
        return OctantSampler()
    raise ValueError(f"Unsupported glyph policy: {policy}")
