"""
Tests for the half-block and octant samplers.
"""

import pytest

from owotnes.engine.block_sampler import (
    FALLBACK_KEY,
    HALF_BLOCK_KEY,
    HalfBlockSampler,
    OctantSampler,
    create_sampler,
)
from owotnes.engine.glyph_table import BLANK_CHAR, HALF_BLOCK_CHAR, octant_char
from owotnes.models.enums import GlyphPolicy

RED, GREEN, BLUE = 0xFF0000, 0x00FF00, 0x0000FF


class TestHalfBlockSampler:

    def test_top_is_fg_bottom_is_bg(self):
        width = 2
        frame = [RED, GREEN,
                 BLUE, RED]
        glyph = HalfBlockSampler().sample(frame, width, 0, 1)
        assert glyph.char == HALF_BLOCK_CHAR
        assert (glyph.fg, glyph.bg) == (GREEN, RED)
        assert glyph.key == HALF_BLOCK_KEY

    def test_grid_size(self):
        assert HalfBlockSampler().grid_size(256, 240) == (120, 256)


class TestOctantSampler:

    def test_monochrome_block_is_blank_fallback(self):
        glyph = OctantSampler.select([RED] * 8)
        assert glyph.char == BLANK_CHAR
        assert glyph.fg == glyph.bg == RED
        assert glyph.key == FALLBACK_KEY

    def test_majority_color_is_fg(self):
        samples = [BLUE, RED, RED, RED, RED, RED, BLUE, BLUE]
        glyph = OctantSampler.select(samples)
        assert (glyph.fg, glyph.bg) == (RED, BLUE)
        assert glyph.key == 0b00111110
        assert glyph.char == octant_char(0b00111110)

    def test_tie_goes_to_first_in_raster_order(self):
        """Four each: the color at sample 0 wins fg."""
        samples = [GREEN, RED, RED, GREEN, GREEN, RED, RED, GREEN]
        glyph = OctantSampler.select(samples)
        assert (glyph.fg, glyph.bg) == (GREEN, RED)
        assert glyph.key == 0b10011001

    def test_three_colors_bg_is_runner_up(self):
        samples = [RED, RED, RED, RED, GREEN, GREEN, BLUE, RED]
        glyph = OctantSampler.select(samples)
        assert (glyph.fg, glyph.bg) == (RED, GREEN)

    def test_legacy_mask_falls_back_to_blank(self):
        """Top half fg (mask 0x0F) has no octant code point."""
        samples = [RED] * 4 + [BLUE] * 4
        glyph = OctantSampler.select(samples)
        assert glyph.char == BLANK_CHAR
        assert glyph.bg == glyph.fg == RED

    def test_sample_reads_2x4_block(self):
        width = 4
        frame = [0] * (width * 4)
        frame[2 * width + 3] = RED      # row 2, col 3 → cell col 1, sample 5
        frame[3 * width + 2] = RED      # row 3, col 2 → sample 6
        frame[0 * width + 2] = RED      # sample 0
        glyph = OctantSampler().sample(frame, width, 0, 1)
        assert glyph.fg == 0
        assert glyph.bg == RED

    def test_grid_size_rejects_uneven_geometry(self):
        with pytest.raises(ValueError):
            OctantSampler().grid_size(255, 240)


class TestCreateSampler:

    def test_by_policy(self):
        assert isinstance(create_sampler(GlyphPolicy.HALF_BLOCK), HalfBlockSampler)
        assert isinstance(create_sampler(GlyphPolicy.OCTANT), OctantSampler)
