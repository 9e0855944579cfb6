"""
Tests for the octant mask → character table.
"""

from owotnes.engine.glyph_table import LEGACY_MASKS, OCTANT_BASE, OCTANT_TABLE, octant_char


class TestOctantTable:

    def test_empty_and_full_masks_have_no_entry(self):
        assert octant_char(0x00) is None
        assert octant_char(0xFF) is None

    def test_first_entry(self):
        """Mask 4 (third octant alone) is the first code point of the run."""
        assert octant_char(4) == chr(0x1CD00)
        assert OCTANT_BASE == 0x1CD00

    def test_table_size(self):
        assert len(LEGACY_MASKS) == 26
        assert len(OCTANT_TABLE) == 230

    def test_contiguous_increasing_run(self):
        code_points = [ord(OCTANT_TABLE[m]) for m in sorted(OCTANT_TABLE)]
        assert code_points == list(range(OCTANT_BASE, OCTANT_BASE + 230))

    def test_legacy_masks_fall_back(self):
        for mask in (0x0F, 0xF0, 0x55, 0xAA, 0x01):
            assert octant_char(mask) is None
