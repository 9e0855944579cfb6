"""
Tests for the cell → (tile, local) coordinate mapping.
"""

from owotnes.engine.tile_mapper import TILE_COLS, TILE_ROWS, TileCoord, map_cell, map_index


class TestMapCell:

    def test_reference_example(self):
        """(23, 130) lands in tile (2, 8) at local (7, 2)."""
        assert map_cell(23, 130) == TileCoord(2, 8, 7, 2)

    def test_origin(self):
        assert map_cell(0, 0) == TileCoord(0, 0, 0, 0)

    def test_tile_boundaries(self):
        """Last cell of a tile and first cell of the next."""
        assert map_cell(TILE_ROWS - 1, TILE_COLS - 1) == TileCoord(0, 0, 7, 15)
        assert map_cell(TILE_ROWS, TILE_COLS) == TileCoord(1, 1, 0, 0)

    def test_round_trip_to_cell(self):
        """tile * size + local recovers the cell position."""
        for row, col in [(0, 255), (119, 0), (119, 255), (57, 91)]:
            c = map_cell(row, col)
            assert c.tile_row * TILE_ROWS + c.local_row == row
            assert c.tile_col * TILE_COLS + c.local_col == col

    def test_map_index_matches_map_cell(self):
        assert map_index(23 * 256 + 130, 256) == map_cell(23, 130)
