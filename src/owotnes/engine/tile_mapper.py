"""
TileMapper
==========
Maps a flat character-cell position onto the canvas' two-level addressing.

OWOT addresses every character as (tile, character-inside-tile); a tile is
TILE_ROWS x TILE_COLS characters.
"""

from __future__ import annotations
from dataclasses import dataclass

TILE_ROWS = 8
TILE_COLS = 16


@dataclass(frozen=True)
class TileCoord:
    """Canvas address of one character cell."""
    tile_row: int
    tile_col: int
    local_row: int
    local_col: int


def map_cell(cell_row: int, cell_col: int, tile_rows: int = TILE_ROWS, tile_cols: int = TILE_COLS) -> TileCoord:
    """
    Convert a cell position to tile + local coordinates.

    Total over non-negative integers; no error cases.

    Example:
        map_cell(23, 130) -> TileCoord(tile_row=2, tile_col=8, local_row=7, local_col=2)
    """
    tile_row, local_row = divmod(cell_row, tile_rows)
    tile_col, local_col = divmod(cell_col, tile_cols)
    return TileCoord(tile_row, tile_col, local_row, local_col)


def map_index(cell_index: int, cells_per_row: int) -> TileCoord:
    """Map a flat (row-major) cell index."""
    cell_row, cell_col = divmod(cell_index, cells_per_row)
    return map_cell(cell_row, cell_col)
