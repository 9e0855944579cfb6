"""
Virtual controller pad drawn under the picture.

Each pad is one whole canvas tile (16x8 characters) with its label centered
on row 3. Every character of a pad carries a `comu:<token>` link, so
clicking anywhere on the pad sends that token back as a `cmd` message.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from owotnes.engine.edit_ids import EditIdAllocator
from owotnes.engine.tile_mapper import TILE_COLS, TILE_ROWS
from owotnes.models.glyph import EditRecord
from owotnes.models.messages import link_message

PAD_FG = 0xFFFFFF
PAD_BG = 0x444444
LABEL_ROW = 3
LINK_SCHEME = "comu:"


@dataclass(frozen=True)
class PadButton:
    label: str
    token: str
    tile_col: int
    tile_row: int


# Tile rows 16-18 sit just below a 256x240 half-block picture (15 tile rows)
UI_PADS: Tuple[PadButton, ...] = (
    PadButton("UP", "up", 3, 16),
    PadButton("LEFT", "left", 1, 17),
    PadButton("RIGHT", "right", 5, 17),
    PadButton("DOWN", "down", 3, 18),
    PadButton("SEL", "select", 8, 17),
    PadButton("START", "start", 10, 17),
    PadButton("B", "b", 13, 17),
    PadButton("A", "a", 15, 17),
)


def pad_char(pad: PadButton, local_row: int, local_col: int) -> str:
    start = (TILE_COLS - len(pad.label)) // 2
    if local_row == LABEL_ROW and start <= local_col < start + len(pad.label):
        return pad.label[local_col - start]
    return " "


def build_pad(
    ids: EditIdAllocator,
    timestamp_ms: int,
    tile_row_offset: int = 0,
    pads: Tuple[PadButton, ...] = UI_PADS,
) -> Tuple[List[EditRecord], List[Dict[str, Any]]]:
    """
    Build the pad's cell edits and link messages.

    Args:
        ids: Session edit id allocator (pad edits share the frame id space)
        timestamp_ms: Timestamp stamped on every edit
        tile_row_offset: Added to each pad's tile row

    Returns:
        (edits, link messages), both in pad then row-major cell order
    """
    edits: List[EditRecord] = []
    links: List[Dict[str, Any]] = []

    for pad in pads:
        tile_row = pad.tile_row + tile_row_offset
        url = f"{LINK_SCHEME}{pad.token}"
        for local_row in range(TILE_ROWS):
            for local_col in range(TILE_COLS):
                edits.append(EditRecord(
                    tile_row=tile_row,
                    tile_col=pad.tile_col,
                    local_row=local_row,
                    local_col=local_col,
                    timestamp_ms=timestamp_ms,
                    char=pad_char(pad, local_row, local_col),
                    edit_id=ids.allocate(),
                    fg=PAD_FG,
                    bg=PAD_BG,
                ))
                links.append(link_message(tile_row, pad.tile_col, local_row, local_col, url))

    return edits, links
