"""
FrameCodec — one render tick: raster frame → ordered list of canvas edits.

Pipeline per tick:
  1. validate frame length (fixed W x H)
  2. normalize channels (0xBBGGRR → 0xRRGGBB)
  3. for each cell row selected by the interlace field, every column:
       sample → glyph, diff against the cell cache, map to tile coordinates,
       allocate an edit id
  4. toggle the interlace field (always, even on error or zero edits)

The codec owns the per-session mutable render state (cell cache, interlace
field). The edit id allocator can be shared so that a replacement codec
keeps counting where the previous one stopped.
"""

from __future__ import annotations
import random
from typing import List, Optional, Sequence

from owotnes.engine.block_sampler import BlockSampler
from owotnes.engine.cell_state import CellStateCache
from owotnes.engine.edit_ids import EditIdAllocator
from owotnes.engine.interlace import InterlaceScheduler
from owotnes.engine.tile_mapper import map_cell
from owotnes.models.enums import EditIdStrategy, LogCategory
from owotnes.models.errors import FrameSizeError
from owotnes.models.glyph import EditRecord
from owotnes.utils.colors import bgr_to_rgb
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.RENDER_ENGINE)

NES_WIDTH = 256
NES_HEIGHT = 240


class FrameCodec:
    """
    Frame-to-glyph codec with change suppression.

    Example:
        codec = FrameCodec(OctantSampler())
        edits = codec.render(frame, timestamp_ms=int(time.time() * 1000))
        emitter.emit(edits)
    """

    def __init__(
        self,
        sampler: BlockSampler,
        width: int = NES_WIDTH,
        height: int = NES_HEIGHT,
        interlace: bool = True,
        id_strategy: EditIdStrategy = EditIdStrategy.RANDOM_SEED,
        rng: Optional[random.Random] = None,
        ids: Optional[EditIdAllocator] = None,
    ):
        self.sampler = sampler
        self.width = width
        self.height = height
        self.rows, self.cols = sampler.grid_size(width, height)

        self.cache = CellStateCache(self.rows * self.cols)
        self.interlace = InterlaceScheduler(enabled=interlace)
        # A shared allocator keeps ids unique across codecs on one connection
        self.ids = ids if ids is not None else EditIdAllocator(id_strategy, rng)

        # Metrics
        self.ticks = 0
        self.cells_visited = 0
        self.edits_produced = 0

        log.info(
            "FrameCodec initialized",
            policy=sampler.policy.name,
            grid=f"{self.cols}x{self.rows}",
            interlace=interlace,
            first_edit_id=self.ids.first_id,
        )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def render(self, frame: Sequence[int], timestamp_ms: int) -> List[EditRecord]:
        """
        Encode the changed cells of frame.

        Args:
            frame: W*H packed pixels in emulator order (0xBBGGRR)
            timestamp_ms: Wall-clock timestamp stamped on every edit

        Returns:
            Edits in row-major order (may be empty)

        Raises:
            FrameSizeError: If len(frame) != W*H
        """
        try:
            if len(frame) != self.pixel_count:
                raise FrameSizeError(self.pixel_count, len(frame))

            normalized = [bgr_to_rgb(p) for p in frame]
            edits: List[EditRecord] = []
            sample = self.sampler.sample
            cols = self.cols

            for row in self.interlace.rows(self.rows):
                row_base = row * cols
                for col in range(cols):
                    glyph = sample(normalized, self.width, row, col)
                    if not self.cache.diff(row_base + col, glyph):
                        continue
                    coord = map_cell(row, col)
                    edits.append(EditRecord(
                        tile_row=coord.tile_row,
                        tile_col=coord.tile_col,
                        local_row=coord.local_row,
                        local_col=coord.local_col,
                        timestamp_ms=timestamp_ms,
                        char=glyph.char,
                        edit_id=self.ids.allocate(),
                        fg=glyph.fg,
                        bg=glyph.bg,
                    ))
                self.cells_visited += cols

            self.edits_produced += len(edits)
            return edits
        finally:
            self.ticks += 1
            self.interlace.advance()

    def skip(self) -> None:
        """Tick without rendering (transport down): the field still toggles."""
        self.ticks += 1
        self.interlace.advance()

    def get_metrics(self) -> dict:
        return {
            "policy": self.sampler.policy.name,
            "grid": [self.cols, self.rows],
            "ticks": self.ticks,
            "field": self.interlace.field,
            "cells_visited": self.cells_visited,
            "edits_produced": self.edits_produced,
            "cache_hits": self.cache.hits,
            "cache_misses": self.cache.misses,
            "next_edit_id": self.ids.first_id + self.ids.allocated,
        }

    def __repr__(self) -> str:
        return (
            f"FrameCodec(policy={self.sampler.policy.name}, grid={self.cols}x{self.rows}, "
            f"ticks={self.ticks}, edits={self.edits_produced})"
        )
