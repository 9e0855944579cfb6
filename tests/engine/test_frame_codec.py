"""
Tests for FrameCodec: one render tick from raster frame to edits.
"""

import pytest

from owotnes.engine.block_sampler import HalfBlockSampler, OctantSampler
from owotnes.engine.frame_codec import NES_HEIGHT, NES_WIDTH, FrameCodec
from owotnes.engine.glyph_table import HALF_BLOCK_CHAR
from owotnes.models.enums import EditIdStrategy
from owotnes.models.errors import FrameSizeError

PIXELS = NES_WIDTH * NES_HEIGHT
RED_BGR = 0x0000FF      # emulator order
RED_RGB = 0xFF0000      # canvas order


def black_frame():
    return [0] * PIXELS


def half_block_codec(**kwargs):
    return FrameCodec(HalfBlockSampler(), id_strategy=EditIdStrategy.COUNTER, **kwargs)


class TestHalfBlockRendering:

    def test_first_tick_emits_every_cell_of_the_field(self):
        codec = half_block_codec()
        edits = codec.render(black_frame(), 1000)
        assert len(edits) == 60 * 256
        assert {e.local_row % 2 for e in edits} == {0}

    def test_identical_frame_same_field_is_empty(self):
        codec = half_block_codec()
        frame = black_frame()
        codec.render(frame, 1000)
        codec.render(frame, 1500)
        assert codec.render(frame, 2000) == []
        assert codec.render(frame, 2500) == []

    def test_single_pixel_change_emits_one_edit_on_its_field(self):
        codec = half_block_codec()
        frame = black_frame()
        codec.render(frame, 0)
        codec.render(frame, 0)

        # pixel row 10 is the top half of cell row 5 (odd field)
        frame[10 * NES_WIDTH + 5] = RED_BGR
        assert codec.render(frame, 1) == []
        edits = codec.render(frame, 2)

        assert len(edits) == 1
        edit = edits[0]
        assert (edit.tile_row, edit.tile_col, edit.local_row, edit.local_col) == (0, 0, 5, 5)
        assert edit.char == HALF_BLOCK_CHAR
        assert (edit.fg, edit.bg) == (RED_RGB, 0)
        assert edit.timestamp_ms == 2

    def test_edits_are_row_major_with_sequential_ids(self):
        codec = half_block_codec(interlace=False)
        edits = codec.render(black_frame(), 0)
        assert len(edits) == 120 * 256
        assert [e.edit_id for e in edits[:3]] == [1, 2, 3]
        assert (edits[0].local_col, edits[1].local_col) == (0, 1)
        assert edits[-1].edit_id == 120 * 256


class TestOctantRendering:

    def test_dominant_color_flip_emits_one_edit(self):
        codec = FrameCodec(OctantSampler(), interlace=False, id_strategy=EditIdStrategy.COUNTER)
        frame = black_frame()
        for index in (0, 1, NES_WIDTH, NES_WIDTH + 1):
            frame[index] = RED_BGR          # 4 red (samples 0-3) vs 4 black: red wins the tie

        first = codec.render(frame, 0)
        assert len(first) == 60 * 128
        assert first[0].fg == RED_RGB

        frame[0] = 0
        edits = codec.render(frame, 1)
        assert len(edits) == 1
        assert (edits[0].fg, edits[0].bg) == (0, RED_RGB)


class TestCodecErrors:

    def test_wrong_frame_length_rejected_and_field_still_advances(self):
        codec = half_block_codec()
        with pytest.raises(FrameSizeError) as info:
            codec.render([0] * 10, 0)
        assert info.value.expected == PIXELS
        assert codec.interlace.field == 1
        assert codec.cache.known_cells() == 0

    def test_skip_toggles_field_without_touching_cache(self):
        codec = half_block_codec()
        codec.skip()
        assert codec.interlace.field == 1
        assert codec.ticks == 1
        assert codec.cache.known_cells() == 0

    def test_metrics(self):
        codec = half_block_codec()
        codec.render(black_frame(), 0)
        metrics = codec.get_metrics()
        assert metrics["ticks"] == 1
        assert metrics["edits_produced"] == 60 * 256
        assert metrics["grid"] == [256, 120]
