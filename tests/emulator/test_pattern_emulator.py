"""
Tests for the ROM-less pattern backend and the backend factory.
"""

import pytest

from owotnes.emulator.emulator_interface import SCREEN_HEIGHT, SCREEN_WIDTH
from owotnes.emulator.factory import create_emulator
from owotnes.emulator.pattern_emulator import PatternEmulator
from owotnes.models.enums import EmulatorBackend, NesButton


class TestPatternEmulator:

    def test_frame_has_fixed_size(self):
        emulator = PatternEmulator()
        frames = []
        emulator.on_frame = frames.append
        emulator.load_rom(b"anything")
        emulator.frame()
        assert len(frames) == 1
        assert len(frames[0]) == SCREEN_WIDTH * SCREEN_HEIGHT

    def test_held_button_changes_picture(self):
        emulator = PatternEmulator()
        before = emulator.render_pattern()
        emulator.button_down(NesButton.A)
        assert emulator.render_pattern() != before
        emulator.button_up(NesButton.A)
        assert emulator.render_pattern() == before

    def test_start_scrolls(self):
        emulator = PatternEmulator()
        emulator.button_down(NesButton.START)
        emulator.frame()
        assert emulator.offset == 1


class TestFactory:

    def test_pattern_backend(self):
        assert isinstance(create_emulator(EmulatorBackend.PATTERN), PatternEmulator)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_emulator("gameboy")
