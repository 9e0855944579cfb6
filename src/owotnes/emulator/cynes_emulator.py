"""
CynesEmulator - IEmulator adapter over the `cynes` NES emulator.

cynes renders each frame as a (240, 256, 3) uint8 RGB array and reads
player 1 input from a button bitmask. This adapter packs the frame into
0xBBGGRR ints (the order the bridge's normalizer expects from an emulator)
and keeps the bitmask in sync with button_down/button_up.

Requires the `emulator` extra: pip install owotnes[emulator]
"""

from __future__ import annotations
import os
import tempfile
from typing import Dict, Optional

import numpy as np
import cynes

from owotnes.emulator.emulator_interface import FrameCallback
from owotnes.models.enums import LogCategory, NesButton
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EMULATOR)

BUTTON_MASKS: Dict[NesButton, int] = {
    NesButton.UP: cynes.NES_INPUT_UP,
    NesButton.DOWN: cynes.NES_INPUT_DOWN,
    NesButton.LEFT: cynes.NES_INPUT_LEFT,
    NesButton.RIGHT: cynes.NES_INPUT_RIGHT,
    NesButton.A: cynes.NES_INPUT_A,
    NesButton.B: cynes.NES_INPUT_B,
    NesButton.START: cynes.NES_INPUT_START,
    NesButton.SELECT: cynes.NES_INPUT_SELECT,
}


def pack_bgr(frame: np.ndarray) -> list:
    """(H, W, 3) RGB uint8 → flat list of 0xBBGGRR ints."""
    rgb = frame.astype(np.uint32)
    packed = (rgb[..., 2] << 16) | (rgb[..., 1] << 8) | rgb[..., 0]
    return packed.ravel().tolist()


class CynesEmulator:
    """IEmulator implementation backed by cynes.NES."""

    def __init__(self) -> None:
        self.on_frame: Optional[FrameCallback] = None
        self._nes: Optional[cynes.NES] = None
        self._buttons = 0

    def load_rom(self, rom: bytes) -> None:
        # cynes loads cartridges from a path
        fd, path = tempfile.mkstemp(suffix=".nes")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(rom)
            self._nes = cynes.NES(path)
        finally:
            os.unlink(path)

        self._buttons = 0
        self._nes.controller = 0
        log.info("ROM loaded into cynes", rom_bytes=len(rom))

    def frame(self) -> None:
        if self._nes is None:
            raise RuntimeError("frame() called before load_rom()")
        self._nes.controller = self._buttons
        screen = self._nes.step(frames=1)
        if self.on_frame is not None:
            self.on_frame(pack_bgr(screen))

    def button_down(self, button: NesButton) -> None:
        self._buttons |= BUTTON_MASKS[button]

    def button_up(self, button: NesButton) -> None:
        self._buttons &= ~BUTTON_MASKS[button]
