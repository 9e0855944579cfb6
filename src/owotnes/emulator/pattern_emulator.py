"""
PatternEmulator - ROM-less frame source for dry runs.

Draws eight vertical color bars (one per NES button). Each held button
inverts its bar, and the bars scroll one pixel per frame while START is held,
so the whole pipeline (codec, diffing, chat commands) can be exercised
without an emulator or a cartridge.
"""

from __future__ import annotations
from typing import List, Optional, Set

from owotnes.emulator.emulator_interface import SCREEN_HEIGHT, SCREEN_WIDTH, FrameCallback
from owotnes.models.enums import LogCategory, NesButton
from owotnes.utils.colors import bgr_to_rgb
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EMULATOR)

# 0xRRGGBB, one per button in NesButton order
BAR_COLORS = (
    0xFFFFFF, 0xFFFF00, 0x00FFFF, 0x00FF00,
    0xFF00FF, 0xFF0000, 0x0000FF, 0x000000,
)


class PatternEmulator:
    """Deterministic test pattern implementing IEmulator."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.on_frame: Optional[FrameCallback] = None
        self.frame_count = 0
        self.offset = 0
        self.held: Set[NesButton] = set()
        self.rom_size = 0

    def load_rom(self, rom: bytes) -> None:
        # Any payload "loads"; only its size is kept for diagnostics
        self.rom_size = len(rom)
        self.frame_count = 0
        self.offset = 0
        log.info("Pattern source reset", rom_bytes=self.rom_size)

    def button_down(self, button: NesButton) -> None:
        self.held.add(button)

    def button_up(self, button: NesButton) -> None:
        self.held.discard(button)

    def render_pattern(self) -> List[int]:
        """Current pattern as W*H packed pixels in emulator (BGR) order."""
        buttons = list(NesButton)
        bar_width = max(1, self.width // len(buttons))
        row: List[int] = []
        for x in range(self.width):
            bar = ((x + self.offset) // bar_width) % len(buttons)
            color = BAR_COLORS[bar]
            if buttons[bar] in self.held:
                color ^= 0xFFFFFF
            row.append(bgr_to_rgb(color))
        return row * self.height

    def frame(self) -> None:
        if NesButton.START in self.held:
            self.offset = (self.offset + 1) % self.width
        self.frame_count += 1
        if self.on_frame is not None:
            self.on_frame(self.render_pattern())

    def __repr__(self) -> str:
        return f"PatternEmulator(frames={self.frame_count}, held={sorted(b.name for b in self.held)})"
