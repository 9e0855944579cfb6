# emulator/emulator_interface.py
"""
IEmulator Protocol
==================
Minimal contract for a frame-producing emulation engine.

The engine is opaque: the bridge only advances it, presses buttons, and
receives one fixed-size frame per advance through `on_frame`.
"""

from __future__ import annotations
from typing import Callable, Optional, Protocol, Sequence

from owotnes.models.enums import NesButton

SCREEN_WIDTH = 256
SCREEN_HEIGHT = 240

FrameCallback = Callable[[Sequence[int]], None]


class IEmulator(Protocol):
    """
    Protocol defining the emulator surface used by the bridge.

    All implementations must provide:
    - on_frame: callback invoked once per frame() with W*H packed 0xBBGGRR pixels
    - load_rom: (re)load cartridge data
    - frame: advance emulation by one frame
    - button_down / button_up: player 1 controller input
    """

    on_frame: Optional[FrameCallback]

    def load_rom(self, rom: bytes) -> None:
        """Load a cartridge image, resetting the machine."""
        ...

    def frame(self) -> None:
        """Advance one frame and deliver it to on_frame."""
        ...

    def button_down(self, button: NesButton) -> None:
        ...

    def button_up(self, button: NesButton) -> None:
        ...
