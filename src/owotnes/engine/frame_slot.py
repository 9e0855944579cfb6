"""
FrameSlot — single-slot, latest-wins hand-off between the emulator loop and
the render loop.

Not a queue: frames produced between two render ticks overwrite each other.
Both loops run on the same event loop, so no lock is needed.
"""

from __future__ import annotations
from typing import Optional, Sequence


class FrameSlot:

    def __init__(self) -> None:
        self._frame: Optional[Sequence[int]] = None
        self.produced = 0
        self.consumed = 0

    def publish(self, frame: Sequence[int]) -> None:
        self._frame = frame
        self.produced += 1

    def latest(self) -> Optional[Sequence[int]]:
        """Most recently published frame (None until the first advance)."""
        if self._frame is not None:
            self.consumed += 1
        return self._frame

    @property
    def dropped(self) -> int:
        """Frames overwritten before a render tick looked at them."""
        return max(0, self.produced - self.consumed)
