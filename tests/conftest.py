"""
Shared fixtures: recording transport, scripted emulator, pinned RNG.
"""

import json
import random
from typing import List, Optional, Sequence

import pytest

from owotnes.emulator.emulator_interface import FrameCallback
from owotnes.lifecycle.task_registry import TaskRegistry
from owotnes.models.config import BridgeConfig, EmulatorConfig, RenderConfig
from owotnes.models.enums import EditIdStrategy, EmulatorBackend, NesButton

NES_PIXELS = 256 * 240


class FakeTransport:
    """ITransport that records every payload."""

    def __init__(self, is_open: bool = True):
        self.is_open = is_open
        self.sent: List[str] = []

    def send(self, payload: str) -> None:
        if self.is_open:
            self.sent.append(payload)

    def messages(self, kind: Optional[str] = None) -> List[dict]:
        decoded = [json.loads(p) for p in self.sent]
        if kind is None:
            return decoded
        return [m for m in decoded if m["kind"] == kind]


class FakeEmulator:
    """IEmulator that delivers a scripted frame and records button events."""

    def __init__(self, frame: Optional[Sequence[int]] = None):
        self.on_frame: Optional[FrameCallback] = None
        self.next_frame: Sequence[int] = frame if frame is not None else [0] * NES_PIXELS
        self.events: List[tuple] = []
        self.roms: List[bytes] = []
        self.frames = 0

    def load_rom(self, rom: bytes) -> None:
        self.roms.append(rom)

    def frame(self) -> None:
        self.frames += 1
        if self.on_frame is not None:
            self.on_frame(self.next_frame)

    def button_down(self, button: NesButton) -> None:
        self.events.append(("down", button))

    def button_up(self, button: NesButton) -> None:
        self.events.append(("up", button))

    def released(self) -> List[NesButton]:
        return [b for kind, b in self.events if kind == "up"]

    def pressed(self) -> List[NesButton]:
        return [b for kind, b in self.events if kind == "down"]


@pytest.fixture(autouse=True)
def fresh_task_registry():
    """Each test sees only the tasks it created."""
    TaskRegistry._instance = None
    yield
    TaskRegistry._instance = None


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def emulator():
    return FakeEmulator()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def config():
    """Counter ids and pattern backend so output is deterministic."""
    return BridgeConfig(
        render=RenderConfig(edit_ids=EditIdStrategy.COUNTER, frame_hz=200.0, render_hz=100.0),
        emulator=EmulatorConfig(backend=EmulatorBackend.PATTERN, rom_url="https://example.org/game.nes"),
    )
