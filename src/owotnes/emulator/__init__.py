"""
Frame sources. The cynes backend is imported lazily by the factory.
"""

from .emulator_interface import IEmulator, SCREEN_WIDTH, SCREEN_HEIGHT
from .factory import create_emulator
from .rom_loader import fetch_rom

__all__ = [
    'IEmulator',
    'SCREEN_WIDTH',
    'SCREEN_HEIGHT',
    'create_emulator',
    'fetch_rom',
]
