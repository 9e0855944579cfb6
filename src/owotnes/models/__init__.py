"""
Models package - enums, configuration, glyph/edit records, errors
"""

from .enums import GlyphPolicy, EditIdStrategy, EmulatorBackend, NesButton, MessageKind, LogLevel, LogCategory
from .errors import BridgeError, ConfigError, FrameSizeError, RomLoadError, TransportClosedError
from .glyph import Glyph, EditRecord
from .config import BridgeConfig

__all__ = [
    'GlyphPolicy',
    'EditIdStrategy',
    'EmulatorBackend',
    'NesButton',
    'MessageKind',
    'LogLevel',
    'LogCategory',
    'BridgeError',
    'ConfigError',
    'FrameSizeError',
    'RomLoadError',
    'TransportClosedError',
    'Glyph',
    'EditRecord',
    'BridgeConfig',
]
