"""
Enums for the NES → OWOT bridge
"""

from enum import Enum, auto


class GlyphPolicy(Enum):
    """
    Block-to-glyph quantization strategy

    HALF_BLOCK: 1x2 pixel cells, exact (fg = top, bg = bottom)
    OCTANT: 2x4 pixel cells, two dominant colors + octant mask
    """
    HALF_BLOCK = auto()
    OCTANT = auto()


class EditIdStrategy(Enum):
    """How the edit id counter is seeded"""
    COUNTER = auto()       # Starts at 1
    RANDOM_SEED = auto()   # Starts at a random value (survives restarts better)


class EmulatorBackend(Enum):
    """Frame source implementations"""
    CYNES = auto()     # cynes NES emulator (optional extra)
    PATTERN = auto()   # Built-in test pattern, no ROM required


class NesButton(Enum):
    """Standard NES controller buttons (player 1)"""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    A = auto()
    B = auto()
    START = auto()
    SELECT = auto()


class MessageKind(Enum):
    """OWOT WebSocket envelope discriminator values"""
    WRITE = "write"
    LINK = "link"
    CHAT = "chat"
    CMD = "cmd"


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    SYSTEM = auto()      # Startup, shutdown, errors
    RENDER_ENGINE = auto()  # Frame codec, diffing, batching
    EMULATOR = auto()    # Frame source, ROM loading
    INPUT = auto()       # Command tokens, button holds
    TRANSPORT = auto()   # WebSocket connection to the canvas
    SESSION = auto()     # Bridge session lifecycle (start/stop/reload)

    API = auto()

    SHUTDOWN = auto()
    LIFECYCLE = auto()
    TASK = auto()

    GENERAL = auto()    # Default general category
