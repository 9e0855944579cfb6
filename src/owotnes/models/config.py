"""
Configuration models

Typed, immutable views of config.yaml sections. Built by ConfigManager;
everything downstream receives these instead of raw dicts.
"""

from dataclasses import dataclass, field
from typing import Optional

from owotnes.models.enums import EditIdStrategy, EmulatorBackend, GlyphPolicy, LogLevel


@dataclass(frozen=True)
class TransportConfig:
    host: str = "ourworldoftext.com"
    world: str = "owotness"
    member_key: Optional[str] = None
    secure: bool = True
    reconnect_delay: float = 2.0
    fatal_on_close: bool = False

    @property
    def origin(self) -> str:
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.host}"

    @property
    def url(self) -> str:
        scheme = "wss" if self.secure else "ws"
        world_path = f"{self.world}/" if self.world else ""
        url = f"{scheme}://{self.host}/{world_path}ws/"
        if self.member_key:
            url += f"?key={self.member_key}"
        return url


@dataclass(frozen=True)
class RenderConfig:
    policy: GlyphPolicy = GlyphPolicy.HALF_BLOCK
    interlace: bool = True
    frame_hz: float = 60.0
    render_hz: float = 2.0
    chunk_size: int = 450
    edit_ids: EditIdStrategy = EditIdStrategy.RANDOM_SEED


@dataclass(frozen=True)
class EmulatorConfig:
    backend: EmulatorBackend = EmulatorBackend.CYNES
    rom_url: Optional[str] = None
    fetch_timeout: float = 30.0


@dataclass(frozen=True)
class CommandConfig:
    hold_ms: int = 500
    allow_reload: bool = False


@dataclass(frozen=True)
class PadConfig:
    enabled: bool = True
    chunk_size: int = 400
    tile_row_offset: int = 0


@dataclass(frozen=True)
class ChatConfig:
    enabled: bool = True
    nickname: str = "NES"
    location: str = "page"
    color: str = "#3050f8"


@dataclass(frozen=True)
class ApiConfig:
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(frozen=True)
class LoggingConfig:
    level: LogLevel = LogLevel.INFO
    use_colors: bool = True


@dataclass(frozen=True)
class BridgeConfig:
    """Root configuration object."""
    transport: TransportConfig = field(default_factory=TransportConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    emulator: EmulatorConfig = field(default_factory=EmulatorConfig)
    commands: CommandConfig = field(default_factory=CommandConfig)
    pad: PadConfig = field(default_factory=PadConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
