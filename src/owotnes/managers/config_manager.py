"""
Config Manager

Loads config.yaml (with include: support), falls back to factory defaults,
applies environment overrides and builds the typed BridgeConfig.
"""

import os
import yaml
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from owotnes.models.config import (
    ApiConfig,
    BridgeConfig,
    ChatConfig,
    CommandConfig,
    EmulatorConfig,
    LoggingConfig,
    PadConfig,
    RenderConfig,
    TransportConfig,
)
from owotnes.models.enums import EditIdStrategy, EmulatorBackend, GlyphPolicy, LogCategory, LogLevel
from owotnes.models.errors import ConfigError
from owotnes.utils.enum_helper import EnumHelper
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

PACKAGE_DIR = Path(__file__).resolve().parent.parent

# Environment overrides, mostly for container deployments
ENV_WORLD = "WORLD_NAME"
ENV_MEMBER_KEY = "MEMBER_KEY"
ENV_ROM_URL = "ROM_URL"
ENV_CONFIG = "OWOTNES_CONFIG"


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes the include: directive to merge modular
    YAML files. Falls back to factory_defaults.yaml if the main file cannot
    be loaded.

    Example:
        manager = ConfigManager()
        config = manager.load()

        config.render.policy        # GlyphPolicy.HALF_BLOCK
        config.transport.url        # wss://ourworldoftext.com/owotness/ws/
    """

    def __init__(
        self,
        config_path: Union[str, Path, None] = None,
        defaults_path: Union[str, Path] = "config/factory_defaults.yaml",
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (absolute, or relative to the package);
                defaults to $OWOTNES_CONFIG or config/config.yaml
            defaults_path: Path to factory defaults fallback
            environ: Environment mapping used for overrides (defaults to os.environ)
        """
        self.environ = os.environ if environ is None else environ
        self.config_path = Path(config_path or self.environ.get(ENV_CONFIG) or "config/config.yaml")
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: Optional[BridgeConfig] = None

    @staticmethod
    def _resolve(path: Path) -> Path:
        return path if path.is_absolute() else PACKAGE_DIR / path

    def load(self) -> BridgeConfig:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Fallback to factory defaults on failure
        4. Apply environment overrides
        5. Build typed BridgeConfig

        Raises:
            ConfigError: If values are present but invalid
        """
        try:
            full_path = self._resolve(self.config_path)
            self.data = self._read_yaml(full_path)

            if "include" in self.data:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(self.data["include"], full_path.parent)
            else:
                log.info("Using monolithic configuration", path=str(full_path))

        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.data = self._read_yaml(self._resolve(self.factory_defaults_path))

        self.config = self._apply_environment(self._build_config(self.data))
        log.info(
            "Configuration ready",
            world=self.config.transport.world,
            policy=self.config.render.policy.name,
            backend=self.config.emulator.backend.name,
        )
        return self.config

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data or {}

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["render.yaml", "transport.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                file_data = self._read_yaml(filepath)
                if file_data:
                    merged.update(file_data)
                    log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    # ===== Parsing =====

    @staticmethod
    def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"Section '{name}' must be a mapping", details={"section": name})
        return section

    @staticmethod
    def _enum(enum_class, value, section: str, key: str):
        try:
            return EnumHelper.to_enum(enum_class, value)
        except (ValueError, TypeError) as ex:
            raise ConfigError(str(ex), details={"section": section, "key": key}) from ex

    @staticmethod
    def _positive(value, section: str, key: str, cast=float):
        try:
            number = cast(value)
        except (TypeError, ValueError) as ex:
            raise ConfigError(f"{section}.{key} must be a number", details={"value": value}) from ex
        if number <= 0:
            raise ConfigError(f"{section}.{key} must be positive", details={"value": value})
        return number

    def _build_config(self, data: Dict[str, Any]) -> BridgeConfig:
        t = self._section(data, "transport")
        r = self._section(data, "render")
        e = self._section(data, "emulator")
        c = self._section(data, "commands")
        p = self._section(data, "pad")
        ch = self._section(data, "chat")
        a = self._section(data, "api")
        lg = self._section(data, "logging")

        defaults = BridgeConfig()

        transport = TransportConfig(
            host=t.get("host", defaults.transport.host),
            world=t.get("world", defaults.transport.world) or "",
            member_key=t.get("member_key") or None,
            secure=bool(t.get("secure", defaults.transport.secure)),
            reconnect_delay=self._positive(
                t.get("reconnect_delay", defaults.transport.reconnect_delay), "transport", "reconnect_delay"
            ),
            fatal_on_close=bool(t.get("fatal_on_close", defaults.transport.fatal_on_close)),
        )

        render = RenderConfig(
            policy=self._enum(GlyphPolicy, r.get("policy", "half_block"), "render", "policy"),
            interlace=bool(r.get("interlace", defaults.render.interlace)),
            frame_hz=self._positive(r.get("frame_hz", defaults.render.frame_hz), "render", "frame_hz"),
            render_hz=self._positive(r.get("render_hz", defaults.render.render_hz), "render", "render_hz"),
            chunk_size=self._positive(r.get("chunk_size", defaults.render.chunk_size), "render", "chunk_size", int),
            edit_ids=self._enum(EditIdStrategy, r.get("edit_ids", "random_seed"), "render", "edit_ids"),
        )

        emulator = EmulatorConfig(
            backend=self._enum(EmulatorBackend, e.get("backend", "cynes"), "emulator", "backend"),
            rom_url=e.get("rom_url") or None,
            fetch_timeout=self._positive(
                e.get("fetch_timeout", defaults.emulator.fetch_timeout), "emulator", "fetch_timeout"
            ),
        )

        commands = CommandConfig(
            hold_ms=self._positive(c.get("hold_ms", defaults.commands.hold_ms), "commands", "hold_ms", int),
            allow_reload=bool(c.get("allow_reload", defaults.commands.allow_reload)),
        )

        pad = PadConfig(
            enabled=bool(p.get("enabled", defaults.pad.enabled)),
            chunk_size=self._positive(p.get("chunk_size", defaults.pad.chunk_size), "pad", "chunk_size", int),
            tile_row_offset=int(p.get("tile_row_offset", defaults.pad.tile_row_offset)),
        )

        chat = ChatConfig(
            enabled=bool(ch.get("enabled", defaults.chat.enabled)),
            nickname=str(ch.get("nickname", defaults.chat.nickname)),
            location=str(ch.get("location", defaults.chat.location)),
            color=str(ch.get("color", defaults.chat.color)),
        )

        api = ApiConfig(
            enabled=bool(a.get("enabled", defaults.api.enabled)),
            host=str(a.get("host", defaults.api.host)),
            port=self._positive(a.get("port", defaults.api.port), "api", "port", int),
        )

        logging_cfg = LoggingConfig(
            level=self._enum(LogLevel, lg.get("level", "info"), "logging", "level"),
            use_colors=bool(lg.get("use_colors", defaults.logging.use_colors)),
        )

        return BridgeConfig(
            transport=transport,
            render=render,
            emulator=emulator,
            commands=commands,
            pad=pad,
            chat=chat,
            api=api,
            logging=logging_cfg,
        )

    def _apply_environment(self, config: BridgeConfig) -> BridgeConfig:
        """WORLD_NAME / MEMBER_KEY / ROM_URL take precedence over YAML."""
        transport = config.transport
        emulator = config.emulator

        if self.environ.get(ENV_WORLD):
            transport = replace(transport, world=self.environ[ENV_WORLD])
            log.debug("World overridden from environment", world=transport.world)
        if self.environ.get(ENV_MEMBER_KEY):
            transport = replace(transport, member_key=self.environ[ENV_MEMBER_KEY])
            log.debug("Member key provided via environment")
        if self.environ.get(ENV_ROM_URL):
            emulator = replace(emulator, rom_url=self.environ[ENV_ROM_URL])
            log.debug("ROM URL overridden from environment")

        return replace(config, transport=transport, emulator=emulator)
