"""
Tests for YAML configuration loading.
"""

import pytest

from owotnes.managers.config_manager import ConfigManager
from owotnes.models.enums import EditIdStrategy, EmulatorBackend, GlyphPolicy, LogLevel
from owotnes.models.errors import ConfigError


def write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


class TestBundledConfig:

    def test_bundled_config_loads(self):
        config = ConfigManager(environ={}).load()
        assert config.render.policy is GlyphPolicy.HALF_BLOCK
        assert config.render.chunk_size == 450
        assert config.pad.chunk_size == 400
        assert config.commands.hold_ms == 500
        assert config.transport.url == "wss://ourworldoftext.com/owotness/ws/"

    def test_factory_defaults_load(self):
        config = ConfigManager("config/factory_defaults.yaml", environ={}).load()
        assert config.emulator.backend is EmulatorBackend.PATTERN


class TestParsing:

    def test_values_and_enums(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
transport:
  world: myworld
  member_key: secret
render:
  policy: octant
  interlace: false
  edit_ids: counter
emulator:
  backend: pattern
logging:
  level: DEBUG
""")
        config = ConfigManager(path, environ={}).load()
        assert config.render.policy is GlyphPolicy.OCTANT
        assert config.render.interlace is False
        assert config.render.edit_ids is EditIdStrategy.COUNTER
        assert config.emulator.backend is EmulatorBackend.PATTERN
        assert config.logging.level is LogLevel.DEBUG
        assert config.transport.url == "wss://ourworldoftext.com/myworld/ws/?key=secret"
        assert config.transport.origin == "https://ourworldoftext.com"

    def test_include_directive(self, tmp_path):
        write(tmp_path / "render.yaml", "render:\n  policy: octant\n")
        write(tmp_path / "transport.yaml", "transport:\n  world: ''\n")
        path = write(tmp_path / "config.yaml", "include:\n  - render.yaml\n  - transport.yaml\n")

        config = ConfigManager(path, environ={}).load()
        assert config.render.policy is GlyphPolicy.OCTANT
        assert config.transport.url == "wss://ourworldoftext.com/ws/"

    def test_missing_file_falls_back_to_factory_defaults(self, tmp_path):
        config = ConfigManager(tmp_path / "nope.yaml", environ={}).load()
        assert config.emulator.backend is EmulatorBackend.PATTERN

    @pytest.mark.parametrize("text", [
        "render:\n  policy: hexagon\n",
        "render:\n  chunk_size: 0\n",
        "transport:\n  reconnect_delay: soon\n",
        "render: [1, 2]\n",
    ])
    def test_invalid_values_raise(self, tmp_path, text):
        path = write(tmp_path / "config.yaml", text)
        with pytest.raises(ConfigError):
            ConfigManager(path, environ={}).load()


class TestEnvironment:

    def test_overrides(self, tmp_path):
        path = write(tmp_path / "config.yaml", "emulator:\n  rom_url: https://a/x.nes\n")
        env = {"WORLD_NAME": "arcade", "MEMBER_KEY": "k", "ROM_URL": "https://b/y.nes"}
        config = ConfigManager(path, environ=env).load()
        assert config.transport.world == "arcade"
        assert config.transport.member_key == "k"
        assert config.emulator.rom_url == "https://b/y.nes"

    def test_config_path_from_environment(self, tmp_path):
        path = write(tmp_path / "alt.yaml", "render:\n  policy: octant\n")
        config = ConfigManager(environ={"OWOTNES_CONFIG": str(path)}).load()
        assert config.render.policy is GlyphPolicy.OCTANT
