"""
Configuration Tests
===================

Tests for geometry, DisplayConfig validation, environment overrides and
the init sequence built from a configuration.
"""

import pytest

from nanohat_oled.commands import Command, init_sequence
from nanohat_oled.config import (
    DEFAULT_GEOMETRY,
    OLED_ADDRESS,
    OLED_HEIGHT,
    OLED_WIDTH,
    DisplayConfig,
    Geometry,
)


class TestGeometry:
    """Tests for Geometry."""

    def test_defaults(self):
        assert DEFAULT_GEOMETRY.width == OLED_WIDTH == 128
        assert DEFAULT_GEOMETRY.height == OLED_HEIGHT == 64
        assert DEFAULT_GEOMETRY.pages == 8
        assert DEFAULT_GEOMETRY.frame_size == 8192
        assert DEFAULT_GEOMETRY.bitmap_size == 1024
        assert DEFAULT_GEOMETRY.text_columns == 16

    def test_height_must_be_page_multiple(self):
        with pytest.raises(ValueError, match="multiple"):
            Geometry(height=60)

    @pytest.mark.parametrize("kwargs", [{"width": 0}, {"height": -8}, {"page_height": 0}])
    def test_positive_dimensions(self, kwargs):
        with pytest.raises(ValueError):
            Geometry(**kwargs)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_GEOMETRY.width = 64


class TestDisplayConfig:
    """Tests for DisplayConfig."""

    def test_defaults(self):
        config = DisplayConfig()
        assert config.bus == "/dev/i2c-0"
        assert config.address == OLED_ADDRESS == 0x3C
        assert config.contrast == 0x7F
        assert config.chunk_size == 31
        assert config.multiplex_ratio == 63

    def test_multiplex_follows_height(self):
        config = DisplayConfig(geometry=Geometry(height=32))
        assert config.multiplex_ratio == 31

    def test_explicit_multiplex(self):
        assert DisplayConfig(multiplex_ratio=0x1F).multiplex_ratio == 0x1F

    @pytest.mark.parametrize("size", [0, 33])
    def test_invalid_chunk_size(self, size):
        with pytest.raises(ValueError, match="chunk_size"):
            DisplayConfig(chunk_size=size)

    @pytest.mark.parametrize("name", ["contrast", "clock_divider", "charge_pump"])
    def test_register_values_are_bytes(self, name):
        with pytest.raises(ValueError, match=name):
            DisplayConfig(**{name: 0x100})


class TestFromEnv:
    """Tests for DisplayConfig.from_env()."""

    def test_no_environment(self, monkeypatch):
        for name in ("BUS", "ADDRESS", "CONTRAST", "CHUNK_SIZE"):
            monkeypatch.delenv(f"NANOHAT_OLED_{name}", raising=False)
        assert DisplayConfig.from_env() == DisplayConfig()

    def test_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("NANOHAT_OLED_BUS", "1")
        monkeypatch.setenv("NANOHAT_OLED_ADDRESS", "0x3D")
        monkeypatch.setenv("NANOHAT_OLED_CONTRAST", "32")
        monkeypatch.setenv("NANOHAT_OLED_CHUNK_SIZE", "16")
        config = DisplayConfig.from_env()
        assert config.bus == 1
        assert config.address == 0x3D
        assert config.contrast == 32
        assert config.chunk_size == 16

    def test_bus_path(self, monkeypatch):
        monkeypatch.setenv("NANOHAT_OLED_BUS", "/dev/i2c-7")
        assert DisplayConfig.from_env().bus == "/dev/i2c-7"

    def test_invalid_values_ignored(self, monkeypatch):
        monkeypatch.setenv("NANOHAT_OLED_CONTRAST", "bright")
        assert DisplayConfig.from_env().contrast == 0x7F

    def test_overrides_take_precedence(self, monkeypatch):
        monkeypatch.setenv("NANOHAT_OLED_CONTRAST", "32")
        assert DisplayConfig.from_env(contrast=200).contrast == 200


class TestInitSequence:
    """Tests for init_sequence()."""

    def test_starts_off_ends_on(self):
        sequence = init_sequence(DisplayConfig())
        assert sequence[0] == Command.DISPLAY_OFF
        assert sequence[-1] == Command.DISPLAY_ON

    def test_unremapped_panel(self):
        sequence = init_sequence(DisplayConfig(segment_remap=False, com_scan_remapped=False))
        assert Command.SEGMENT_REMAP_OFF in sequence
        assert Command.COM_SCAN_NORMAL in sequence
        assert Command.SEGMENT_REMAP_ON not in sequence

    def test_argument_follows_opcode(self):
        sequence = init_sequence(DisplayConfig(precharge_period=0x22))
        index = sequence.index(Command.SET_PRECHARGE)
        assert sequence[index + 1] == 0x22
