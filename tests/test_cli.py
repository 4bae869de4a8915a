"""
CLI Tests
=========

Tests for the nanohat-oled command with the bus transport patched out.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner
from PIL import Image

from nanohat_oled.cli.oled import main
from nanohat_oled.font import bitmap
from nanohat_oled.framing import DATA_MODE


@pytest.fixture
def factory(transport, monkeypatch):
    """Patch SMBusTransport so every Oled gets the mock transport."""
    for name in ("BUS", "ADDRESS", "CONTRAST", "CHUNK_SIZE"):
        monkeypatch.delenv(f"NANOHAT_OLED_{name}", raising=False)
    with patch("nanohat_oled.display.SMBusTransport", return_value=transport) as mock:
        yield mock


@pytest.fixture
def runner():
    return CliRunner()


class TestCliBasics:
    """Version, help and global options."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "nanohat-oled" in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("init", "clear", "text", "image"):
            assert command in result.output

    def test_default_bus_and_address(self, runner, factory):
        result = runner.invoke(main, ["init"])
        assert result.exit_code == 0, result.output
        factory.assert_called_once_with("/dev/i2c-0", 0x3C)

    def test_bus_number_and_hex_address(self, runner, factory):
        result = runner.invoke(main, ["--bus", "1", "--address", "0x3d", "init"])
        assert result.exit_code == 0, result.output
        factory.assert_called_once_with(1, 0x3D)

    def test_contrast_option(self, runner, factory, transport):
        result = runner.invoke(main, ["--contrast", "0x20", "init"])
        assert result.exit_code == 0, result.output
        assert transport.command_bytes()[5:7] == [0x81, 0x20]

    @pytest.mark.parametrize("value", ["300", "bright"])
    def test_invalid_contrast(self, runner, factory, value):
        result = runner.invoke(main, ["--contrast", value, "init"])
        assert result.exit_code == 2
        factory.assert_not_called()


class TestCliCommands:
    """The init, clear, text and image commands."""

    def test_init(self, runner, factory, transport):
        result = runner.invoke(main, ["init"])
        assert result.exit_code == 0
        assert "initialized" in result.output
        assert transport.data_bytes() == bytes(1024)
        transport.close.assert_called_once()

    def test_clear_without_init(self, runner, factory, transport):
        result = runner.invoke(main, ["clear", "--no-init"])
        assert result.exit_code == 0, result.output
        assert transport.command_bytes() == [0xAE, 0xB0, 0x00, 0x10, 0xAF]

    def test_text(self, runner, factory, transport):
        result = runner.invoke(main, ["text", "Hi", "--row", "3", "--column", "2", "--no-init"])
        assert result.exit_code == 0, result.output
        assert transport.command_bytes() == [0xB3, 0x00, 0x11]
        assert transport.data_bytes() == bitmap("H") + bitmap("i")

    def test_text_with_init(self, runner, factory, transport):
        result = runner.invoke(main, ["text", "A"])
        assert result.exit_code == 0, result.output
        assert transport.data_bytes().endswith(bitmap("A"))

    def test_text_unsupported_character(self, runner, factory, transport):
        result = runner.invoke(main, ["text", "café", "--no-init"])
        assert result.exit_code == 2
        assert "No glyph" in result.output
        assert all(c.args[0] != DATA_MODE for c in transport.write_block.call_args_list)

    def test_text_row_out_of_range(self, runner, factory):
        result = runner.invoke(main, ["text", "x", "--row", "8"])
        assert result.exit_code == 2
        factory.assert_not_called()

    def test_image(self, runner, factory, transport, tmp_path):
        path = tmp_path / "white.png"
        Image.new("L", (128, 64), 255).save(path)
        result = runner.invoke(main, ["image", str(path), "--threshold", "128", "--no-init"])
        assert result.exit_code == 0, result.output
        assert transport.command_bytes() == [0xB0, 0x00, 0x10]
        assert transport.data_bytes() == b"\xff" * 1024

    def test_image_not_readable(self, runner, factory, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("not an image")
        result = runner.invoke(main, ["image", str(path)])
        assert result.exit_code == 2
        factory.assert_not_called()

    def test_image_missing_file(self, runner, factory, tmp_path):
        result = runner.invoke(main, ["image", str(tmp_path / "missing.png")])
        assert result.exit_code == 2


class TestCliErrors:
    """Device errors map to exit code 1."""

    def test_bus_write_failure(self, runner, factory, transport):
        transport.write_block.side_effect = OSError(121, "Remote I/O error")
        result = runner.invoke(main, ["init"])
        assert result.exit_code == 1
        assert "I2C error" in result.output
        transport.close.assert_called_once()

    def test_bus_open_failure(self, runner, factory):
        from nanohat_oled.errors import ConnectionError

        factory.side_effect = ConnectionError("I2C bus not found: /dev/i2c-0")
        result = runner.invoke(main, ["init"])
        assert result.exit_code == 1
        assert "not found" in result.output
