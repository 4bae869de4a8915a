"""
SSD1306 Command Tables
======================

Every command byte the driver sends is named here. Call sites never
write raw opcode literals; a controller variant with different opcodes
substitutes this table (or a DisplayConfig) instead.

Command Format
--------------
Commands travel on the bus with the command-mode prefix (0x00). Some
commands carry their argument in the low bits of the opcode itself
(page and column address), the rest are followed by one argument byte
sent as a separate command write:

    0x81 0x7F     set contrast to 0x7F
    0x20 0x00     horizontal addressing mode
    0xB3          page address 3
    0x08 0x10     column address 8 (low nibble, then high nibble)
"""

from enum import IntEnum
from typing import Final

from nanohat_oled.config import DisplayConfig


# =============================================================================
# Addressing Modes
# =============================================================================

class AddressingMode(IntEnum):
    """
    Memory addressing modes.

    The mode decides how the controller's column/page pointers advance
    after each data byte is written.
    """

    # Each byte advances the column pointer. At the end of a page the
    # column resets to zero and the page pointer advances.
    HORIZONTAL = 0x00

    # Each byte advances the page pointer. After the last page the page
    # resets to zero and the column pointer advances.
    VERTICAL = 0x01

    # Each byte advances the column pointer. At the end of a page the
    # column wraps to zero; the page pointer never changes.
    PAGE = 0x02


# =============================================================================
# Commands
# =============================================================================

class Command(IntEnum):
    """Fixed command opcodes."""

    # Fundamental
    SET_CONTRAST = 0x81          # followed by level 0-255
    CONTENT_FOLLOWS_RAM = 0xA4   # resume RAM content display
    ENTIRE_DISPLAY_ON = 0xA5     # all pixels on, RAM ignored
    NORMAL_DISPLAY = 0xA6        # 1 = lit pixel
    INVERSE_DISPLAY = 0xA7       # 0 = lit pixel
    DISPLAY_OFF = 0xAE           # sleep mode
    DISPLAY_ON = 0xAF

    # Addressing
    SET_ADDRESSING_MODE = 0x20   # followed by AddressingMode
    SET_LOW_COLUMN = 0x00        # | low nibble of column
    SET_HIGH_COLUMN = 0x10       # | high nibble of column
    SET_PAGE_ADDRESS = 0xB0      # | page number (page addressing mode)

    # Hardware configuration
    SET_START_LINE = 0x40        # | start line 0-63
    SEGMENT_REMAP_OFF = 0xA0
    SEGMENT_REMAP_ON = 0xA1
    SET_MULTIPLEX_RATIO = 0xA8   # followed by ratio
    COM_SCAN_NORMAL = 0xC0
    COM_SCAN_REMAPPED = 0xC8
    SET_DISPLAY_OFFSET = 0xD3    # followed by offset
    SET_COM_PINS = 0xDA          # followed by configuration

    # Timing and driving
    SET_CLOCK_DIVIDER = 0xD5     # followed by divide ratio / frequency
    SET_PRECHARGE = 0xD9         # followed by period
    SET_VCOMH_DESELECT = 0xDB    # followed by level

    # Charge pump
    SET_CHARGE_PUMP = 0x8D       # followed by 0x14 (on) or 0x10 (off)


# Mask for the argument carried in the low bits of an opcode
NIBBLE_MASK: Final[int] = 0x0F


def init_sequence(config: DisplayConfig) -> list[int]:
    """
    Build the power-on configuration sequence.

    The sequence leaves the panel switched on. Addressing mode is set
    separately by the controller so that its remembered state stays in
    step with the device.

    Args:
        config: Register values to program.

    Returns:
        Command bytes in transmission order.
    """
    return [
        Command.DISPLAY_OFF,
        Command.SET_LOW_COLUMN,
        Command.SET_HIGH_COLUMN,
        Command.SET_START_LINE,
        Command.SET_PAGE_ADDRESS,
        Command.SET_CONTRAST, config.contrast,
        Command.SEGMENT_REMAP_ON if config.segment_remap else Command.SEGMENT_REMAP_OFF,
        Command.NORMAL_DISPLAY,
        Command.SET_MULTIPLEX_RATIO, config.multiplex_ratio,
        Command.COM_SCAN_REMAPPED if config.com_scan_remapped else Command.COM_SCAN_NORMAL,
        Command.SET_DISPLAY_OFFSET, config.display_offset,
        Command.SET_CLOCK_DIVIDER, config.clock_divider,
        Command.SET_PRECHARGE, config.precharge_period,
        Command.SET_COM_PINS, config.com_pins,
        Command.SET_VCOMH_DESELECT, config.vcomh_deselect,
        Command.SET_CHARGE_PUMP, config.charge_pump,
        Command.DISPLAY_ON,
    ]
