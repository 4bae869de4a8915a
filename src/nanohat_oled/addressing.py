"""
Cursor and Addressing State
===========================

The controller keeps its column and page pointers in hardware and the
driver cannot read them back. CursorState is the driver's model of those
pointers: it emits the positioning commands and then mirrors what a
correct controller does with every data byte that follows.

Pointer Advance
---------------
    HORIZONTAL   column += 1; past the last column -> column 0, page += 1
    VERTICAL     page += 1;   past the last page   -> page 0, column += 1
    PAGE         column += 1; past the last column -> column 0, same page

Text Cells
----------
Text positions are 8-pixel-wide cells, so cell (column, row) starts at
pixel column 8 * column of page row. Coordinates are not range checked:
out-of-range values are a caller error and the device behavior is
undefined.

Copyright (c) 2026 NanoHat OLED Contributors
"""

import logging
from typing import Optional

from nanohat_oled.commands import NIBBLE_MASK, AddressingMode, Command
from nanohat_oled.config import DEFAULT_GEOMETRY, Geometry
from nanohat_oled.framing import FrameWriter

# Configure module logger
logger = logging.getLogger(__name__)

# Pixel columns per text cell
CELL_WIDTH = 8


def cursor_commands(column: int, row: int) -> tuple[int, int, int]:
    """
    Compute the command bytes that move the pointer to a text cell.

    Returns:
        (page address, low column nibble, high column nibble)

    Example:
        >>> [hex(b) for b in cursor_commands(3, 2)]
        ['0xb2', '0x8', '0x11']
    """
    pixel_column = CELL_WIDTH * column
    return (
        Command.SET_PAGE_ADDRESS + row,
        Command.SET_LOW_COLUMN + (pixel_column & NIBBLE_MASK),
        Command.SET_HIGH_COLUMN + ((pixel_column >> 4) & NIBBLE_MASK),
    )


class CursorState:
    """
    Addressing mode and pointer mirror for one display.

    Args:
        writer: Frame writer used to emit positioning commands.
        geometry: Panel dimensions used for wrap-around.
        mode: Mode the device is assumed to be in.
    """

    def __init__(
        self,
        writer: FrameWriter,
        geometry: Geometry = DEFAULT_GEOMETRY,
        mode: AddressingMode = AddressingMode.HORIZONTAL,
    ):
        self.writer = writer
        self.geometry = geometry
        self._mode = mode
        self._pixel_column = 0
        self._page = 0

    @property
    def mode(self) -> AddressingMode:
        """Active addressing mode."""
        return self._mode

    @property
    def pixel_column(self) -> int:
        """Modelled column pointer, in pixels."""
        return self._pixel_column

    @property
    def page(self) -> int:
        """Modelled page pointer."""
        return self._page

    @property
    def cursor(self) -> tuple[int, int]:
        """Modelled position as a (column, row) text cell."""
        return (self._pixel_column // CELL_WIDTH, self._page)

    def set_addressing_mode(self, mode: AddressingMode) -> None:
        """
        Select how the pointer advances after each data byte.

        Sends the mode-select command followed by the mode byte, then
        records the new mode.
        """
        mode = AddressingMode(mode)
        self.writer.send_command(Command.SET_ADDRESSING_MODE)
        self.writer.send_command(mode)
        self._mode = mode
        logger.debug("Addressing mode set to %s", mode.name)

    def set_cursor(self, column: int, row: int) -> None:
        """
        Move the write pointer to text cell (column, row).

        Args:
            column: Cell column, 0 to width/8 - 1.
            row: Page, 0 to pages - 1.
        """
        self.writer.send_commands(*cursor_commands(column, row))
        self._pixel_column = CELL_WIDTH * column
        self._page = row

    def reset(self, mode: Optional[AddressingMode] = None) -> None:
        """Forget the pointer position without touching the bus."""
        self._pixel_column = 0
        self._page = 0
        if mode is not None:
            self._mode = AddressingMode(mode)

    def advance(self, count: int) -> None:
        """Mirror the pointer movement for count data bytes."""
        width = self.geometry.width
        pages = self.geometry.pages

        if self._mode == AddressingMode.HORIZONTAL:
            linear = self._page * width + self._pixel_column + count
            self._page, self._pixel_column = divmod(linear % (width * pages), width)
        elif self._mode == AddressingMode.VERTICAL:
            linear = self._pixel_column * pages + self._page + count
            self._pixel_column, self._page = divmod(linear % (width * pages), pages)
        else:
            self._pixel_column = (self._pixel_column + count) % width
