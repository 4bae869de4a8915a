"""
OLED Display Controller
=======================

Oled ties the pieces together: it owns the bus transport, the frame
writer and the cursor state, and exposes the text and image operations.

Lifecycle
---------
    UNINITIALIZED ──init()──► READY

Operations called before init() are not blocked. The commands are sent
to a panel that has not been configured yet, which does not fail but
gives an undefined picture. Likewise, cursor coordinates are not range
checked. Callers that want those guarantees wrap the driver.

Error Handling
--------------
- Invalid input (image size, missing glyph) raises before any bus write
- Bus failures raise the smbus2 OSError unchanged and abort the call;
  the display may be left half-updated, so re-run the operation or init()

Example:
    >>> with Oled.from_path("/dev/i2c-0") as oled:
    ...     oled.init()
    ...     oled.set_cursor(0, 3)
    ...     oled.put_string("Hello, world!")

Copyright (c) 2026 NanoHat OLED Contributors
"""

import dataclasses
import logging
from enum import Enum
from typing import Optional, Union

from nanohat_oled.addressing import CursorState
from nanohat_oled.commands import AddressingMode, Command, init_sequence
from nanohat_oled.config import OLED_ADDRESS, DisplayConfig
from nanohat_oled.errors import UnsupportedCharacterError
from nanohat_oled.font import bitmap
from nanohat_oled.framing import FrameWriter
from nanohat_oled.render import render
from nanohat_oled.transport import SMBusTransport, Transport

# Configure module logger
logger = logging.getLogger(__name__)


class DisplayState(Enum):
    """Driver lifecycle state."""
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class Oled:
    """
    NanoHat OLED (SSD1306, 128x64) driver.

    Args:
        bus: Bus number or device path. Ignored when transport is given.
        address: Slave address. Ignored when transport is given.
        config: Geometry and register values (default: DisplayConfig()).
        transport: Pre-opened transport, e.g. for testing.

    Raises:
        ConnectionError: If the bus cannot be opened.
    """

    def __init__(
        self,
        bus: Optional[Union[int, str]] = None,
        address: Optional[int] = None,
        config: Optional[DisplayConfig] = None,
        transport: Optional[Transport] = None,
    ):
        # Private copy; set_contrast() updates it
        self.config = dataclasses.replace(config) if config is not None else DisplayConfig()
        self.geometry = self.config.geometry

        if transport is None:
            transport = SMBusTransport(
                bus if bus is not None else self.config.bus,
                address if address is not None else self.config.address,
            )
        self.transport = transport

        self.writer = FrameWriter(transport, max_chunk=self.config.chunk_size)
        self.cursor_state = CursorState(self.writer, self.geometry)
        self.writer.on_data = self.cursor_state.advance

        self._state = DisplayState.UNINITIALIZED

    @classmethod
    def from_path(
        cls,
        path: Union[int, str],
        address: int = OLED_ADDRESS,
        config: Optional[DisplayConfig] = None,
    ) -> "Oled":
        """Open the display from its entry in the dev filesystem."""
        return cls(bus=path, address=address, config=config)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> DisplayState:
        """Lifecycle state."""
        return self._state

    @property
    def is_ready(self) -> bool:
        """True once init() has completed."""
        return self._state is DisplayState.READY

    @property
    def addressing_mode(self) -> AddressingMode:
        """Addressing mode the driver believes the controller is in."""
        return self.cursor_state.mode

    @property
    def cursor(self) -> tuple[int, int]:
        """Modelled (column, row) text cell of the write pointer."""
        return self.cursor_state.cursor

    # =========================================================================
    # Setup
    # =========================================================================

    def init(self) -> None:
        """
        Initial low-level setup for the display.

        Programs the configured register values, selects horizontal
        addressing and clears the screen.
        """
        logger.info("Initializing display (contrast 0x%02X)", self.config.contrast)
        self.writer.send_commands(*init_sequence(self.config))
        self.set_addressing_mode(AddressingMode.HORIZONTAL)
        self.clear()
        self._state = DisplayState.READY

    setup = init

    def close(self) -> None:
        """Release the bus."""
        self.transport.close()
        self._state = DisplayState.UNINITIALIZED

    def __enter__(self) -> "Oled":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Low-Level Access
    # =========================================================================

    def send_command(self, byte: int) -> None:
        """Send a command or command argument to the command parser."""
        self.writer.send_command(byte)

    def send_data(self, byte: int) -> None:
        """Send one data byte to display RAM."""
        self.writer.send_data(byte)

    def send_bulk(self, data: bytes) -> int:
        """Send a block of data to display RAM; returns the write count."""
        return self.writer.send_bulk(data)

    # =========================================================================
    # Addressing
    # =========================================================================

    def set_addressing_mode(self, mode: AddressingMode) -> None:
        """Select how the write pointer advances (default HORIZONTAL)."""
        self.cursor_state.set_addressing_mode(mode)

    def set_cursor(self, column: int, row: int) -> None:
        """
        Set the text/drawing position.

        Args:
            column: Text cell column, 0 to 15 on a 128-pixel panel.
            row: Page, 0 to 7 on a 64-pixel panel.
        """
        self.cursor_state.set_cursor(column, row)

    # =========================================================================
    # Panel Control
    # =========================================================================

    def display_on(self) -> None:
        self.writer.send_command(Command.DISPLAY_ON)

    def display_off(self) -> None:
        self.writer.send_command(Command.DISPLAY_OFF)

    def set_contrast(self, level: int) -> None:
        """Set contrast 0-255; higher is brighter."""
        if not 0 <= level <= 0xFF:
            raise ValueError(f"Contrast must be 0-255, got {level}")
        self.writer.send_commands(Command.SET_CONTRAST, level)
        self.config.contrast = level

    def set_inverse(self, inverse: bool) -> None:
        """Swap lit and unlit pixels without touching RAM."""
        self.writer.send_command(
            Command.INVERSE_DISPLAY if inverse else Command.NORMAL_DISPLAY
        )

    def set_entire_display_on(self, on: bool) -> None:
        """Light every pixel regardless of RAM, or follow RAM again."""
        self.writer.send_command(
            Command.ENTIRE_DISPLAY_ON if on else Command.CONTENT_FOLLOWS_RAM
        )

    # =========================================================================
    # Drawing
    # =========================================================================

    def clear(self) -> None:
        """
        Completely clear the display of text and images.

        The panel is switched off during the transfer so the wipe is not
        visible, and the cursor ends at (0, 0).
        """
        self.display_off()
        self._send_frame(bytes(self.geometry.bitmap_size))
        self.display_on()

    def put_char(self, char: str) -> None:
        """
        Write one character at the current position.

        Raises:
            UnsupportedCharacterError: If the character has no glyph.
                Nothing is written in that case.
        """
        glyph = bitmap(char)
        if glyph is None:
            raise UnsupportedCharacterError(char)
        self.writer.send_bulk(glyph)

    def put_string(self, text: str) -> None:
        """
        Write a string starting at the current position.

        The pointer advances per the addressing mode; long strings are
        not wrapped by the driver. Every character is checked before
        the first one is written.
        """
        for char in text:
            if bitmap(char) is None:
                raise UnsupportedCharacterError(char)
        for char in text:
            self.put_char(char)

    def draw_image(self, image: bytes, threshold: int) -> None:
        """
        Write a full-screen grayscale image.

        Args:
            image: width x height bytes, row-major.
            threshold: Pixels >= threshold are lit.

        Raises:
            ImageSizeError: If the buffer size is wrong (nothing is sent).
        """
        packed = render(image, threshold, self.geometry)
        self._send_frame(packed)

    def _send_frame(self, frame: bytes) -> None:
        """
        Stream a page-packed frame from (0, 0) in horizontal order.

        Any other addressing mode is switched to HORIZONTAL for the
        transfer and restored afterwards.
        """
        mode = self.cursor_state.mode
        if mode is not AddressingMode.HORIZONTAL:
            self.set_addressing_mode(AddressingMode.HORIZONTAL)
        self.set_cursor(0, 0)
        self.writer.send_bulk(frame)
        if mode is not AddressingMode.HORIZONTAL:
            self.set_addressing_mode(mode)
