"""
I2C Bus Transport
=================

Thin adapter between the framing layer and the smbus2 library.

The controller only ever needs one bus primitive: an SMBus block write
of a mode byte followed by up to 32 payload bytes. The mode byte is the
SSD1306 "control byte" (0x00 = command stream, 0x40 = data stream) and
is sent in the position smbus2 calls the register.

Anything that provides write_block() and close() can stand in for the
real bus, which is how the test suite records traffic.

Linux Setup
-----------
- The NanoHat OLED sits on /dev/i2c-0 of NanoPi boards
- The i2c-dev kernel module must be loaded
- The user needs read/write access to the device node (i2c group)
"""

import logging
from typing import Protocol, Union

from smbus2 import SMBus

from nanohat_oled.config import OLED_ADDRESS, SMBUS_BLOCK_MAX
from nanohat_oled.errors import ConnectionError

# Configure module logger
logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Bus primitive consumed by FrameWriter."""

    def write_block(self, mode: int, payload: bytes) -> None:
        """Write mode byte plus payload as one bus transaction."""
        ...

    def close(self) -> None:
        """Release the bus."""
        ...


class SMBusTransport:
    """
    Block-write transport over a Linux I2C adapter.

    Args:
        bus: Bus number (0, 1, ...) or device path ("/dev/i2c-0").
        address: 7-bit slave address of the display.

    Raises:
        ConnectionError: If the bus cannot be opened.

    Example:
        >>> transport = SMBusTransport("/dev/i2c-0", 0x3C)
        >>> transport.write_block(0x00, b"\\xaf")  # display on
        >>> transport.close()
    """

    def __init__(self, bus: Union[int, str], address: int = OLED_ADDRESS):
        self.bus = bus
        self.address = address

        logger.info("Opening I2C bus %s (address 0x%02X)", bus, address)

        try:
            self._smbus = SMBus(bus)
        except (OSError, TypeError) as e:
            error_msg = str(e)

            if "Permission denied" in error_msg:
                raise ConnectionError(
                    f"Permission denied accessing {bus}. "
                    "You may need to add your user to the 'i2c' group: "
                    "sudo usermod -a -G i2c $USER"
                ) from e
            elif "No such file" in error_msg:
                raise ConnectionError(
                    f"I2C bus not found: {bus}. "
                    "Check that the i2c-dev module is loaded."
                ) from e
            else:
                raise ConnectionError(f"Cannot open I2C bus {bus}: {e}") from e

    def write_block(self, mode: int, payload: bytes) -> None:
        """
        Write one SMBus block.

        Args:
            mode: Control byte sent ahead of the payload.
            payload: At most 32 bytes.

        Raises:
            ValueError: If payload exceeds the SMBus block limit.
            OSError: On any bus failure (propagated from smbus2).
        """
        if len(payload) > SMBUS_BLOCK_MAX:
            raise ValueError(
                f"Block too large: {len(payload)} bytes (max {SMBUS_BLOCK_MAX})"
            )
        self._smbus.write_i2c_block_data(self.address, mode, list(payload))

    def close(self) -> None:
        """Close the bus, logging rather than raising on failure."""
        try:
            self._smbus.close()
            logger.debug("I2C bus %s closed", self.bus)
        except OSError as e:
            logger.warning("Error closing I2C bus: %s", e)
