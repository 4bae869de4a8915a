"""
NanoHat OLED Error Hierarchy
============================

This module defines the exception hierarchy for the OLED driver.
All exceptions inherit from OledError, allowing callers to catch all
driver-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
OledError (base)
├── InvalidInputError (caller supplied data the display cannot show)
│   ├── ImageSizeError - image buffer is not exactly width x height bytes
│   └── UnsupportedCharacterError - no glyph for the character
└── BusError (I2C bus access)
    └── ConnectionError - bus device cannot be opened

Transport Failures
------------------
Failures of individual bus writes (NACK, I/O fault, device unplugged)
surface as the OSError raised by smbus2. They are NOT wrapped: the
framing layer propagates them unmodified and aborts the current
operation. Only opening the bus is translated into ConnectionError,
because that is where a helpful hint (permissions, wrong bus number)
makes a difference.

Invalid input is always detected before the first byte is put on the
bus, so an InvalidInputError never leaves the display half-drawn.

Copyright (c) 2026 NanoHat OLED Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class OledError(Exception):
    """
    Base exception for all OLED driver errors.

        try:
            oled.put_string("Hello")
        except OledError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Invalid Input Exceptions
# =============================================================================

class InvalidInputError(OledError):
    """Base exception for data the display cannot render."""
    pass


class ImageSizeError(InvalidInputError):
    """
    Image buffer has the wrong length.

    Full-frame images must be exactly width x height bytes, one byte
    per pixel in row-major order.

    Attributes:
        expected: Required buffer length in bytes
        actual: Length of the buffer that was supplied
    """

    def __init__(
        self,
        expected: int,
        actual: int,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ):
        self.expected = expected
        self.actual = actual
        if width is not None and height is not None:
            message = (
                f"Image dimensions must be {width}x{height} "
                f"({expected} bytes), got {actual} bytes"
            )
        else:
            message = f"Image must be {expected} bytes, got {actual} bytes"
        super().__init__(message)


class UnsupportedCharacterError(InvalidInputError):
    """
    Character has no glyph in the built-in font.

    Only printable ASCII (space through tilde) can be rendered.
    """

    def __init__(self, char: str, message: str = ""):
        self.char = char
        if not message:
            message = f"No glyph for character {char!r}; only printable ASCII is supported"
        super().__init__(message)


# =============================================================================
# Bus Exceptions
# =============================================================================

class BusError(OledError):
    """Base exception for I2C bus access errors."""
    pass


class ConnectionError(BusError):
    """
    Cannot open the I2C bus.

    Raised when:
    - Bus device node not found
    - Permission denied
    - Invalid bus number or path

    Note:
        This is a driver-specific ConnectionError, distinct from the
        Python builtin. Import it as OledConnectionError from the
        package root to avoid confusion.
    """
    pass
