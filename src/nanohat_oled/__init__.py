"""
NanoHat OLED - Driver for SSD1306 I2C Dot-Matrix Displays
=========================================================

This package drives the FriendlyELEC NanoHat OLED module, a 128x64
monochrome panel behind an SSD1306 controller on the I2C bus. It can
initialize the panel, position a text cursor, print ASCII text with a
built-in 8x8 font, and push full-screen grayscale images as 1-bit
bitmaps.

Main Components
---------------
- **display**: Oled controller (init, clear, text, images)
- **render**: Grayscale to page-packed bitmap conversion
- **font**: Built-in glyph table for printable ASCII
- **framing**: Chunked command/data writes within the SMBus block limit
- **addressing**: Addressing mode and cursor model
- **transport**: smbus2 bus adapter
- **config**: Geometry and initialization register values

Quick Start
-----------
Print a greeting:
    >>> from nanohat_oled import Oled
    >>> oled = Oled.from_path("/dev/i2c-0")
    >>> oled.init()
    >>> oled.put_string("Hello, world!")

Show a picture:
    >>> from nanohat_oled import load_image
    >>> oled.draw_image(load_image("logo.png"), threshold=128)

Or use the command-line tool:
    $ nanohat-oled text "Hello, world!"
    $ nanohat-oled image logo.png --threshold 128

Thread Safety
-------------
The driver is NOT thread-safe. Use an Oled instance from a single
thread, or protect all calls with external synchronization.
"""

__version__ = "0.1.0"
__author__ = "NanoHat OLED Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from nanohat_oled.addressing import CursorState, cursor_commands
from nanohat_oled.commands import AddressingMode, Command, init_sequence
from nanohat_oled.config import (
    DEFAULT_GEOMETRY,
    OLED_ADDRESS,
    OLED_HEIGHT,
    OLED_PAGE_HEIGHT,
    OLED_WIDTH,
    DisplayConfig,
    Geometry,
)
from nanohat_oled.display import DisplayState, Oled
from nanohat_oled.errors import (
    BusError,
    ConnectionError as OledConnectionError,  # Avoid collision with builtin
    ImageSizeError,
    InvalidInputError,
    OledError,
    UnsupportedCharacterError,
)
from nanohat_oled.font import GLYPH_WIDTH, bitmap, is_renderable
from nanohat_oled.framing import COMMAND_MODE, DATA_MODE, MAX_CHUNK, FrameWriter, chunk
from nanohat_oled.render import load_image, render
from nanohat_oled.transport import SMBusTransport, Transport

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Controller
    "Oled",
    "DisplayState",
    # Configuration
    "DisplayConfig",
    "Geometry",
    "DEFAULT_GEOMETRY",
    "OLED_WIDTH",
    "OLED_HEIGHT",
    "OLED_PAGE_HEIGHT",
    "OLED_ADDRESS",
    # Commands
    "AddressingMode",
    "Command",
    "init_sequence",
    # Cursor
    "CursorState",
    "cursor_commands",
    # Framing
    "FrameWriter",
    "chunk",
    "COMMAND_MODE",
    "DATA_MODE",
    "MAX_CHUNK",
    # Transport
    "Transport",
    "SMBusTransport",
    # Rendering
    "render",
    "load_image",
    # Font
    "bitmap",
    "is_renderable",
    "GLYPH_WIDTH",
    # Exception hierarchy
    "OledError",
    "InvalidInputError",
    "ImageSizeError",
    "UnsupportedCharacterError",
    "BusError",
    "OledConnectionError",
]
