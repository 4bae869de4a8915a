"""
Command/Data Framing
====================

Every transaction sent to the controller is a mode byte followed by a
payload:

    ┌───────────┬──────────────────────┐
    │ Mode byte │ Payload              │
    │ 00 or 40  │ 1 to MAX_CHUNK bytes │
    └───────────┴──────────────────────┘

- 0x00 (COMMAND_MODE): payload goes to the command parser
- 0x40 (DATA_MODE): payload goes to display RAM at the current pointer

SMBus limits a block write to 32 bytes, so long data streams are cut
into chunks of at most MAX_CHUNK bytes and written in order. Nothing is
buffered beyond a single chunk, nothing is coalesced across calls, and
nothing is retried: the first failing write aborts the stream and its
exception reaches the caller unchanged.
"""

import logging
from typing import Callable, Final, Iterator, Optional

from nanohat_oled.config import DEFAULT_CHUNK_SIZE
from nanohat_oled.transport import Transport

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Protocol Constants
# =============================================================================

# Prefix for sending a command
COMMAND_MODE: Final[int] = 0x00

# Prefix for sending bitmap data
DATA_MODE: Final[int] = 0x40

# Default payload ceiling per block write
MAX_CHUNK: Final[int] = DEFAULT_CHUNK_SIZE


def chunk(data: bytes, size: int = MAX_CHUNK) -> Iterator[bytes]:
    """
    Split data into consecutive slices of at most size bytes.

    Args:
        data: Payload to split.
        size: Maximum slice length (must be positive).

    Yields:
        Slices in original order; nothing for empty data.

    Example:
        >>> [len(c) for c in chunk(bytes(70), 31)]
        [31, 31, 8]
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    view = bytes(data)
    for start in range(0, len(view), size):
        yield view[start:start + size]


def _to_byte(value: int) -> int:
    byte = int(value)
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"Value out of byte range: {value}")
    return byte


class FrameWriter:
    """
    Ordered, bounded writer for controller commands and data.

    Attributes:
        transport: Bus the frames are written to
        max_chunk: Maximum payload bytes per data write
        on_data: Optional callback invoked with the byte count after
                 every successful data write

    Example:
        >>> writer = FrameWriter(transport)
        >>> writer.send_command(Command.DISPLAY_ON)
        >>> writer.send_bulk(glyph)
    """

    def __init__(
        self,
        transport: Transport,
        max_chunk: int = MAX_CHUNK,
        on_data: Optional[Callable[[int], None]] = None,
    ):
        if max_chunk <= 0:
            raise ValueError(f"max_chunk must be positive, got {max_chunk}")
        self.transport = transport
        self.max_chunk = max_chunk
        self.on_data = on_data

    def send_command(self, byte: int) -> None:
        """
        Send a command or command argument to the command parser.

        Args:
            byte: Opcode or argument (int or Command/AddressingMode member).

        Raises:
            ValueError: If byte is outside 0-255 (nothing is sent).
        """
        value = _to_byte(byte)
        logger.debug("TX CMD %02X", value)
        self.transport.write_block(COMMAND_MODE, bytes([value]))

    def send_commands(self, *values: int) -> None:
        """Send several command bytes, one transaction each, in order."""
        payload = [_to_byte(value) for value in values]
        for value in payload:
            logger.debug("TX CMD %02X", value)
            self.transport.write_block(COMMAND_MODE, bytes([value]))

    def send_data(self, byte: int) -> None:
        """
        Send a single data byte to display RAM.

        The LSB lands on the top row of the current page and the MSB on
        the bottom row; the controller then advances its pointer according
        to the active addressing mode.
        """
        value = _to_byte(byte)
        logger.debug("TX DATA %02X", value)
        self.transport.write_block(DATA_MODE, bytes([value]))
        self._notify(1)

    def send_bulk(self, data: bytes) -> int:
        """
        Send a block of data to display RAM in MAX_CHUNK slices.

        Args:
            data: Bytes to write, in RAM order.

        Returns:
            Number of bus writes issued.

        Raises:
            OSError: From the transport; remaining chunks are not sent.
        """
        writes = 0
        for piece in chunk(data, self.max_chunk):
            self.transport.write_block(DATA_MODE, piece)
            writes += 1
            self._notify(len(piece))
        logger.debug("TX DATA %d bytes in %d writes", len(data), writes)
        return writes

    def _notify(self, count: int) -> None:
        if self.on_data is not None:
            self.on_data(count)
