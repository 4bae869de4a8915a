"""
Shared Test Fixtures
====================

The display is never touched by the test suite. A recording transport
stands in for the I2C bus and logs every block write, so tests assert on
the exact command/data byte stream the driver emits.

Copyright (c) 2026 NanoHat OLED Contributors
"""

from unittest.mock import Mock

import pytest

from nanohat_oled.framing import COMMAND_MODE, DATA_MODE


class RecordingTransport:
    """
    Transport double whose write_block and close are Mocks.

    Set write_block.side_effect to simulate bus failures.
    """

    def __init__(self) -> None:
        self.write_block = Mock()
        self.close = Mock()

    def writes(self) -> list[tuple[int, bytes]]:
        """All (mode, payload) pairs written so far, in order."""
        return [
            (call.args[0], bytes(call.args[1]))
            for call in self.write_block.call_args_list
        ]

    def command_bytes(self) -> list[int]:
        """Flattened command-mode payload bytes."""
        return [b for mode, payload in self.writes() if mode == COMMAND_MODE for b in payload]

    def data_bytes(self) -> bytes:
        """Concatenated data-mode payloads."""
        return b"".join(payload for mode, payload in self.writes() if mode == DATA_MODE)


@pytest.fixture
def transport() -> RecordingTransport:
    """Fixture: recording transport."""
    return RecordingTransport()
