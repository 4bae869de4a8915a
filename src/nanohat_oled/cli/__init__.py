"""
NanoHat OLED Command-Line Interface
===================================

This package provides the `nanohat-oled` tool for driving the display
from a shell: initialize it, clear it, print text and show images.

The tool is implemented as a Click-based CLI application with
consistent error reporting and exit codes.
"""

__all__ = ["main"]
