#!/usr/bin/env python3
"""
NanoHat OLED Hello World
========================

Initializes the display on /dev/i2c-0 and prints a greeting.

Usage:
    python examples/hello.py
"""

from nanohat_oled import Oled


def main():
    with Oled.from_path("/dev/i2c-0") as oled:
        oled.init()
        oled.put_string("Hello, world!")


if __name__ == "__main__":
    main()
