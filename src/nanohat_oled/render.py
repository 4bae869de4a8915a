"""
Framebuffer Renderer
====================

Converts an 8-bit grayscale framebuffer into the controller's page-packed
1-bit RAM layout.

Input: width x height bytes, row-major, 0-255 per pixel.

Output: width x pages bytes. Byte (page, column) packs the page_height
pixels of that column, top row in bit 0:

    image row p*8+0 ──► bit 0
    image row p*8+1 ──► bit 1
          ...
    image row p*8+7 ──► bit 7

A pixel is lit when its value is greater than or equal to the threshold.

Copyright (c) 2026 NanoHat OLED Contributors
"""

from pathlib import Path
from typing import Union

from nanohat_oled.config import DEFAULT_GEOMETRY, Geometry
from nanohat_oled.errors import ImageSizeError


def render(
    image: bytes,
    threshold: int,
    geometry: Geometry = DEFAULT_GEOMETRY,
) -> bytes:
    """
    Binarize and page-pack a grayscale image.

    Args:
        image: Exactly geometry.frame_size bytes (any bytes-like object).
        threshold: Cutoff 0-255; pixel >= threshold is on.
        geometry: Panel dimensions.

    Returns:
        geometry.bitmap_size bytes, ready to stream after a cursor reset
        to (0, 0) in horizontal addressing mode.

    Raises:
        ImageSizeError: If the buffer length is wrong.
        ValueError: If threshold is outside 0-255.
    """
    if len(image) != geometry.frame_size:
        raise ImageSizeError(
            geometry.frame_size, len(image), geometry.width, geometry.height
        )
    if not 0 <= threshold <= 0xFF:
        raise ValueError(f"Threshold must be 0-255, got {threshold}")

    width = geometry.width
    page_height = geometry.page_height
    output = bytearray(geometry.bitmap_size)

    for page in range(geometry.pages):
        page_base = page * page_height * width
        out_base = page * width
        for row in range(page_height):
            row_base = page_base + row * width
            bit = 1 << row
            for column in range(width):
                if image[row_base + column] >= threshold:
                    output[out_base + column] |= bit

    return bytes(output)


def load_image(
    path: Union[str, Path],
    geometry: Geometry = DEFAULT_GEOMETRY,
) -> bytes:
    """
    Load an image file as a grayscale framebuffer for render().

    The image is converted to 8-bit grayscale and resized to the panel
    dimensions when it does not already match them.

    Args:
        path: Any file format Pillow can read.
        geometry: Panel dimensions.

    Returns:
        geometry.frame_size bytes, row-major.
    """
    from PIL import Image

    with Image.open(path) as source:
        gray = source.convert("L")
    size = (geometry.width, geometry.height)
    if gray.size != size:
        gray = gray.resize(size)
    return gray.tobytes()
