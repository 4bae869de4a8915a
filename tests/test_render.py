"""
Framebuffer Renderer Tests
==========================

Tests for grayscale to page-packed bitmap conversion and the Pillow
image loader.
"""

import random

import pytest
from PIL import Image

from nanohat_oled.config import DEFAULT_GEOMETRY, Geometry
from nanohat_oled.errors import ImageSizeError, InvalidInputError
from nanohat_oled.render import load_image, render

WIDTH = DEFAULT_GEOMETRY.width
HEIGHT = DEFAULT_GEOMETRY.height
FRAME = WIDTH * HEIGHT
BITMAP = WIDTH * DEFAULT_GEOMETRY.pages


def pixel_image(*lit: tuple[int, int], value: int = 255) -> bytearray:
    """Black frame with the given (x, y) pixels set to value."""
    image = bytearray(FRAME)
    for x, y in lit:
        image[y * WIDTH + x] = value
    return image


# =============================================================================
# Size and Scenario Tests
# =============================================================================

class TestRenderBasics:
    """Output size and whole-frame scenarios."""

    def test_output_size(self):
        assert len(render(bytes(FRAME), 128)) == BITMAP

    @pytest.mark.parametrize("threshold", [1, 100, 255])
    def test_all_black(self, threshold):
        """All-zero image with threshold > 0 is all-zero bitmap."""
        assert render(bytes(FRAME), threshold) == bytes(BITMAP)

    def test_all_white(self):
        """All-255 image with threshold 1 fills every bit."""
        assert render(b"\xff" * FRAME, 1) == b"\xff" * BITMAP

    def test_threshold_zero_lights_everything(self):
        assert render(bytes(FRAME), 0) == b"\xff" * BITMAP

    def test_returns_bytes(self):
        assert isinstance(render(bytes(FRAME), 1), bytes)


# =============================================================================
# Bit Placement Tests
# =============================================================================

class TestBitPlacement:
    """Each source pixel maps to one bit of the packed output."""

    def test_top_left_pixel(self):
        out = render(pixel_image((0, 0)), 128)
        assert out[0] == 0x01
        assert sum(out) == 0x01

    def test_bottom_row_of_page_is_msb(self):
        out = render(pixel_image((0, 7)), 128)
        assert out[0] == 0x80

    def test_second_page(self):
        # Row 9 is row 1 of page 1
        out = render(pixel_image((5, 9)), 128)
        assert out[WIDTH + 5] == 0x02
        assert sum(out) == 0x02

    def test_bottom_right_pixel(self):
        out = render(pixel_image((WIDTH - 1, HEIGHT - 1)), 128)
        assert out[-1] == 0x80

    def test_full_column_of_page(self):
        out = render(pixel_image(*[(10, y) for y in range(16, 24)]), 128)
        assert out[2 * WIDTH + 10] == 0xFF

    def test_threshold_boundary_is_on(self):
        """A pixel equal to the threshold is lit."""
        assert render(pixel_image((0, 0), value=100), 100)[0] == 0x01
        assert render(pixel_image((0, 0), value=99), 100)[0] == 0x00

    def test_every_bit_matches_source(self):
        rng = random.Random(1306)
        image = bytes(rng.randrange(256) for _ in range(FRAME))
        threshold = 131
        out = render(image, threshold)

        for y in range(HEIGHT):
            page, bit = divmod(y, 8)
            for x in range(WIDTH):
                expected = image[y * WIDTH + x] >= threshold
                actual = bool(out[page * WIDTH + x] & (1 << bit))
                assert actual == expected, f"pixel ({x}, {y})"


# =============================================================================
# Purity and Validation Tests
# =============================================================================

class TestRenderContract:
    """Purity, input types and validation."""

    def test_deterministic_and_does_not_mutate(self):
        image = bytearray(random.Random(7).randrange(256) for _ in range(FRAME))
        original = bytes(image)
        assert render(image, 64) == render(image, 64)
        assert bytes(image) == original

    def test_accepts_memoryview(self):
        image = b"\xff" * FRAME
        assert render(memoryview(image), 1) == render(image, 1)

    @pytest.mark.parametrize("length", [0, FRAME - 1, FRAME + 1, BITMAP])
    def test_wrong_size(self, length):
        with pytest.raises(ImageSizeError) as excinfo:
            render(bytes(length), 128)
        assert excinfo.value.expected == FRAME
        assert excinfo.value.actual == length
        assert "128x64" in str(excinfo.value)

    def test_size_error_is_invalid_input(self):
        assert issubclass(ImageSizeError, InvalidInputError)

    @pytest.mark.parametrize("threshold", [-1, 256])
    def test_invalid_threshold(self, threshold):
        with pytest.raises(ValueError):
            render(bytes(FRAME), threshold)

    def test_custom_geometry(self):
        geometry = Geometry(width=16, height=16)
        out = render(b"\xff" * 256, 1, geometry)
        assert out == b"\xff" * 32


# =============================================================================
# Image Loading Tests
# =============================================================================

class TestLoadImage:
    """Tests for load_image() with Pillow."""

    def test_exact_size_grayscale(self, tmp_path):
        path = tmp_path / "frame.png"
        Image.new("L", (WIDTH, HEIGHT), 200).save(path)
        pixels = load_image(path)
        assert pixels == bytes([200]) * FRAME

    def test_resized_to_panel(self, tmp_path):
        path = tmp_path / "big.png"
        Image.new("L", (WIDTH * 2, HEIGHT * 2), 255).save(path)
        assert len(load_image(path)) == FRAME

    def test_color_converted(self, tmp_path):
        path = tmp_path / "white.png"
        Image.new("RGB", (WIDTH, HEIGHT), (255, 255, 255)).save(path)
        assert render(load_image(path), 255) == b"\xff" * BITMAP

    def test_custom_geometry(self, tmp_path):
        path = tmp_path / "small.png"
        Image.new("L", (10, 10), 0).save(path)
        assert len(load_image(str(path), Geometry(width=32, height=16))) == 512
