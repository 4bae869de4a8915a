"""
NanoHat OLED - Configuration
============================

Display geometry and controller configuration. Configuration can come from:
- Default values (defined here, matching the NanoHat OLED module)
- Explicit keyword arguments
- Environment variables (DisplayConfig.from_env)

The constant bytes of the initialization sequence live here rather than in
the controller so that contrast and panel wiring can be tuned without
forking the driver.

Copyright (c) 2026 NanoHat OLED Contributors
"""

from dataclasses import dataclass, field
from typing import Final, Union
import os


# =============================================================================
# Module Defaults
# =============================================================================

# The width of the display, in pixels
OLED_WIDTH: Final[int] = 128

# The height of the display, in pixels
OLED_HEIGHT: Final[int] = 64

# The height of a single memory page, in pixel rows
OLED_PAGE_HEIGHT: Final[int] = 8

# The I2C slave address of the display
OLED_ADDRESS: Final[int] = 0x3C

# Bus the NanoHat is wired to on NanoPi boards
DEFAULT_BUS: Final[str] = "/dev/i2c-0"

# Reset value of the contrast register
DEFAULT_CONTRAST: Final[int] = 0x7F

# Largest payload written in one block transfer (plus the mode byte)
DEFAULT_CHUNK_SIZE: Final[int] = 31

# SMBus block writes carry at most 32 data bytes
SMBUS_BLOCK_MAX: Final[int] = 32


# =============================================================================
# Geometry
# =============================================================================

@dataclass(frozen=True)
class Geometry:
    """
    Pixel dimensions and RAM organization of the panel.

    The controller RAM is split into horizontal pages of page_height rows.
    Each byte written covers one pixel column of one page.

    Attributes:
        width: Width in pixels
        height: Height in pixels (multiple of page_height)
        page_height: Rows per memory page
    """

    width: int = OLED_WIDTH
    height: int = OLED_HEIGHT
    page_height: int = OLED_PAGE_HEIGHT

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0 or self.page_height <= 0:
            raise ValueError(
                f"Invalid geometry {self.width}x{self.height} "
                f"(page height {self.page_height})"
            )
        if self.height % self.page_height != 0:
            raise ValueError(
                f"Height {self.height} is not a multiple of the "
                f"page height {self.page_height}"
            )

    @property
    def pages(self) -> int:
        """Number of memory pages."""
        return self.height // self.page_height

    @property
    def frame_size(self) -> int:
        """Bytes in a full-frame grayscale image."""
        return self.width * self.height

    @property
    def bitmap_size(self) -> int:
        """Bytes in a full-frame page-packed bitmap."""
        return self.width * self.pages

    @property
    def text_columns(self) -> int:
        """Number of 8-pixel text cells per page."""
        return self.width // 8


DEFAULT_GEOMETRY: Final[Geometry] = Geometry()


# =============================================================================
# Display Configuration
# =============================================================================

@dataclass
class DisplayConfig:
    """
    Configuration for an OLED controller instance.

    Register values follow the SSD1306 datasheet. The defaults reproduce
    the NanoHat OLED power-on setup.

    Attributes:
        bus: I2C bus number or device path (default: "/dev/i2c-0")
        address: 7-bit slave address (default: 0x3C)
        geometry: Panel dimensions
        chunk_size: Max payload bytes per block write (default: 31)
        contrast: Contrast level 0-255 (default: 0x7F)
        multiplex_ratio: Multiplex ratio register (default: height - 1)
        display_offset: Vertical shift by COM (default: 0)
        clock_divider: Clock divide ratio / oscillator frequency (default: 0x80)
        precharge_period: Pre-charge period (default: 0xF1)
        com_pins: COM pins hardware configuration (default: 0x12)
        vcomh_deselect: VCOMH deselect level (default: 0x40)
        charge_pump: Charge pump setting, 0x14 enables it (default: 0x14)
        segment_remap: Map column 127 to SEG0 (default: True)
        com_scan_remapped: Scan from COM[N-1] to COM0 (default: True)
    """

    bus: Union[int, str] = DEFAULT_BUS
    address: int = OLED_ADDRESS
    geometry: Geometry = field(default_factory=Geometry)
    chunk_size: int = DEFAULT_CHUNK_SIZE

    # ═══════════════════════════════════════════════════════════════════════
    # INITIALIZATION REGISTER VALUES
    # ═══════════════════════════════════════════════════════════════════════

    contrast: int = DEFAULT_CONTRAST
    multiplex_ratio: int = -1  # resolved to height - 1
    display_offset: int = 0x00
    clock_divider: int = 0x80
    precharge_period: int = 0xF1
    com_pins: int = 0x12
    vcomh_deselect: int = 0x40
    charge_pump: int = 0x14
    segment_remap: bool = True
    com_scan_remapped: bool = True

    def __post_init__(self) -> None:
        if self.multiplex_ratio < 0:
            self.multiplex_ratio = self.geometry.height - 1
        if not 1 <= self.chunk_size <= SMBUS_BLOCK_MAX:
            raise ValueError(
                f"chunk_size must be between 1 and {SMBUS_BLOCK_MAX}, "
                f"got {self.chunk_size}"
            )
        for name in (
            "contrast", "multiplex_ratio", "display_offset", "clock_divider",
            "precharge_period", "com_pins", "vcomh_deselect", "charge_pump",
        ):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} must be a byte value, got {value}")

    # ═══════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls, **overrides) -> "DisplayConfig":
        """
        Create DisplayConfig from environment variables.

        Environment variables (all optional):
            NANOHAT_OLED_BUS: Bus number or device path
            NANOHAT_OLED_ADDRESS: Slave address (decimal or 0x-prefixed hex)
            NANOHAT_OLED_CONTRAST: Contrast level 0-255
            NANOHAT_OLED_CHUNK_SIZE: Block write payload size 1-32

        Keyword arguments take precedence over the environment.

        Returns:
            DisplayConfig with values from environment variables
        """
        values: dict = {}

        if bus := os.environ.get("NANOHAT_OLED_BUS"):
            values["bus"] = int(bus) if bus.isdigit() else bus

        for env_name, key in (
            ("NANOHAT_OLED_ADDRESS", "address"),
            ("NANOHAT_OLED_CONTRAST", "contrast"),
            ("NANOHAT_OLED_CHUNK_SIZE", "chunk_size"),
        ):
            if raw := os.environ.get(env_name):
                try:
                    values[key] = int(raw, 0)
                except ValueError:
                    pass  # Ignore invalid values

        values.update(overrides)
        return cls(**values)
