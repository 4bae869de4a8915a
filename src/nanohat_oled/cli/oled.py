"""
nanohat-oled - Display Command-Line Interface
=============================================

Drives the NanoHat OLED from a shell.

Usage Examples
--------------
Initialize and blank the panel:
    $ nanohat-oled init

Print text on the fourth text row:
    $ nanohat-oled text "Hello, world!" --row 3

Show a picture (any format Pillow reads, scaled to 128x64):
    $ nanohat-oled image logo.png --threshold 100

Use another bus or a dimmer panel:
    $ nanohat-oled --bus /dev/i2c-1 --contrast 0x20 text "Night mode"

Defaults for --bus, --address and --contrast can also be set with the
NANOHAT_OLED_BUS, NANOHAT_OLED_ADDRESS and NANOHAT_OLED_CONTRAST
environment variables.

Exit Codes
----------
0 - Success
1 - Bus or device error
2 - Invalid arguments or input
3 - Internal error
"""

import logging
from pathlib import Path
from typing import Optional

import click
from PIL import UnidentifiedImageError

from nanohat_oled import __version__
from nanohat_oled.cli.errors import handle_cli_exception
from nanohat_oled.config import DisplayConfig
from nanohat_oled.display import Oled
from nanohat_oled.render import load_image

# Configure logging
logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the display configuration and verbosity.
    """

    def __init__(self) -> None:
        self.config: DisplayConfig = DisplayConfig()
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )

    def open_display(self, initialize: bool = True) -> Oled:
        """Open the display and optionally run its init sequence."""
        oled = Oled(config=self.config)
        if initialize:
            try:
                oled.init()
            except Exception:
                oled.close()
                raise
        return oled


pass_context = click.make_pass_decorator(Context, ensure=True)


def parse_byte(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[int]:
    """Click callback accepting decimal or 0x-prefixed byte values."""
    if value is None:
        return None
    try:
        number = int(value, 0)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a number")
    if not 0 <= number <= 0xFF:
        raise click.BadParameter(f"{value} is outside 0-255")
    return number


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "--bus",
    type=str,
    default=None,
    help="I2C bus number or device path (default: /dev/i2c-0)",
)
@click.option(
    "--address",
    type=str,
    default=None,
    callback=parse_byte,
    help="Display slave address (default: 0x3C)",
)
@click.option(
    "--contrast",
    type=str,
    default=None,
    callback=parse_byte,
    help="Contrast level 0-255 (default: 0x7F)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output (logs every bus write)",
)
@click.version_option(version=__version__, prog_name="nanohat-oled")
@pass_context
def main(
    ctx: Context,
    bus: Optional[str],
    address: Optional[int],
    contrast: Optional[int],
    verbose: bool,
) -> None:
    """
    Control a NanoHat OLED (SSD1306, 128x64) display over I2C.
    """
    ctx.verbose = verbose
    ctx.setup_logging()

    overrides: dict = {}
    if bus is not None:
        overrides["bus"] = int(bus) if bus.isdigit() else bus
    if address is not None:
        overrides["address"] = address
    if contrast is not None:
        overrides["contrast"] = contrast

    try:
        ctx.config = DisplayConfig.from_env(**overrides)
    except ValueError as e:
        raise click.BadParameter(str(e))


# =============================================================================
# Commands
# =============================================================================

@main.command()
@pass_context
def init(ctx: Context) -> None:
    """Initialize the display and clear it."""
    try:
        with ctx.open_display() as oled:
            logger.info("Display ready at address 0x%02X", oled.config.address)
    except Exception as e:
        handle_cli_exception(e, ctx.verbose)
    click.echo("Display initialized")


@main.command()
@click.option("--no-init", is_flag=True, help="Skip the init sequence")
@pass_context
def clear(ctx: Context, no_init: bool) -> None:
    """Blank the whole display."""
    try:
        with ctx.open_display(initialize=not no_init) as oled:
            if no_init:
                oled.clear()
    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


@main.command()
@click.argument("message")
@click.option("-c", "--column", type=click.IntRange(0, 15), default=0,
              help="Text cell column 0-15 (default: 0)")
@click.option("-r", "--row", type=click.IntRange(0, 7), default=0,
              help="Text row (page) 0-7 (default: 0)")
@click.option("--no-init", is_flag=True, help="Skip the init sequence (keep screen contents)")
@pass_context
def text(ctx: Context, message: str, column: int, row: int, no_init: bool) -> None:
    """
    Print MESSAGE at a text position.

    Only printable ASCII is supported. Text is not wrapped.
    """
    try:
        with ctx.open_display(initialize=not no_init) as oled:
            oled.set_cursor(column, row)
            oled.put_string(message)
    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-t", "--threshold", type=click.IntRange(0, 255), default=128,
              help="Grayscale cutoff; pixels at or above it are lit (default: 128)")
@click.option("--no-init", is_flag=True, help="Skip the init sequence")
@pass_context
def image(ctx: Context, path: Path, threshold: int, no_init: bool) -> None:
    """Show the image at PATH, scaled to the panel size."""
    try:
        pixels = load_image(path, ctx.config.geometry)
    except UnidentifiedImageError:
        raise click.BadParameter(f"'{path}' is not a readable image", param_hint="PATH")

    try:
        with ctx.open_display(initialize=not no_init) as oled:
            oled.draw_image(pixels, threshold)
    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


if __name__ == "__main__":
    main()
