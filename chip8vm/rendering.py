"""CHIP-8 rendering utilities for visualization."""

from typing import Tuple

import numpy as np
from PIL import Image


def unpack_screen(screen, width: int, height: int) -> np.ndarray:
    """Unpack a packed screen buffer into a boolean pixel grid.

    Args:
        screen: Packed bytes, eight pixels per byte, most significant bit first
        width: Screen width in pixels
        height: Screen height in pixels

    Returns:
        Boolean array of shape (height, width)
    """
    if isinstance(screen, (bytes, bytearray)):
        packed = np.frombuffer(screen, dtype=np.uint8)
    else:
        packed = np.asarray(screen, dtype=np.uint8)
    if packed.size * 8 != width * height:
        raise ValueError(
            f"Screen buffer of {packed.size} bytes does not match {width}x{height} pixels"
        )
    return np.unpackbits(packed, bitorder="big").reshape(height, width).astype(np.bool_)


def chip8_display_to_rgb(
    pixels: np.ndarray,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 255, 0),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert a boolean pixel grid to an RGB array with optional upscaling.

    Args:
        pixels: Boolean array of shape (height, width), see ``unpack_screen``
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    pixels = np.asarray(pixels, dtype=np.bool_)
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)

    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbour upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "classic",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def screen_to_ascii(screen, width: int, height: int, on: str = "#", off: str = ".") -> str:
    """Render the screen buffer as text, one line per pixel row."""
    pixels = unpack_screen(screen, width, height)
    return "\n".join("".join(on if lit else off for lit in row) for row in pixels)


def save_screenshot(
    filename: str,
    screen,
    width: int,
    height: int,
    scale: int = 8,
    color_scheme: str = "classic",
) -> None:
    """Write the screen buffer to an image file."""
    on_color, off_color = create_color_scheme(color_scheme)
    rgb = chip8_display_to_rgb(unpack_screen(screen, width, height), scale, on_color, off_color)
    Image.fromarray(rgb).save(filename)
