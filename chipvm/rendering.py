"""CHIP-8 rendering utilities for visualization."""

from typing import Tuple

import jax.numpy as jnp
import numpy as np
from PIL import Image

Color = Tuple[int, int, int]

COLOR_SCHEMES = {
    "original": ((143, 145, 133), (17, 29, 43)),  # Grey on navy
    "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
    "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
    "white": ((255, 255, 255), (0, 0, 0)),  # White on black
    "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
}


def display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Color = (0, 255, 0),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Convert a boolean CHIP-8 display to an RGB array with optional upscaling.

    Args:
        display: Boolean array of shape (64, 32), indexed [x, y]
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    # (64 width, 32 height) -> image rows: (32 height, 64 width)
    pixels = np.array(display, dtype=np.bool_).T
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(scheme: str = "original") -> Tuple[Color, Color]:
    """Get a predefined color scheme as (on_color, off_color).

    Raises:
        ValueError: if the scheme name is unknown
    """
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )
    return COLOR_SCHEMES[scheme]


def render(display: jnp.ndarray, scale: int = 8, color_scheme: str = "original") -> np.ndarray:
    """Render a display with a named color scheme."""
    on_color, off_color = create_color_scheme(color_scheme)
    return display_to_rgb(display, scale, on_color, off_color)


def save_screenshot(display: jnp.ndarray, filename: str, scale: int = 8, color_scheme: str = "original") -> None:
    """Save a display as an image file (format from the file extension)."""
    Image.fromarray(render(display, scale, color_scheme)).save(filename)
