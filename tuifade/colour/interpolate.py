"""
Linear RGB interpolation between two colours.
"""

import math

from .conversions import Colour, RGBColour, hex_to_rgb


def clamp_factor(factor: float) -> float:
    """Clamp an interpolation factor to [0, 1]."""
    return max(0.0, min(1.0, float(factor)))


def interpolate_channel(bg: int, fg: int, bg_weight: float, fg_weight: float) -> int:
    """Blend one 8-bit channel, rounding half up (127.5 -> 128)."""
    return int(math.floor(bg * bg_weight + fg * fg_weight + 0.5))


def interpolate_colour(bg_hex: str, fg_hex: str, factor: float) -> Colour:
    """
    Interpolate from a background colour towards a foreground colour.

    Args:
        bg_hex: Colour returned at factor 0
        fg_hex: Colour returned at factor 1
        factor: Blend weight of the foreground, clamped to [0, 1]

    Returns:
        The blended Colour (hex, RGB and HSL)

    Raises:
        InvalidFormat: if either colour is not '#rrggbb'
    """
    background = hex_to_rgb(bg_hex)
    foreground = hex_to_rgb(fg_hex)

    fg_weight = clamp_factor(factor)
    bg_weight = 1 - fg_weight

    return Colour.from_rgb(RGBColour(
        interpolate_channel(background.r, foreground.r, bg_weight, fg_weight),
        interpolate_channel(background.g, foreground.g, bg_weight, fg_weight),
        interpolate_channel(background.b, foreground.b, bg_weight, fg_weight),
    ))


def interpolate(bg_hex: str, fg_hex: str, factor: float) -> str:
    """
    Interpolate two hex colours and return the result as '#rrggbb'.

    A factor of 1 gives the foreground unchanged, 0 gives the background.
    """
    return interpolate_colour(bg_hex, fg_hex, factor).hex
