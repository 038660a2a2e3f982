"""
Colour maths.

Hex/RGB/HSL conversion and linear RGB interpolation.
"""

from .conversions import (
    Colour,
    RGBColour,
    HSLColour,
    hex_to_rgb,
    rgb_to_hex,
    normalise_hex,
    rgb_to_hsl,
    hex_to_hsl,
)
from .interpolate import (
    clamp_factor,
    interpolate_channel,
    interpolate_colour,
    interpolate,
)
from .cache import InterpolationCache, get_cache, clear_cache

__all__ = [
    # Conversions
    "Colour",
    "RGBColour",
    "HSLColour",
    "hex_to_rgb",
    "rgb_to_hex",
    "normalise_hex",
    "rgb_to_hsl",
    "hex_to_hsl",
    # Interpolation
    "clamp_factor",
    "interpolate_channel",
    "interpolate_colour",
    "interpolate",
    # Cache
    "InterpolationCache",
    "get_cache",
    "clear_cache",
]
