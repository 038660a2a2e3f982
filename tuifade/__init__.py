"""
tuifade - fade the colours of ANSI-styled text.

Blends each styled run's background and foreground towards the terminal's
own colours, leaving text and non-colour styling untouched.

    from tuifade import fade, fade_ansi, interpolate, ColourMode

    fade("\\x1b[31mRed\\x1b[0m", 0.5)                  # uses the live terminal
    fade_ansi(text, "#000000", "#ffffff", ColourMode.TRUECOLOR, 0.5)
    interpolate("#ff0000", "#0000ff", 0.5)            # '#800080'
"""

from .ansi import ANSI_PALETTE, ColourMode, StyledSegment, parse_segments, render_segments
from .colour import (
    Colour,
    RGBColour,
    HSLColour,
    InterpolationCache,
    hex_to_rgb,
    rgb_to_hex,
    hex_to_hsl,
    interpolate,
    interpolate_colour,
)
from .config import FadeSettings
from .errors import TuiFadeError, InvalidFormat, CapabilityUnsupported
from .fader import fade, fade_ansi, fade_segments
from .terminal import TerminalProfile, detect_profile


def _get_version():
    """Read version from VERSION file."""
    from pathlib import Path
    version_file = Path(__file__).parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    return "0.0.0"


__version__ = _get_version()

__all__ = [
    # Fading
    "fade",
    "fade_ansi",
    "fade_segments",
    # Colours
    "Colour",
    "RGBColour",
    "HSLColour",
    "InterpolationCache",
    "hex_to_rgb",
    "rgb_to_hex",
    "hex_to_hsl",
    "interpolate",
    "interpolate_colour",
    # Segments
    "ANSI_PALETTE",
    "ColourMode",
    "StyledSegment",
    "parse_segments",
    "render_segments",
    # Terminal / config
    "TerminalProfile",
    "detect_profile",
    "FadeSettings",
    # Errors
    "TuiFadeError",
    "InvalidFormat",
    "CapabilityUnsupported",
]
