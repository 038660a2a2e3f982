"""
Colour representations and conversions.

A colour travels through tuifade in three equivalent forms: a '#rrggbb' hex
string, an RGB triple and an HSL triple. ``Colour`` keeps all three together.
"""

import colorsys
import re
from dataclasses import dataclass
from typing import NamedTuple

from ..errors import InvalidFormat

HEX_PATTERN = re.compile(r"#[0-9a-fA-F]{6}")


class RGBColour(NamedTuple):
    r: int
    g: int
    b: int


class HSLColour(NamedTuple):
    h: float  # degrees, [0, 360)
    s: float  # percent
    l: float  # percent


def hex_to_rgb(hex_colour: str) -> RGBColour:
    """Parse '#rrggbb' (any case). Raises InvalidFormat for anything else."""
    if not isinstance(hex_colour, str) or not HEX_PATTERN.fullmatch(hex_colour):
        raise InvalidFormat(hex_colour)
    return RGBColour(
        int(hex_colour[1:3], 16),
        int(hex_colour[3:5], 16),
        int(hex_colour[5:7], 16),
    )


def rgb_to_hex(rgb: tuple) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def normalise_hex(hex_colour: str) -> str:
    """Validate a hex colour and return it lower-cased."""
    return rgb_to_hex(hex_to_rgb(hex_colour))


def rgb_to_hsl(rgb: tuple) -> HSLColour:
    """
    Derive HSL from an RGB triple.

    Channels are scaled to [0, 1] before the transform; hue comes back in
    degrees and saturation/lightness in percent.
    """
    r, g, b = (channel / 255.0 for channel in rgb)
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return HSLColour((h * 360.0) % 360.0, s * 100.0, l * 100.0)


def hex_to_hsl(hex_colour: str) -> HSLColour:
    return rgb_to_hsl(hex_to_rgb(hex_colour))


@dataclass(frozen=True)
class Colour:
    """A colour descriptor: hex, RGB and HSL views of the same value."""
    hex: str
    rgb: RGBColour
    hsl: HSLColour

    @classmethod
    def from_rgb(cls, rgb: tuple) -> "Colour":
        rgb = RGBColour(*rgb)
        return cls(hex=rgb_to_hex(rgb), rgb=rgb, hsl=rgb_to_hsl(rgb))

    @classmethod
    def from_hex(cls, hex_colour: str) -> "Colour":
        return cls.from_rgb(hex_to_rgb(hex_colour))

    def __str__(self) -> str:
        return self.hex
