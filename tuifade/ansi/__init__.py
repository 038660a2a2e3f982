"""
ANSI segment handling.

Parses styled text into segments and renders them back.
"""

from .segments import (
    ANSI_PALETTE,
    ColourMode,
    StyledSegment,
    parse_segments,
    render_segments,
)

__all__ = [
    "ANSI_PALETTE",
    "ColourMode",
    "StyledSegment",
    "parse_segments",
    "render_segments",
]
