"""
Fade the colours of ANSI-styled text towards the terminal's own colours.

``fade_ansi`` is the pure core: every input (terminal colours, colour mode,
palette) is passed in. ``fade`` is the convenience entry point that looks the
terminal up first.
"""

import logging
from typing import Optional

from rich.terminal_theme import TerminalTheme

from .ansi import ColourMode, StyledSegment, parse_segments, render_segments
from .colour import InterpolationCache, get_cache, interpolate_colour, normalise_hex
from .colour.cache import Interpolator
from .errors import CapabilityUnsupported
from .terminal import TerminalProfile, detect_profile

logger = logging.getLogger(__name__)


def fade_segment(
    segment: StyledSegment,
    term_bg: str,
    term_fg: str,
    colour_mode: ColourMode,
    interpolation: float,
    interpolator: Interpolator = interpolate_colour,
) -> StyledSegment:
    """
    Fade one segment in place.

    The background is resolved first; the foreground is then blended against
    that resolved background. ``term_bg`` must already be lower-case.
    """
    segment.colour_mode = colour_mode
    effective_bg = term_bg

    if segment.bg is not None and segment.bg.hex != term_bg:
        segment.bg = interpolator(term_bg, segment.bg.hex, interpolation)
        effective_bg = segment.bg.hex

    # A segment without a foreground gets the faded terminal default
    target_fg = segment.fg.hex if segment.fg is not None else term_fg
    segment.fg = interpolator(effective_bg, target_fg, interpolation)

    return segment


def fade_segments(
    segments: list[StyledSegment],
    term_bg: str,
    term_fg: str,
    colour_mode: ColourMode,
    interpolation: float,
    interpolator: Interpolator = interpolate_colour,
) -> list[StyledSegment]:
    """Fade every segment in order. Raises InvalidFormat on a bad colour."""
    term_bg = normalise_hex(term_bg)
    term_fg = normalise_hex(term_fg)
    for segment in segments:
        fade_segment(segment, term_bg, term_fg, colour_mode, interpolation, interpolator)
    return segments


def fade_ansi(
    content: str,
    term_bg: str,
    term_fg: str,
    colour_mode: ColourMode,
    interpolation: float,
    *,
    palette: Optional[TerminalTheme] = None,
    interpolator: Interpolator = interpolate_colour,
) -> str:
    """
    Fade the background and foreground colours of an ANSI string.

    Args:
        content: Text containing SGR escape sequences
        term_bg: Terminal background colour ('#rrggbb')
        term_fg: Terminal foreground colour, used for text without a colour
        colour_mode: Encoding used for the output colours
        interpolation: 1 keeps the original colours, 0 fades fully into the
            background. Clamped to [0, 1].
        palette: Theme used to resolve standard colour codes to RGB
        interpolator: Function computing one blended colour (e.g. a cache)

    Returns:
        The re-encoded string. Text and non-colour styling are unchanged.

    Raises:
        InvalidFormat: if any colour involved is not '#rrggbb'. Nothing is
            returned in that case.
    """
    segments = parse_segments(content, palette)
    fade_segments(segments, term_bg, term_fg, colour_mode, interpolation, interpolator)
    logger.debug("faded %d segment(s) at %.3f", len(segments), interpolation)
    return render_segments(segments)


def fade(
    content: str,
    interpolation: float,
    *,
    profile: Optional[TerminalProfile] = None,
    cache: Optional[InterpolationCache] = None,
) -> str:
    """
    Fade an ANSI string against the current terminal's colours.

    Raises:
        CapabilityUnsupported: if the terminal lacks truecolor support. The
            original content is available on the exception's ``content``.
        InvalidFormat: if a colour is malformed
    """
    if profile is None:
        profile = detect_profile()

    if not profile.truecolor:
        raise CapabilityUnsupported(content, profile.colour_system)

    return fade_ansi(
        content,
        profile.background,
        profile.foreground,
        profile.colour_mode(),
        interpolation,
        interpolator=cache if cache is not None else get_cache(),
    )
