"""
Styled segments of an ANSI string.

Parsing and serialization are delegated to rich: ``AnsiDecoder`` tracks the
SGR state and ``Style.render`` re-encodes a segment for a given colour system.
This module only converts between rich's styles and tuifade's segments, which
keep their colours as separate ``Colour`` descriptors so they can be faded.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from rich.ansi import AnsiDecoder
from rich.color import Color, ColorSystem, ColorType
from rich.style import Style
from rich.terminal_theme import TerminalTheme

from ..colour import Colour

# Line breaks and the control characters rich strips from text (BEL, BS, VT,
# FF) are split out before decoding and emitted bare. AnsiDecoder also drops
# everything before a carriage return.
CONTROL_CHARS = re.compile(r"(\r\n|[\r\n\x07\x08\x0b\x0c])")

# OSC sequences are matched ahead of control characters so a BEL terminating
# one (e.g. an OSC 8 hyperlink) is not taken for text.
_CONTROL_OR_OSC = re.compile(
    r"(?P<osc>\x1b\][^\x07\x1b]*(?:\x07|\x1b\\))|(?P<control>\r\n|[\r\n\x07\x08\x0b\x0c])"
)

# Palette used to resolve the 16 standard colours (SGR 30-37, 90-97, ...)
# to RGB. Normal colours are the full-intensity primaries.
ANSI_PALETTE = TerminalTheme(
    (0, 0, 0),
    (255, 255, 255),
    [
        (0, 0, 0),
        (255, 0, 0),
        (0, 255, 0),
        (255, 255, 0),
        (0, 0, 255),
        (255, 0, 255),
        (0, 255, 255),
        (192, 192, 192),
    ],
    [
        (128, 128, 128),
        (255, 85, 85),
        (85, 255, 85),
        (255, 255, 85),
        (85, 85, 255),
        (255, 85, 255),
        (85, 255, 255),
        (255, 255, 255),
    ],
)


class ColourMode(Enum):
    """Fidelity used when re-encoding colours."""
    TRUECOLOR = "truecolor"
    EIGHT_BIT = "256"
    DEFAULT = "standard"

    @property
    def color_system(self) -> ColorSystem:
        return _COLOR_SYSTEMS[self]

    @classmethod
    def from_color_system(cls, color_system) -> "ColourMode":
        """Map a rich ColorSystem (or its name, e.g. Console.color_system) to a mode."""
        if isinstance(color_system, ColorSystem):
            color_system = color_system.name.lower()
        if color_system == "truecolor":
            return cls.TRUECOLOR
        if color_system in ("256", "eight_bit"):
            return cls.EIGHT_BIT
        return cls.DEFAULT


_COLOR_SYSTEMS = {
    ColourMode.TRUECOLOR: ColorSystem.TRUECOLOR,
    ColourMode.EIGHT_BIT: ColorSystem.EIGHT_BIT,
    ColourMode.DEFAULT: ColorSystem.STANDARD,
}


@dataclass
class StyledSegment:
    """A run of text sharing one style."""
    text: str
    style: Style = field(default_factory=Style.null)  # non-colour attributes only
    fg: Optional[Colour] = None
    bg: Optional[Colour] = None
    colour_mode: ColourMode = ColourMode.DEFAULT
    offset: int = 0

    @property
    def length(self) -> int:
        return len(self.text)

    def render(self) -> str:
        """
        Encode this segment as ANSI, using its colour mode.

        Each line is wrapped in its own escape sequence and reset, so line
        breaks and other control characters are emitted bare. A hyperlink is
        written as a plain OSC 8 sequence without an id.
        """
        color_system = self.colour_mode.color_system
        # rich caches rendered codes per Style object: colours are reduced
        # to the target system before they reach a Style.
        colours = Style(
            color=_downgrade(self.fg, color_system),
            bgcolor=_downgrade(self.bg, color_system),
        )
        link = self.style.link
        style = (self.style.update_link(None) if link else self.style) + colours

        parts = []
        for i, part in enumerate(CONTROL_CHARS.split(self.text)):
            if i % 2 or not part:
                parts.append(part)
                continue
            rendered = style.render(part, color_system=color_system)
            if link:
                rendered = f"\x1b]8;;{link}\x1b\\{rendered}\x1b]8;;\x1b\\"
            parts.append(rendered)
        return "".join(parts)


def _downgrade(colour: Optional[Colour], color_system: ColorSystem) -> Optional[Color]:
    if colour is None:
        return None
    return Color.from_rgb(*colour.rgb).downgrade(color_system)


def _resolve_colour(color: Optional[Color], palette: TerminalTheme, foreground: bool) -> Optional[Colour]:
    # SGR 39/49 mean "terminal default", which is not a declared colour
    if color is None or color.type == ColorType.DEFAULT:
        return None
    return Colour.from_rgb(color.get_truecolor(palette, foreground=foreground))


def _infer_mode(style: Style) -> ColourMode:
    types = {c.type for c in (style.color, style.bgcolor) if c is not None}
    if ColorType.TRUECOLOR in types:
        return ColourMode.TRUECOLOR
    if ColorType.EIGHT_BIT in types:
        return ColourMode.EIGHT_BIT
    return ColourMode.DEFAULT


def _segment(text: str, style: Optional[Style], offset: int, palette: TerminalTheme) -> StyledSegment:
    if not style:
        return StyledSegment(text=text, offset=offset)
    return StyledSegment(
        text=text,
        style=style.without_color,
        fg=_resolve_colour(style.color, palette, foreground=True),
        bg=_resolve_colour(style.bgcolor, palette, foreground=False),
        colour_mode=_infer_mode(style),
        offset=offset,
    )


def _split_controls(content: str) -> Iterable[tuple[str, bool]]:
    """Yield (chunk, is_control) pairs covering content in order."""
    pending = []
    position = 0
    for match in _CONTROL_OR_OSC.finditer(content):
        pending.append(content[position:match.start()])
        position = match.end()
        osc = match.group("osc")
        if osc is not None:
            # AnsiDecoder only understands the ESC \ terminator
            if osc.endswith("\x07"):
                osc = osc[:-1] + "\x1b\\"
            pending.append(osc)
            continue
        chunk = "".join(pending)
        if chunk:
            yield chunk, False
        pending = []
        yield match.group("control"), True
    pending.append(content[position:])
    chunk = "".join(pending)
    if chunk:
        yield chunk, False


def _decode_runs(content: str) -> Iterable[tuple[str, Optional[Style]]]:
    """Yield (text, style) runs in order. Style is None for unstyled text."""
    decoder = AnsiDecoder()
    for chunk, is_control in _split_controls(content):
        if is_control:
            # Carries whatever style is active
            yield chunk, decoder.style or None
            continue

        line = decoder.decode_line(chunk)
        plain = line.plain
        position = 0
        for span in line.spans:
            if span.start > position:
                yield plain[position:span.start], None
            yield plain[span.start:span.end], span.style
            position = span.end
        if position < len(plain):
            yield plain[position:], None


def parse_segments(content: str, palette: Optional[TerminalTheme] = None) -> list[StyledSegment]:
    """
    Split an ANSI string into styled segments.

    Adjacent runs with an identical style are joined; text is otherwise kept
    exactly, including line breaks. Standard and 256-colour codes are
    resolved to RGB through ``palette`` (ANSI_PALETTE by default).
    """
    palette = palette or ANSI_PALETTE
    segments: list[StyledSegment] = []
    styles: list[Optional[Style]] = []
    offset = 0

    for text, style in _decode_runs(content):
        if segments and styles[-1] == style:
            segments[-1].text += text
        else:
            segments.append(_segment(text, style, offset, palette))
            styles.append(style)
        offset += len(text)

    return segments


def render_segments(segments: Iterable[StyledSegment]) -> str:
    """Serialize segments back into one ANSI string."""
    return "".join(segment.render() for segment in segments)
