"""
Terminal capability and default colour detection.

The colour system comes from rich's Console. The default foreground and
background are asked of the terminal itself with OSC 10/11 queries on
/dev/tty, falling back to white on black when there is no answer.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

from rich.console import Console

from .ansi import ColourMode
from .config import FadeSettings
from .constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_FOREGROUND,
    OSC_BACKGROUND,
    OSC_FOREGROUND,
    QUERY_TIMEOUT,
)

# Platform-specific imports
if os.name == 'nt':
    termios = None
else:
    import fcntl
    import select
    import termios
    import tty

logger = logging.getLogger(__name__)

# Reply format: ESC ] 11 ; rgb:RRRR/GGGG/BBBB (BEL | ESC \). Components may
# have 1-4 hex digits.
OSC_REPLY = re.compile(rb"rgb:([0-9a-f]{1,4})/([0-9a-f]{1,4})/([0-9a-f]{1,4})", re.IGNORECASE)


@dataclass(frozen=True)
class TerminalProfile:
    """What the terminal can display and its default colours."""
    colour_system: Optional[str]  # rich name: "truecolor", "256", "standard", "windows" or None
    background: str = DEFAULT_BACKGROUND
    foreground: str = DEFAULT_FOREGROUND

    @property
    def truecolor(self) -> bool:
        return self.colour_system == "truecolor"

    def colour_mode(self) -> ColourMode:
        return ColourMode.from_color_system(self.colour_system)


def _scale_component(component: bytes) -> int:
    """Scale a 1-4 digit hex component to 8 bits."""
    value = int(component, 16)
    maximum = (1 << (4 * len(component))) - 1
    return round(value * 255 / maximum)


def parse_osc_reply(response: bytes) -> Optional[str]:
    """Extract '#rrggbb' from an OSC 10/11 reply, or None."""
    match = OSC_REPLY.search(response)
    if not match:
        return None
    r, g, b = (_scale_component(c) for c in match.groups())
    return f"#{r:02x}{g:02x}{b:02x}"


def _read_reply(fd: int, timeout: float) -> bytes:
    response = b""
    while select.select([fd], [], [], timeout)[0]:
        data = os.read(fd, 32)
        if not data:
            break
        response += data
        # Reply ends with BEL or ST
        if b"\a" in response or b"\x1b\\" in response:
            break
        if len(response) > 64:
            break
    return response


def query_terminal_colour(osc_code: str, default: str, timeout: float = QUERY_TIMEOUT) -> str:
    """
    Ask the terminal for one of its default colours.

    Args:
        osc_code: "10" for foreground, "11" for background
        default: Returned when the terminal can't be queried or doesn't answer
        timeout: Seconds to wait for each chunk of the reply

    Returns:
        The colour as '#rrggbb'
    """
    if termios is None:
        return default

    try:
        fd = os.open("/dev/tty", os.O_RDWR | os.O_NOCTTY)
    except OSError as e:
        logger.debug("no controlling terminal for OSC %s query: %s", osc_code, e)
        return default

    try:
        # Terminal modes are per device; serialize with other processes
        fcntl.flock(fd, fcntl.LOCK_EX)
        old_settings = termios.tcgetattr(fd)
    except (OSError, termios.error) as e:
        logger.debug("cannot prepare terminal for OSC %s query: %s", osc_code, e)
        os.close(fd)
        return default

    try:
        tty.setcbreak(fd)
        os.write(fd, f"\x1b]{osc_code};?\x1b\\".encode())
        response = _read_reply(fd, timeout)
    except (OSError, termios.error) as e:
        logger.debug("OSC %s query failed: %s", osc_code, e)
        response = b""
    finally:
        # TCSAFLUSH discards any unread reply bytes
        termios.tcsetattr(fd, termios.TCSAFLUSH, old_settings)
        fcntl.flock(fd, fcntl.LOCK_UN)
        os.close(fd)

    colour = parse_osc_reply(response)
    if colour is None:
        logger.debug("no usable reply to OSC %s query, using %s", osc_code, default)
        return default
    return colour


def detect_profile(console: Optional[Console] = None, settings: Optional[FadeSettings] = None) -> TerminalProfile:
    """
    Detect the current terminal's profile.

    Colours set in ``settings`` take precedence and skip the terminal query.
    A colour mode in ``settings`` replaces the detected colour system.
    """
    console = console or Console()
    settings = settings or FadeSettings()

    colour_system = console.color_system
    if settings.colour_mode is not None:
        colour_system = settings.colour_mode.value

    background = settings.background or query_terminal_colour(OSC_BACKGROUND, DEFAULT_BACKGROUND)
    foreground = settings.foreground or query_terminal_colour(OSC_FOREGROUND, DEFAULT_FOREGROUND)

    logger.debug("terminal profile: %s bg=%s fg=%s", colour_system, background, foreground)
    return TerminalProfile(colour_system=colour_system, background=background, foreground=foreground)
