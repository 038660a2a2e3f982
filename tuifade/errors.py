"""
Exceptions raised by tuifade.
"""

from typing import Optional


class TuiFadeError(Exception):
    """Base class for all tuifade errors."""
    pass


class InvalidFormat(TuiFadeError, ValueError):
    """Raised when a colour string is not exactly '#' followed by 6 hex digits."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid hex colour {value!r}: expected #RRGGBB")


class CapabilityUnsupported(TuiFadeError):
    """
    Raised when the terminal does not support 24-bit colour.

    The unmodified input is kept on ``content`` so callers can still print it.
    """

    def __init__(self, content: str, colour_system: Optional[str] = None):
        self.content = content
        self.colour_system = colour_system
        super().__init__(
            f"fade only supports truecolor terminals (detected: {colour_system or 'no colour'})"
        )
