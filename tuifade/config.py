"""
Configuration for tuifade.

There is no config file. Settings come from environment variables, with
command-line flags layered on top:
- TUIFADE_INTERPOLATION: default fade factor (0..1)
- TUIFADE_BACKGROUND / TUIFADE_FOREGROUND: skip the terminal colour query
- TUIFADE_COLOUR_MODE: truecolor, 256 or standard
"""

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .ansi import ColourMode
from .colour import normalise_hex
from .constants import (
    DEFAULT_INTERPOLATION,
    ENV_BACKGROUND,
    ENV_COLOUR_MODE,
    ENV_FOREGROUND,
    ENV_INTERPOLATION,
)


@dataclass
class FadeSettings:
    """User-facing fade options."""
    interpolation: float = DEFAULT_INTERPOLATION
    background: Optional[str] = None  # overrides the detected terminal background
    foreground: Optional[str] = None  # overrides the detected terminal foreground
    colour_mode: Optional[ColourMode] = None

    def __post_init__(self):
        self.interpolation = float(self.interpolation)
        if self.background is not None:
            self.background = normalise_hex(self.background)
        if self.foreground is not None:
            self.foreground = normalise_hex(self.foreground)
        if self.colour_mode is not None and not isinstance(self.colour_mode, ColourMode):
            self.colour_mode = ColourMode(self.colour_mode)

    def to_dict(self) -> dict:
        d = {"interpolation": self.interpolation}
        if self.background:
            d["background"] = self.background
        if self.foreground:
            d["foreground"] = self.foreground
        if self.colour_mode:
            d["colour_mode"] = self.colour_mode.value
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "FadeSettings":
        return cls(
            interpolation=data.get("interpolation", DEFAULT_INTERPOLATION),
            background=data.get("background"),
            foreground=data.get("foreground"),
            colour_mode=data.get("colour_mode"),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FadeSettings":
        """
        Build settings from environment variables.

        Raises:
            ValueError: if a variable is set to something unusable
                (InvalidFormat for colours)
        """
        environ = os.environ if environ is None else environ
        data = {}

        raw = environ.get(ENV_INTERPOLATION, "").strip()
        if raw:
            try:
                data["interpolation"] = float(raw)
            except ValueError:
                raise ValueError(f"{ENV_INTERPOLATION} must be a number, got {raw!r}") from None

        for key, var in (("background", ENV_BACKGROUND), ("foreground", ENV_FOREGROUND)):
            value = environ.get(var, "").strip()
            if value:
                data[key] = value

        mode = environ.get(ENV_COLOUR_MODE, "").strip().lower()
        if mode:
            try:
                data["colour_mode"] = ColourMode(mode)
            except ValueError:
                choices = ", ".join(m.value for m in ColourMode)
                raise ValueError(f"{ENV_COLOUR_MODE} must be one of {choices}, got {mode!r}") from None

        return cls.from_dict(data)

    def merged(self, **overrides) -> "FadeSettings":
        """Return a copy with every non-None override applied."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data.update({k: v for k, v in overrides.items() if v is not None})
        return FadeSettings(**data)
