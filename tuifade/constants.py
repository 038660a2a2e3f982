"""
Shared constants for tuifade.
"""

# Used when the terminal does not answer the colour query
DEFAULT_BACKGROUND = "#000000"
DEFAULT_FOREGROUND = "#ffffff"

DEFAULT_INTERPOLATION = 0.5

# OSC codes for querying the terminal's default colours
OSC_FOREGROUND = "10"
OSC_BACKGROUND = "11"

# Seconds to wait for the terminal to answer an OSC query
QUERY_TIMEOUT = 0.1

# Environment variables read by FadeSettings.from_env()
ENV_INTERPOLATION = "TUIFADE_INTERPOLATION"
ENV_BACKGROUND = "TUIFADE_BACKGROUND"
ENV_FOREGROUND = "TUIFADE_FOREGROUND"
ENV_COLOUR_MODE = "TUIFADE_COLOUR_MODE"
