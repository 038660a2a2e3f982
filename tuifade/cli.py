"""
Command line front end: fade text read from arguments or stdin.

Examples:
    ls --color=always | tuifade -i 0.4
    tuifade --background '#1e1e2e' $'\\x1b[31mHello\\x1b[0m'
    tuifade --interpolate '#000000' '#ff0000' -i 0.25
"""

import argparse
import sys
from typing import Optional

from rich.console import Console

from .ansi import ColourMode
from .colour import interpolate
from .config import FadeSettings
from .errors import CapabilityUnsupported, InvalidFormat
from .fader import fade, fade_ansi
from .logging_setup import configure_logging, get_logger
from .terminal import detect_profile

EXIT_OK = 0
EXIT_INVALID_COLOUR = 1
EXIT_UNSUPPORTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tuifade",
        description="Fade the colours of ANSI-styled text towards the terminal's colours",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Text to fade (reads stdin when omitted)"
    )
    parser.add_argument(
        "-i", "--interpolation",
        type=float,
        help="1 keeps the original colours, 0 fades fully into the background"
    )
    parser.add_argument("--background", metavar="HEX", help="Terminal background colour (#rrggbb)")
    parser.add_argument("--foreground", metavar="HEX", help="Terminal foreground colour (#rrggbb)")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ColourMode],
        help="Colour encoding of the output"
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Fade even if the terminal does not report truecolor support"
    )
    parser.add_argument(
        "--interpolate",
        nargs=2,
        metavar=("BG", "FG"),
        help="Print a single interpolated colour and exit"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return parser


def run(args: argparse.Namespace, stdin=None, stdout=None, console: Optional[Console] = None) -> int:
    """Execute parsed arguments. Returns the process exit code."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    logger = get_logger()

    try:
        settings = FadeSettings.from_env().merged(
            interpolation=args.interpolation,
            background=args.background,
            foreground=args.foreground,
            colour_mode=ColourMode(args.mode) if args.mode else None,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_COLOUR

    try:
        if args.interpolate:
            bg, fg = args.interpolate
            stdout.write(interpolate(bg, fg, settings.interpolation) + "\n")
            return EXIT_OK

        content = args.text if args.text is not None else stdin.read()
        profile = detect_profile(console, settings)

        if args.force:
            mode = settings.colour_mode or profile.colour_mode()
            result = fade_ansi(content, profile.background, profile.foreground, mode, settings.interpolation)
        else:
            result = fade(content, settings.interpolation, profile=profile)
    except InvalidFormat as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_COLOUR
    except CapabilityUnsupported as e:
        logger.warning("%s; printing text unchanged (use --force to fade anyway)", e)
        stdout.write(e.content)
        return EXIT_UNSUPPORTED

    stdout.write(result)
    if args.text is not None:
        stdout.write("\n")
    return EXIT_OK


def main(argv=None) -> int:
    """Entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        return run(args)
    except KeyboardInterrupt:
        print("\n\nCancelled by user.", file=sys.stderr)
        return 130
