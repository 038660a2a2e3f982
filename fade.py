#!/usr/bin/env python3
"""
tuifade - fade ANSI-styled text towards the terminal's colours.

Run from a checkout without installing: ./fade.py --help
"""

import sys

from tuifade.cli import main

if __name__ == "__main__":
    sys.exit(main())
